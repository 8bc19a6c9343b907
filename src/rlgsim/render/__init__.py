from .text import CURSOR_GLYPH, TextRenderer, paginate

__all__ = ["CURSOR_GLYPH", "TextRenderer", "paginate"]
