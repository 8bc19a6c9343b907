from .fog_of_war import FogMemory, UNSEEN_GLYPH

__all__ = ["FogMemory", "UNSEEN_GLYPH"]
