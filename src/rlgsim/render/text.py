from __future__ import annotations

import sys
from typing import TYPE_CHECKING, List, Optional, Sequence, TextIO

from ..actors.characters import describe_bearing

if TYPE_CHECKING:  # pragma: no cover
    from ..engine.simulation import Simulation

CURSOR_GLYPH = "*"
MONSTER_LIST_TITLE = "--- Monster List ---"


def paginate(lines: Sequence[str], page_size: int) -> List[List[str]]:
    """Split lines into pages of at most `page_size`. Always returns at least one page."""
    if page_size <= 0:
        raise ValueError("page_size must be > 0")
    pages = [list(lines[i : i + page_size]) for i in range(0, len(lines), page_size)]
    return pages or [[]]


class TextRenderer:
    """Plain-text renderer writing the visible map to a stream.

    Cells within the PC's light radius show live terrain and actors; the rest
    show the PC's remembered terrain. With fog disabled, or while the
    teleport cursor is up, everything is shown live.
    """

    def __init__(self, stream: Optional[TextIO] = None, page_size: int = 20) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.page_size = page_size

    def render(self, sim: "Simulation") -> List[str]:
        pc = sim.pc
        terrain = sim.terrain
        show_all = not pc.fog_enabled or pc.teleporting
        rows: List[str] = []
        for y in range(terrain.height):
            chars = []
            for x in range(terrain.width):
                if (x, y) == pc.pos:
                    chars.append(pc.symbol)
                elif pc.teleporting and pc.cursor == (x, y):
                    chars.append(CURSOR_GLYPH)
                elif show_all or pc.fog.is_lit(pc.pos, x, y):
                    occupant = sim.character_at(x, y)
                    chars.append(occupant.symbol if occupant is not None else terrain.glyph_at(x, y))
                else:
                    chars.append(pc.fog.remembered(x, y))
            rows.append("".join(chars))
        return rows

    def status_line(self, sim: "Simulation") -> str:
        pc = sim.pc
        if pc.teleporting:
            mode = "TELEPORT mode: move '*', 'g' teleports, 'r' random, ESC cancels"
        else:
            mode = "fog on" if pc.fog_enabled else "fog off"
        parts = [
            f"Level {sim.depth}",
            f"t={sim.time}",
            f"monsters={sim.live_monster_count()}",
            mode,
        ]
        if sim.message:
            parts.append(sim.message)
        return " | ".join(parts)

    def draw(self, sim: "Simulation") -> None:
        self.stream.write(self.status_line(sim) + "\n")
        for row in self.render(sim):
            self.stream.write(row + "\n")
        self.stream.flush()
        sim.message = ""

    def show_message(self, text: str) -> None:
        self.stream.write(text + "\n")
        self.stream.flush()

    def monster_list(self, sim: "Simulation") -> List[str]:
        """One line per living monster, e.g. 'c: 3 north, 2 east'."""
        origin = sim.pc.pos
        return [
            f"{m.symbol}: {describe_bearing(origin, m.pos)}"
            for m in sim.monsters
            if m.alive
        ]

    def show_monster_list(self, sim: "Simulation") -> None:
        pages = paginate(self.monster_list(sim), self.page_size)
        for number, page in enumerate(pages, start=1):
            self.stream.write(f"{MONSTER_LIST_TITLE} ({number}/{len(pages)})\n")
            for line in page:
                self.stream.write(line + "\n")
        self.stream.flush()


__all__ = ["CURSOR_GLYPH", "TextRenderer", "paginate"]
