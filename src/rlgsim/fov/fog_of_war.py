from __future__ import annotations

import logging
from typing import List, Tuple

from ..dungeon.terrain import TerrainModel

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]

UNSEEN_GLYPH = " "


class FogMemory:
    """
    The PC's remembered copy of the terrain.

    Responsibilities:
    - Decide which cells are lit: Euclidean distance <= radius from the PC.
    - Copy lit cells' terrain glyphs into memory on every update.
    - Keep the last remembered glyph for everything outside the light radius.

    Only terrain is remembered, never actors; renderers show live glyphs for
    lit cells and `remembered()` for the rest.
    """

    def __init__(self, width: int, height: int, radius: int = 3) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("FogMemory width/height must be > 0")
        if radius < 0:
            raise ValueError("radius must be >= 0")
        self.width = width
        self.height = height
        self.radius = radius
        self._memory: List[List[str]] = [[UNSEEN_GLYPH] * width for _ in range(height)]

    def is_lit(self, origin: Coord, x: int, y: int) -> bool:
        dx = x - origin[0]
        dy = y - origin[1]
        return dx * dx + dy * dy <= self.radius * self.radius

    def update(self, terrain: TerrainModel, origin: Coord) -> int:
        """Copy every lit cell around `origin` from live terrain. Returns cells refreshed."""
        ox, oy = origin
        if not terrain.in_bounds(ox, oy):
            raise ValueError("origin out of bounds")
        r = self.radius
        refreshed = 0
        for y in range(max(0, oy - r), min(self.height, oy + r + 1)):
            for x in range(max(0, ox - r), min(self.width, ox + r + 1)):
                if self.is_lit(origin, x, y):
                    self._memory[y][x] = terrain.glyph_at(x, y)
                    refreshed += 1
        logger.debug("Fog memory updated at %s (%d cells)", origin, refreshed)
        return refreshed

    def remembered(self, x: int, y: int) -> str:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError("Cell out of bounds")
        return self._memory[y][x]

    def reset(self) -> None:
        """Forget everything (e.g., a freshly loaded PC)."""
        for row in self._memory:
            for x in range(self.width):
                row[x] = UNSEEN_GLYPH

    def rows(self) -> List[str]:
        return ["".join(row) for row in self._memory]
