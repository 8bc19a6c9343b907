from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, List, Optional, Sequence, Tuple

from ..rng import RandomSource

logger = logging.getLogger(__name__)

Point = Tuple[int, int]

IMMUTABLE_HARDNESS = 255
OPEN_HARDNESS = 0
EROSION_STEP = 85

# Scan order used everywhere a cell's 8 neighbours are visited.
NEIGHBOR_OFFSETS: Tuple[Point, ...] = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0), (1, 0),
    (-1, 1), (0, 1), (1, 1),
)


class FloorKind(IntEnum):
    VOID = 0
    OPEN = 1
    CORRIDOR = 2
    STAIR_UP = 3
    STAIR_DOWN = 4

    @property
    def glyph(self) -> str:
        return _GLYPHS[self]

    @property
    def walkable(self) -> bool:
        return self is not FloorKind.VOID


_GLYPHS = {
    FloorKind.VOID: " ",
    FloorKind.OPEN: ".",
    FloorKind.CORRIDOR: "#",
    FloorKind.STAIR_UP: "<",
    FloorKind.STAIR_DOWN: ">",
}


@dataclass(frozen=True)
class Room:
    x: int
    y: int
    w: int
    h: int

    def center(self) -> Point:
        return (self.x + self.w // 2, self.y + self.h // 2)

    def cells(self) -> Iterator[Point]:
        for y in range(self.y, self.y + self.h):
            for x in range(self.x, self.x + self.w):
                yield (x, y)

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.w and self.y <= y < self.y + self.h

    def intersects(self, other: "Room") -> bool:
        return not (
            self.x + self.w <= other.x
            or other.x + other.w <= self.x
            or self.y + self.h <= other.y
            or other.y + other.h <= self.y
        )


class TerrainModel:
    """
    Hardness grid plus the floor classification derived from it.

    - hardness 255: immutable boundary rock, never erodible or passable
    - hardness 0: open (walkable) cell
    - hardness 1..254: erodible rock

    Coordinates are (x, y) with (0,0) at top-left; both grids are stored
    row-major as grid[y][x].
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("TerrainModel width/height must be > 0")
        self.width = width
        self.height = height
        self.hardness: List[List[int]] = [[IMMUTABLE_HARDNESS] * width for _ in range(height)]
        self.kinds: List[List[FloorKind]] = [[FloorKind.VOID] * width for _ in range(height)]

    # ---------- queries ----------

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_perimeter(self, x: int, y: int) -> bool:
        return x == 0 or y == 0 or x == self.width - 1 or y == self.height - 1

    def _check(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell ({x},{y}) out of bounds for {self.width}x{self.height} terrain")

    def hardness_at(self, x: int, y: int) -> int:
        self._check(x, y)
        return self.hardness[y][x]

    def kind_at(self, x: int, y: int) -> FloorKind:
        self._check(x, y)
        return self.kinds[y][x]

    def is_immutable(self, x: int, y: int) -> bool:
        return self.hardness_at(x, y) == IMMUTABLE_HARDNESS

    def is_erodible(self, x: int, y: int) -> bool:
        return OPEN_HARDNESS < self.hardness_at(x, y) < IMMUTABLE_HARDNESS

    def is_walkable(self, x: int, y: int) -> bool:
        """Open floor, corridor or either stair."""
        return self.in_bounds(x, y) and self.kinds[y][x].walkable

    def neighbors8(self, x: int, y: int) -> Iterator[Point]:
        for dx, dy in NEIGHBOR_OFFSETS:
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                yield nx, ny

    def cells_of_kind(self, *kinds: FloorKind) -> List[Point]:
        wanted = set(kinds)
        return [
            (x, y)
            for y in range(self.height)
            for x in range(self.width)
            if self.kinds[y][x] in wanted
        ]

    def glyph_at(self, x: int, y: int) -> str:
        return self.kind_at(x, y).glyph

    # ---------- mutation ----------

    def set_hardness(self, x: int, y: int, value: int) -> None:
        self._check(x, y)
        if not (0 <= value <= IMMUTABLE_HARDNESS):
            raise ValueError(f"hardness must be in [0, 255], got {value}")
        self.hardness[y][x] = value

    def set_kind(self, x: int, y: int, kind: FloorKind) -> None:
        self._check(x, y)
        self.kinds[y][x] = kind

    def fill_random_rock(self, rng: RandomSource) -> None:
        """Reset to a bordered grid: perimeter 255, interior uniform in [1, 254], all void."""
        for y in range(self.height):
            for x in range(self.width):
                if self.is_perimeter(x, y):
                    self.hardness[y][x] = IMMUTABLE_HARDNESS
                else:
                    self.hardness[y][x] = rng.randint(1, IMMUTABLE_HARDNESS - 1)
                self.kinds[y][x] = FloorKind.VOID

    def carve(self, x: int, y: int, kind: FloorKind) -> None:
        """Open a cell: hardness 0 and the given floor kind. Perimeter cells are refused."""
        self._check(x, y)
        if self.is_perimeter(x, y):
            raise ValueError(f"Cannot carve perimeter cell ({x},{y})")
        self.hardness[y][x] = OPEN_HARDNESS
        self.kinds[y][x] = kind

    def erode(self, x: int, y: int, amount: int = EROSION_STEP) -> int:
        """Lower an erodible cell's hardness by `amount`, clamped at 0.

        A cell reaching 0 becomes corridor. Immutable and already-open cells
        are left untouched. Returns the resulting hardness.
        """
        h = self.hardness_at(x, y)
        if not (OPEN_HARDNESS < h < IMMUTABLE_HARDNESS):
            return h
        h = max(OPEN_HARDNESS, h - amount)
        self.hardness[y][x] = h
        if h == OPEN_HARDNESS and not self.kinds[y][x].walkable:
            self.kinds[y][x] = FloorKind.CORRIDOR
            logger.debug("Cell (%d,%d) eroded through to corridor", x, y)
        return h

    def derive_kinds(
        self,
        rooms: Sequence[Room],
        up_stairs: Optional[Point],
        down_stairs: Optional[Point],
    ) -> None:
        """Rebuild the floor classification from hardness, rooms and stairs.

        Depends only on those inputs, so deriving twice gives the same result.
        """
        for y in range(self.height):
            for x in range(self.width):
                self.kinds[y][x] = FloorKind.CORRIDOR if self.hardness[y][x] == OPEN_HARDNESS else FloorKind.VOID
        for room in rooms:
            for x, y in room.cells():
                if self.in_bounds(x, y):
                    self.kinds[y][x] = FloorKind.OPEN
        if up_stairs is not None:
            self.set_kind(*up_stairs, FloorKind.STAIR_UP)
        if down_stairs is not None:
            self.set_kind(*down_stairs, FloorKind.STAIR_DOWN)

    # ---------- helpers ----------

    def perimeter_intact(self) -> bool:
        return all(
            self.hardness[y][x] == IMMUTABLE_HARDNESS
            for y in range(self.height)
            for x in range(self.width)
            if self.is_perimeter(x, y)
        )

    def to_ascii(self) -> List[str]:
        return ["".join(k.glyph for k in row) for row in self.kinds]

    @classmethod
    def from_ascii(cls, rows: Sequence[str], rock_hardness: int = 100) -> "TerrainModel":
        """
        Build a terrain from glyph rows for tests/tools.
        - ' ' is rock with `rock_hardness` (255 on the perimeter)
        - '.', '#', '<', '>' are open cells of the matching kind
        - digits '1'-'9' are rock of hardness digit*28 (quick erodibility fixtures)
        """
        if not rows:
            raise ValueError("rows must not be empty")
        height = len(rows)
        width = len(rows[0])
        for r in rows:
            if len(r) != width:
                raise ValueError("All rows must be same width")
        lookup = {g: k for k, g in _GLYPHS.items()}
        terrain = cls(width, height)
        for y, row in enumerate(rows):
            for x, ch in enumerate(row):
                if terrain.is_perimeter(x, y):
                    terrain.hardness[y][x] = IMMUTABLE_HARDNESS
                    terrain.kinds[y][x] = FloorKind.VOID
                elif ch.isdigit() and ch != "0":
                    terrain.hardness[y][x] = int(ch) * 28
                elif ch == " ":
                    terrain.hardness[y][x] = rock_hardness
                elif ch in lookup:
                    terrain.hardness[y][x] = OPEN_HARDNESS
                    terrain.kinds[y][x] = lookup[ch]
                else:
                    raise ValueError(f"Unknown terrain glyph {ch!r}")
        return terrain

    def __repr__(self) -> str:
        return f"TerrainModel({self.width}x{self.height})"
