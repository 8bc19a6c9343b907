from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Optional

from ..core.heap import MinHeap
from .terrain import EROSION_STEP, IMMUTABLE_HARDNESS, OPEN_HARDNESS, Point, TerrainModel

logger = logging.getLogger(__name__)

UNREACHED = 2**31 - 1


class PathMode(str, Enum):
    TUNNELING = "tunneling"
    NON_TUNNELING = "non_tunneling"


class _Node(NamedTuple):
    dist: int
    x: int
    y: int


def step_cost(hardness: int, mode: PathMode) -> Optional[int]:
    """Cost of stepping onto a cell of the given hardness, or None if impassable."""
    if mode is PathMode.NON_TUNNELING:
        return 1 if hardness == OPEN_HARDNESS else None
    if hardness == IMMUTABLE_HARDNESS:
        return None
    if hardness == OPEN_HARDNESS:
        return 1
    return 1 + hardness // EROSION_STEP


class DistanceField:
    """Grid of shortest-path costs from one source cell; UNREACHED means +infinity."""

    def __init__(self, width: int, height: int, source: Optional[Point] = None, mode: Optional[PathMode] = None) -> None:
        self.width = width
        self.height = height
        self.source = source
        self.mode = mode
        self.values: List[List[int]] = [[UNREACHED] * width for _ in range(height)]

    def get(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Cell ({x},{y}) out of bounds")
        return self.values[y][x]

    def is_reached(self, x: int, y: int) -> bool:
        return self.get(x, y) != UNREACHED

    def reached_count(self) -> int:
        return sum(1 for row in self.values for v in row if v != UNREACHED)

    def to_rows(self) -> List[str]:
        """Debug dump: last digit of each distance, ' ' when unreached, '@' at the source."""
        rows: List[str] = []
        for y in range(self.height):
            chars = []
            for x in range(self.width):
                v = self.values[y][x]
                if self.source == (x, y):
                    chars.append("@")
                elif v == UNREACHED:
                    chars.append(" ")
                else:
                    chars.append(str(v % 10))
            rows.append("".join(chars))
        return rows


def compute(terrain: TerrainModel, source: Point, mode: PathMode) -> DistanceField:
    """Dijkstra over the 8-connected grid from `source`.

    Stale heap entries (popped distance greater than the recorded best) are
    skipped instead of being removed when a shorter path is found.
    """
    sx, sy = source
    if not terrain.in_bounds(sx, sy):
        raise IndexError(f"Source {source} out of bounds")

    field = DistanceField(terrain.width, terrain.height, source=source, mode=mode)
    dist = field.values
    dist[sy][sx] = 0

    heap: MinHeap[_Node] = MinHeap(key=lambda n: n.dist)
    heap.push(_Node(0, sx, sy))
    hardness = terrain.hardness

    while not heap.is_empty():
        u = heap.pop()
        if u.dist > dist[u.y][u.x]:
            continue
        for nx, ny in terrain.neighbors8(u.x, u.y):
            cost = step_cost(hardness[ny][nx], mode)
            if cost is None:
                continue
            alt = u.dist + cost
            if alt < dist[ny][nx]:
                dist[ny][nx] = alt
                heap.push(_Node(alt, nx, ny))
    return field


@dataclass
class PathFields:
    """The pair of fields monsters navigate by, always recomputed together."""

    tunneling: DistanceField
    non_tunneling: DistanceField

    @classmethod
    def empty(cls, width: int, height: int) -> "PathFields":
        return cls(DistanceField(width, height), DistanceField(width, height))

    @classmethod
    def from_source(cls, terrain: TerrainModel, source: Point) -> "PathFields":
        return cls(
            tunneling=compute(terrain, source, PathMode.TUNNELING),
            non_tunneling=compute(terrain, source, PathMode.NON_TUNNELING),
        )

    def recompute(self, terrain: TerrainModel, source: Point) -> None:
        self.tunneling = compute(terrain, source, PathMode.TUNNELING)
        self.non_tunneling = compute(terrain, source, PathMode.NON_TUNNELING)
        logger.debug(
            "Recomputed distance fields from %s (tunneling reach=%d, non-tunneling reach=%d)",
            source,
            self.tunneling.reached_count(),
            self.non_tunneling.reached_count(),
        )

    def for_mode(self, tunneling: bool) -> DistanceField:
        return self.tunneling if tunneling else self.non_tunneling

    @property
    def source(self) -> Optional[Point]:
        return self.tunneling.source


__all__ = [
    "UNREACHED",
    "PathMode",
    "DistanceField",
    "PathFields",
    "compute",
    "step_cost",
]
