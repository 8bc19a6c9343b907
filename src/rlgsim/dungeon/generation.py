from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..config import SimConfig
from ..rng import RandomSource
from .terrain import FloorKind, Point, Room, TerrainModel

logger = logging.getLogger(__name__)

FALLBACK_START: Point = (1, 1)


@dataclass
class Level:
    """Everything created together at level start: terrain, rooms and stairs."""

    terrain: TerrainModel
    rooms: List[Room] = field(default_factory=list)
    up_stairs: Optional[Point] = None
    down_stairs: Optional[Point] = None

    @property
    def width(self) -> int:
        return self.terrain.width

    @property
    def height(self) -> int:
        return self.terrain.height

    def pc_start(self) -> Point:
        """Top-left corner of the first room, or a fixed fallback when no room was placed."""
        if self.rooms:
            first = self.rooms[0]
            return (first.x, first.y)
        return FALLBACK_START

    def rederive(self) -> None:
        self.terrain.derive_kinds(self.rooms, self.up_stairs, self.down_stairs)


class LevelGenerator:
    """Rooms + L-shaped corridors + one pair of stairs.

    Rooms are placed by rejection sampling against untouched rock and are
    connected in placement order (not sorted), each corridor running
    horizontally from the previous room's center and then vertically.
    All randomness comes from the supplied RandomSource, so a fixed seed
    always reproduces the same level.
    """

    def __init__(self, config: Optional[SimConfig] = None) -> None:
        self.config = config or SimConfig()

    def generate(self, rng: RandomSource) -> Level:
        cfg = self.config
        terrain = TerrainModel(cfg.width, cfg.height)
        terrain.fill_random_rock(rng)
        level = Level(terrain=terrain)

        level.rooms = self._place_rooms(terrain, rng)
        self._connect_rooms(terrain, level.rooms)
        level.up_stairs, level.down_stairs = self._place_stairs(terrain, rng)

        logger.debug(
            "Generated %dx%d level: %d rooms, up=%s down=%s",
            cfg.width,
            cfg.height,
            len(level.rooms),
            level.up_stairs,
            level.down_stairs,
        )
        return level

    # ---------- rooms ----------

    def _place_rooms(self, terrain: TerrainModel, rng: RandomSource) -> List[Room]:
        cfg = self.config
        rooms: List[Room] = []
        attempts = cfg.room_attempts
        while attempts > 0 and len(rooms) < cfg.max_rooms:
            attempts -= 1
            w = rng.randint(cfg.room_min_width, cfg.room_max_width)
            h = rng.randint(cfg.room_min_height, cfg.room_max_height)
            # A room needs at least one rock cell between it and the border.
            if w > terrain.width - 3 or h > terrain.height - 3:
                continue
            x = rng.randint(1, terrain.width - w - 2)
            y = rng.randint(1, terrain.height - h - 2)
            candidate = Room(x, y, w, h)
            if not self._fits(terrain, candidate):
                continue
            for cx, cy in candidate.cells():
                terrain.carve(cx, cy, FloorKind.OPEN)
            rooms.append(candidate)
        if not rooms:
            logger.warning("Room placement produced no rooms after %d attempts", cfg.room_attempts)
        return rooms

    @staticmethod
    def _fits(terrain: TerrainModel, room: Room) -> bool:
        if room.x < 1 or room.y < 1:
            return False
        if room.x + room.w >= terrain.width - 1 or room.y + room.h >= terrain.height - 1:
            return False
        return all(terrain.kinds[y][x] is FloorKind.VOID for x, y in room.cells())

    # ---------- corridors ----------

    def _connect_rooms(self, terrain: TerrainModel, rooms: List[Room]) -> None:
        for prev, nxt in zip(rooms, rooms[1:]):
            self._carve_corridor(terrain, prev.center(), nxt.center())

    @staticmethod
    def _carve_corridor(terrain: TerrainModel, a: Point, b: Point) -> None:
        ax, ay = a
        bx, by = b
        x_step = 1 if bx >= ax else -1
        for x in range(ax, bx + x_step, x_step):
            _carve_corridor_cell(terrain, x, ay)
        y_step = 1 if by >= ay else -1
        for y in range(ay, by + y_step, y_step):
            _carve_corridor_cell(terrain, bx, y)

    # ---------- stairs ----------

    @staticmethod
    def _place_stairs(terrain: TerrainModel, rng: RandomSource) -> Tuple[Optional[Point], Optional[Point]]:
        candidates = terrain.cells_of_kind(FloorKind.OPEN, FloorKind.CORRIDOR)
        if len(candidates) < 2:
            # Nothing to sample from; a level with no rooms has no floor at all.
            logger.warning("Only %d floor cells; stairs not placed", len(candidates))
            return None, None

        up: Optional[Point] = None
        down: Optional[Point] = None
        while up is None or down is None:
            ux, uy = rng.randrange(terrain.width), rng.randrange(terrain.height)
            dx, dy = rng.randrange(terrain.width), rng.randrange(terrain.height)
            if up is None and terrain.kinds[uy][ux] in (FloorKind.OPEN, FloorKind.CORRIDOR):
                up = (ux, uy)
                terrain.set_kind(ux, uy, FloorKind.STAIR_UP)
            if (
                down is None
                and terrain.kinds[dy][dx] in (FloorKind.OPEN, FloorKind.CORRIDOR)
                and (dx, dy) != up
            ):
                down = (dx, dy)
                terrain.set_kind(dx, dy, FloorKind.STAIR_DOWN)
        return up, down


def _carve_corridor_cell(terrain: TerrainModel, x: int, y: int) -> None:
    if not terrain.in_bounds(x, y) or terrain.is_perimeter(x, y):
        return
    if terrain.kinds[y][x] is FloorKind.OPEN:
        return
    terrain.carve(x, y, FloorKind.CORRIDOR)
