from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntFlag
from typing import Iterable, Optional, Union

from ..config import SimConfig
from ..core.errors import InvalidActorError
from ..dungeon.terrain import FloorKind, Point, TerrainModel
from ..fov.fog_of_war import FogMemory
from ..rng import RandomSource

logger = logging.getLogger(__name__)

PC_GLYPH = "@"
_HEX_GLYPHS = "0123456789abcdef"


class Behavior(IntFlag):
    """Monster behavior bits. Only the low nibble is meaningful."""

    NONE = 0
    INTELLIGENT = 0x1
    TELEPATHIC = 0x2  # carried in data and saves; not consulted by movement
    TUNNELING = 0x4
    ERRATIC = 0x8

    ALL = 0xF


def _check_speed(speed: int) -> None:
    if not isinstance(speed, int) or speed <= 0:
        raise InvalidActorError(f"speed must be a positive integer, got {speed!r}")


@dataclass(eq=False)
class PlayerCharacter:
    """The PC: position, liveness, fog memory and the teleport/fog UI modes.

    Identity-compared so the roster and the scheduler can hold references.
    """

    x: int
    y: int
    fog: FogMemory
    speed: int = 10
    hp: int = 50
    alive: bool = True
    fog_enabled: bool = True
    teleporting: bool = False
    cursor: Optional[Point] = None

    def __post_init__(self) -> None:
        _check_speed(self.speed)

    @property
    def symbol(self) -> str:
        return PC_GLYPH

    @property
    def pos(self) -> Point:
        return (self.x, self.y)

    def move_to(self, x: int, y: int) -> None:
        self.x, self.y = x, y

    def kill(self) -> None:
        self.alive = False

    def __repr__(self) -> str:
        return f"PlayerCharacter(pos=({self.x},{self.y}), alive={self.alive})"


@dataclass(eq=False)
class Monster:
    """An NPC driven by its behavior flags."""

    x: int
    y: int
    speed: int
    behavior: Behavior = Behavior.NONE
    hp: int = 10
    alive: bool = True

    def __post_init__(self) -> None:
        _check_speed(self.speed)
        if not (0 <= int(self.behavior) <= int(Behavior.ALL)):
            raise InvalidActorError(f"behavior flags must fit in 4 bits, got {int(self.behavior)}")
        self.behavior = Behavior(int(self.behavior))

    @property
    def symbol(self) -> str:
        return _HEX_GLYPHS[int(self.behavior) & 0xF]

    @property
    def pos(self) -> Point:
        return (self.x, self.y)

    @property
    def intelligent(self) -> bool:
        return bool(self.behavior & Behavior.INTELLIGENT)

    @property
    def telepathic(self) -> bool:
        return bool(self.behavior & Behavior.TELEPATHIC)

    @property
    def tunneling(self) -> bool:
        return bool(self.behavior & Behavior.TUNNELING)

    @property
    def erratic(self) -> bool:
        return bool(self.behavior & Behavior.ERRATIC)

    def move_to(self, x: int, y: int) -> None:
        self.x, self.y = x, y

    def kill(self) -> None:
        self.alive = False

    def __repr__(self) -> str:
        return (
            f"Monster({self.symbol!r}, pos=({self.x},{self.y}), speed={self.speed}, "
            f"alive={self.alive})"
        )


# The closed set of actor kinds.
Character = Union[PlayerCharacter, Monster]


def make_player(x: int, y: int, config: SimConfig) -> PlayerCharacter:
    """A fresh PC with blank fog memory."""
    fog = FogMemory(config.width, config.height, radius=config.light_radius)
    return PlayerCharacter(x=x, y=y, fog=fog, speed=config.pc_speed, hp=config.pc_hp)


def spawn_monster(
    terrain: TerrainModel,
    rng: RandomSource,
    config: SimConfig,
    avoid: Iterable[Point] = (),
) -> Optional[Monster]:
    """Create a monster with random flags and speed on a random open-floor cell.

    Returns None when no open-floor cell is free.
    """
    blocked = set(avoid)
    candidates = [c for c in terrain.cells_of_kind(FloorKind.OPEN) if c not in blocked]
    if not candidates:
        logger.warning("No free open-floor cell to spawn a monster on")
        return None
    x, y = rng.choice(candidates)
    flags = Behavior(rng.randint(0, int(Behavior.ALL)))
    speed = rng.randint(config.monster_min_speed, config.monster_max_speed)
    monster = Monster(x=x, y=y, speed=speed, behavior=flags, hp=config.monster_hp)
    logger.debug("Spawned %r", monster)
    return monster


def describe_bearing(origin: Point, target: Point) -> str:
    """Human-readable offset like '3 north, 2 east'."""
    dx = target[0] - origin[0]
    dy = target[1] - origin[1]
    parts = []
    if dy < 0:
        parts.append(f"{-dy} north")
    elif dy > 0:
        parts.append(f"{dy} south")
    if dx < 0:
        parts.append(f"{-dx} west")
    elif dx > 0:
        parts.append(f"{dx} east")
    return ", ".join(parts) if parts else "here"


__all__ = [
    "Behavior",
    "Character",
    "Monster",
    "PlayerCharacter",
    "make_player",
    "spawn_monster",
    "describe_bearing",
]
