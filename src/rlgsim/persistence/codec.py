from __future__ import annotations

import logging
import struct
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Tuple

from ..core.errors import (
    InvalidMarkerError,
    SaveError,
    SaveFormatError,
    TruncatedSaveError,
    UnsupportedVersionError,
)
from ..dungeon.terrain import Point, Room

if TYPE_CHECKING:  # pragma: no cover
    from ..engine.simulation import Simulation

logger = logging.getLogger(__name__)

MARKER = b"RLG327-S2025"
VERSION = 0

# All multi-byte fields are big-endian.
_HEADER = struct.Struct(">12sII")
_VERSION_SIZE = struct.Struct(">II")
_PC = struct.Struct(">BB")
_COUNT = struct.Struct(">H")
_ROOM = struct.Struct(">BBBB")
_STAIR = struct.Struct(">BB")
_MONSTER = struct.Struct(">BBBBB")


@dataclass(frozen=True)
class MonsterRecord:
    x: int
    y: int
    speed: int
    hp: int
    flags: int


@dataclass
class SavedState:
    """Everything the file format carries. Floor kinds are not stored; they are
    re-derived from hardness, rooms and stairs on load."""

    pc: Point
    hardness: List[List[int]]
    rooms: List[Room] = field(default_factory=list)
    up_stairs: Optional[Point] = None
    down_stairs: Optional[Point] = None
    monsters: List[MonsterRecord] = field(default_factory=list)

    @property
    def height(self) -> int:
        return len(self.hardness)

    @property
    def width(self) -> int:
        return len(self.hardness[0]) if self.hardness else 0


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = data
        self.offset = 0

    def remaining(self) -> int:
        return len(self._data) - self.offset

    def unpack(self, fmt: struct.Struct, section: str) -> Tuple[int, ...]:
        if self.remaining() < fmt.size:
            raise TruncatedSaveError(
                f"Save file ends inside the {section} section (offset {self.offset}, "
                f"needed {fmt.size} bytes, {self.remaining()} left)"
            )
        values = fmt.unpack_from(self._data, self.offset)
        self.offset += fmt.size
        return values

    def take(self, n: int, section: str) -> bytes:
        if self.remaining() < n:
            raise TruncatedSaveError(f"Save file ends inside the {section} section")
        chunk = self._data[self.offset : self.offset + n]
        self.offset += n
        return chunk


def encode(state: SavedState) -> bytes:
    """Serialize a state to the fixed binary layout."""
    try:
        body = bytearray()
        body += _PC.pack(*state.pc)
        for row in state.hardness:
            body += bytes(row)
        body += _COUNT.pack(len(state.rooms))
        for room in state.rooms:
            body += _ROOM.pack(room.x, room.y, room.w, room.h)
        for stairs in (state.up_stairs, state.down_stairs):
            if stairs is None:
                body += _COUNT.pack(0)
            else:
                body += _COUNT.pack(1) + _STAIR.pack(*stairs)
        body += _COUNT.pack(len(state.monsters))
        for m in state.monsters:
            body += _MONSTER.pack(m.x, m.y, m.speed, m.hp, m.flags)
    except (struct.error, ValueError) as e:
        raise SaveError(f"State does not fit the save format: {e}") from e

    total = _HEADER.size + len(body)
    return _HEADER.pack(MARKER, VERSION, total) + bytes(body)


def encode_state(sim: "Simulation") -> bytes:
    return encode(sim.snapshot())


def decode(data: bytes, width: int = 80, height: int = 21, max_rooms: int = 10) -> SavedState:
    """Parse a save file.

    Marker or version mismatches and truncation before the monster section
    abort the load. A truncated monster section keeps the complete records
    read so far.
    """
    reader = _Reader(data)
    if reader.remaining() < len(MARKER):
        raise InvalidMarkerError("File too short to hold the save marker")
    marker = reader.take(len(MARKER), "marker")
    if marker != MARKER:
        raise InvalidMarkerError(f"Bad save marker {marker!r}; expected {MARKER!r}")
    version, size = reader.unpack(_VERSION_SIZE, "header")
    if version != VERSION:
        raise UnsupportedVersionError(f"Unsupported save version {version}; only {VERSION} is supported")
    if size != len(data):
        logger.debug("Header size %d differs from actual file size %d", size, len(data))

    def _check_point(p: Point, what: str) -> Point:
        if not (0 <= p[0] < width and 0 <= p[1] < height):
            raise SaveFormatError(f"{what} {p} lies outside the {width}x{height} grid")
        return p

    pc = _check_point(reader.unpack(_PC, "player"), "PC position")

    grid = reader.take(width * height, "hardness")
    hardness = [list(grid[y * width : (y + 1) * width]) for y in range(height)]

    (room_count,) = reader.unpack(_COUNT, "room")
    rooms: List[Room] = []
    for i in range(room_count):
        x, y, w, h = reader.unpack(_ROOM, "room")
        if i >= max_rooms:
            continue
        if w < 1 or h < 1 or x + w > width or y + h > height:
            raise SaveFormatError(f"Room {i} ({x},{y},{w},{h}) lies outside the grid")
        rooms.append(Room(x, y, w, h))
    if room_count > max_rooms:
        logger.warning("Save holds %d rooms; ignoring all beyond %d", room_count, max_rooms)

    stairs: List[Optional[Point]] = []
    for name in ("up stairs", "down stairs"):
        (present,) = reader.unpack(_COUNT, name)
        stairs.append(_check_point(reader.unpack(_STAIR, name), name) if present else None)

    monsters = _decode_monsters(reader, width, height)
    return SavedState(
        pc=pc,
        hardness=hardness,
        rooms=rooms,
        up_stairs=stairs[0],
        down_stairs=stairs[1],
        monsters=monsters,
    )


def _decode_monsters(reader: _Reader, width: int, height: int) -> List[MonsterRecord]:
    monsters: List[MonsterRecord] = []
    try:
        (count,) = reader.unpack(_COUNT, "monster")
    except TruncatedSaveError:
        logger.warning("Save has no monster section; loading with zero monsters")
        return monsters

    for i in range(count):
        try:
            x, y, speed, hp, flags = reader.unpack(_MONSTER, "monster")
        except TruncatedSaveError:
            logger.warning("Monster section truncated after %d of %d records", i, count)
            break
        if speed == 0:
            logger.warning("Skipping monster %d at (%d,%d) with zero speed", i, x, y)
            continue
        if not (0 <= x < width and 0 <= y < height):
            logger.warning("Skipping monster %d outside the grid at (%d,%d)", i, x, y)
            continue
        monsters.append(MonsterRecord(x, y, speed, hp, flags & 0xF))
    return monsters


__all__ = [
    "MARKER",
    "VERSION",
    "MonsterRecord",
    "SavedState",
    "decode",
    "encode",
    "encode_state",
]
