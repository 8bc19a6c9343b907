import pytest

from rlgsim.dungeon.generation import Level
from rlgsim.dungeon.terrain import FloorKind, Room, TerrainModel


def test_from_ascii_forces_immutable_perimeter():
    rows = [
        "#####",
        "#.3>#",
        "#####",
    ]
    t = TerrainModel.from_ascii(rows)
    assert t.perimeter_intact()
    assert t.kind_at(0, 0) is FloorKind.VOID
    assert t.hardness_at(1, 1) == 0
    assert t.kind_at(1, 1) is FloorKind.OPEN
    assert t.hardness_at(2, 1) == 84
    assert t.kind_at(2, 1) is FloorKind.VOID
    assert t.kind_at(3, 1) is FloorKind.STAIR_DOWN


def test_walkable_kinds():
    t = TerrainModel.from_ascii(["      ", " .#<> ", "      "])
    assert [t.is_walkable(x, 1) for x in range(6)] == [False, True, True, True, True, False]
    assert not t.is_walkable(-1, 1)


def test_erode_steps_down_and_opens_corridor():
    t = TerrainModel.from_ascii(["   ", "   ", "   "], rock_hardness=100)
    assert t.erode(1, 1) == 15
    assert t.kind_at(1, 1) is FloorKind.VOID
    assert t.erode(1, 1) == 0
    assert t.kind_at(1, 1) is FloorKind.CORRIDOR
    # already open: untouched
    assert t.erode(1, 1) == 0


def test_erode_leaves_immutable_rock_alone():
    t = TerrainModel.from_ascii(["   ", "   ", "   "])
    assert t.erode(0, 0) == 255
    assert t.perimeter_intact()


def test_bounds_are_checked():
    t = TerrainModel(4, 4)
    with pytest.raises(IndexError):
        t.hardness_at(4, 0)
    with pytest.raises(IndexError):
        t.kind_at(0, -1)
    with pytest.raises(ValueError):
        t.set_hardness(1, 1, 256)
    with pytest.raises(ValueError):
        t.carve(0, 2, FloorKind.CORRIDOR)


def test_neighbors8_row_major_and_clipped():
    t = TerrainModel(3, 3)
    assert list(t.neighbors8(1, 1)) == [(0, 0), (1, 0), (2, 0), (0, 1), (2, 1), (0, 2), (1, 2), (2, 2)]
    assert list(t.neighbors8(0, 0)) == [(1, 0), (0, 1), (1, 1)]


def test_derive_kinds_is_idempotent(rng):
    t = TerrainModel(12, 8)
    t.fill_random_rock(rng)
    room = Room(2, 2, 3, 2)
    for x, y in room.cells():
        t.carve(x, y, FloorKind.OPEN)
    for x in range(5, 10):
        t.carve(x, 3, FloorKind.CORRIDOR)
    level = Level(terrain=t, rooms=[room], up_stairs=(2, 2), down_stairs=(8, 3))

    level.rederive()
    first = t.to_ascii()
    level.rederive()
    assert t.to_ascii() == first
    assert first[3] == "  ...###>#  "
    assert t.kind_at(2, 2) is FloorKind.STAIR_UP
    assert t.kind_at(8, 3) is FloorKind.STAIR_DOWN
    assert t.kind_at(6, 3) is FloorKind.CORRIDOR
    assert t.kind_at(3, 3) is FloorKind.OPEN


def test_room_geometry():
    a = Room(1, 1, 4, 3)
    assert a.center() == (3, 2)
    assert a.contains(4, 3)
    assert not a.contains(5, 3)
    assert a.intersects(Room(4, 3, 2, 2))
    assert not a.intersects(Room(5, 1, 2, 2))
    assert len(list(a.cells())) == 12
