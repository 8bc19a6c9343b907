import pytest

from rlgsim.config import SimConfig
from rlgsim.dungeon.generation import FALLBACK_START, LevelGenerator
from rlgsim.dungeon.pathfinding import PathMode, compute
from rlgsim.dungeon.terrain import FloorKind
from rlgsim.rng import RandomSource

SEEDS = [1, 2, 3, 42, 1337]


def _generate(seed, **overrides):
    cfg = SimConfig(**overrides)
    return LevelGenerator(cfg).generate(RandomSource(seed))


@pytest.mark.parametrize("seed", SEEDS)
def test_rooms_are_interior_and_disjoint(seed):
    level = _generate(seed)
    cfg = SimConfig()
    assert 1 <= len(level.rooms) <= cfg.max_rooms
    for i, room in enumerate(level.rooms):
        assert room.x >= 1 and room.y >= 1
        assert room.x + room.w <= level.width - 2
        assert room.y + room.h <= level.height - 2
        assert cfg.room_min_width <= room.w <= cfg.room_max_width
        assert cfg.room_min_height <= room.h <= cfg.room_max_height
        for other in level.rooms[i + 1 :]:
            assert not room.intersects(other)


@pytest.mark.parametrize("seed", SEEDS)
def test_perimeter_stays_immutable(seed):
    level = _generate(seed)
    assert level.terrain.perimeter_intact()
    for y in range(level.height):
        for x in range(level.width):
            if level.terrain.is_perimeter(x, y):
                assert level.terrain.kind_at(x, y) is FloorKind.VOID


@pytest.mark.parametrize("seed", SEEDS)
def test_one_distinct_pair_of_stairs_on_floor(seed):
    level = _generate(seed)
    t = level.terrain
    assert level.up_stairs is not None and level.down_stairs is not None
    assert level.up_stairs != level.down_stairs
    assert t.kind_at(*level.up_stairs) is FloorKind.STAIR_UP
    assert t.kind_at(*level.down_stairs) is FloorKind.STAIR_DOWN
    assert t.cells_of_kind(FloorKind.STAIR_UP) == [level.up_stairs]
    assert t.cells_of_kind(FloorKind.STAIR_DOWN) == [level.down_stairs]


@pytest.mark.parametrize("seed", SEEDS)
def test_rooms_connected_without_tunneling(seed):
    level = _generate(seed)
    field = compute(level.terrain, level.rooms[0].center(), PathMode.NON_TUNNELING)
    for room in level.rooms:
        assert field.is_reached(*room.center())


@pytest.mark.parametrize("seed", SEEDS)
def test_room_cells_open_and_walkable_cells_have_zero_hardness(seed):
    level = _generate(seed)
    t = level.terrain
    for room in level.rooms:
        for x, y in room.cells():
            assert t.hardness_at(x, y) == 0
            assert t.kind_at(x, y) in (FloorKind.OPEN, FloorKind.STAIR_UP, FloorKind.STAIR_DOWN)
    for y in range(t.height):
        for x in range(t.width):
            assert t.is_walkable(x, y) == (t.hardness_at(x, y) == 0)


def test_same_seed_same_level():
    a = _generate(99)
    b = _generate(99)
    assert a.rooms == b.rooms
    assert a.terrain.hardness == b.terrain.hardness
    assert a.terrain.to_ascii() == b.terrain.to_ascii()
    assert (a.up_stairs, a.down_stairs) == (b.up_stairs, b.down_stairs)


def test_different_seeds_differ():
    assert _generate(1).terrain.hardness != _generate(2).terrain.hardness


def test_pc_starts_in_first_room_corner():
    level = _generate(5)
    first = level.rooms[0]
    assert level.pc_start() == (first.x, first.y)


def test_grid_too_small_for_rooms_yields_empty_level():
    level = _generate(3, width=5, height=5)
    assert level.rooms == []
    assert level.up_stairs is None and level.down_stairs is None
    assert level.pc_start() == FALLBACK_START
    assert level.terrain.perimeter_intact()


def test_room_cap_respected():
    level = _generate(8, max_rooms=2)
    assert len(level.rooms) <= 2
