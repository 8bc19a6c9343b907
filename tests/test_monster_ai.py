import math

import pytest

from rlgsim.actors.characters import Behavior, Monster
from rlgsim.actors.monster import choose_destination, take_monster_turn
from rlgsim.dungeon.terrain import FloorKind

# PC at (1,1); open cells form an L down to (5,3)
L_ROWS = [
    "       ",
    " ...   ",
    "   .   ",
    "   ... ",
    "       ",
]

# PC at (1,1); rock of hardness 100 between it and (5,1)
ROCK_ROWS = [
    "       ",
    " .   . ",
    "       ",
]


def test_unintelligent_steps_straight_toward_pc(make_sim, open_room_rows):
    m = Monster(x=5, y=4, speed=10)
    sim = make_sim(open_room_rows, pc=(1, 1), monsters=[m])
    take_monster_turn(sim, m)
    assert m.pos == (4, 3)


def test_unintelligent_non_tunneler_blocked_by_rock_stays(make_sim):
    m = Monster(x=5, y=3, speed=10)
    sim = make_sim(L_ROWS, pc=(1, 1), monsters=[m])
    assert choose_destination(sim, m) == (4, 2)
    take_monster_turn(sim, m)
    assert m.pos == (5, 3)
    assert sim.terrain.hardness_at(4, 2) == 100


def test_intelligent_follows_non_tunneling_field(make_sim):
    m = Monster(x=5, y=3, speed=10, behavior=Behavior.INTELLIGENT)
    sim = make_sim(L_ROWS, pc=(1, 1), monsters=[m])
    take_monster_turn(sim, m)
    assert m.pos == (4, 3)
    take_monster_turn(sim, m)
    assert m.pos == (3, 2)
    take_monster_turn(sim, m)
    assert m.pos == (2, 1)


def test_intelligent_with_no_reachable_neighbour_stays(make_sim):
    m = Monster(x=5, y=1, speed=10, behavior=Behavior.INTELLIGENT)
    sim = make_sim(ROCK_ROWS, pc=(1, 1), monsters=[m])
    assert choose_destination(sim, m) == (5, 1)
    take_monster_turn(sim, m)
    assert m.pos == (5, 1)


def test_intelligent_ties_go_to_first_neighbour_in_row_major_order(make_sim, open_room_rows):
    m = Monster(x=4, y=1, speed=10, behavior=Behavior.INTELLIGENT)
    sim = make_sim(open_room_rows, pc=(4, 4), monsters=[m])
    # neighbours (3,2), (4,2), (5,2) are all 2 away; (3,2) comes first
    assert choose_destination(sim, m) == (3, 2)


@pytest.mark.parametrize("hardness", [1, 84, 85, 86, 100, 170, 171, 254])
def test_tunneling_opens_rock_after_ceil_h_over_85_visits(make_sim, hardness):
    m = Monster(x=5, y=1, speed=10, behavior=Behavior.INTELLIGENT | Behavior.TUNNELING)
    sim = make_sim(ROCK_ROWS, pc=(1, 1), monsters=[m])
    sim.terrain.set_hardness(4, 1, hardness)
    sim.refresh_fields()

    visits = 0
    while sim.terrain.hardness_at(4, 1) > 0:
        before = sim.terrain.hardness_at(4, 1)
        take_monster_turn(sim, m)
        visits += 1
        assert m.pos == (5, 1)
        assert sim.terrain.hardness_at(4, 1) == max(0, before - 85)
    assert visits == math.ceil(hardness / 85)
    assert sim.terrain.kind_at(4, 1) is FloorKind.CORRIDOR

    take_monster_turn(sim, m)
    assert m.pos == (4, 1)


def test_unintelligent_tunneler_erodes_toward_pc(make_sim):
    m = Monster(x=5, y=1, speed=10, behavior=Behavior.TUNNELING)
    sim = make_sim(ROCK_ROWS, pc=(1, 1), monsters=[m])
    take_monster_turn(sim, m)
    assert m.pos == (5, 1)
    assert sim.terrain.hardness_at(4, 1) == 15


def test_telepathic_bit_does_not_change_movement(make_sim):
    plain = Monster(x=5, y=3, speed=10, behavior=Behavior.INTELLIGENT)
    tele = Monster(x=5, y=3, speed=10, behavior=Behavior.INTELLIGENT | Behavior.TELEPATHIC)
    sim = make_sim(L_ROWS, pc=(1, 1), monsters=[plain, tele])
    assert choose_destination(sim, plain) == choose_destination(sim, tele)


def test_monster_entering_pc_cell_kills_pc(make_sim, open_room_rows):
    m = Monster(x=2, y=2, speed=10)
    sim = make_sim(open_room_rows, pc=(1, 1), monsters=[m])
    take_monster_turn(sim, m)
    assert m.pos == (1, 1)
    assert not sim.pc_alive
    assert sim.message


@pytest.mark.parametrize("flags", [Behavior.ERRATIC, Behavior.ERRATIC | Behavior.TUNNELING])
def test_erratic_monsters_never_leave_the_grid_or_enter_immutable_rock(make_sim, open_room_rows, flags):
    m = Monster(x=1, y=5, speed=10, behavior=flags)
    sim = make_sim(open_room_rows, pc=(7, 1), monsters=[m], seed=3)
    for _ in range(200):
        take_monster_turn(sim, m)
        assert sim.terrain.in_bounds(*m.pos)
        assert not sim.terrain.is_perimeter(*m.pos)
        assert sim.terrain.hardness_at(*m.pos) == 0
        if not sim.pc_alive:
            break


def test_erratic_moves_are_random_but_reproducible(make_sim, open_room_rows):
    def trail(seed):
        m = Monster(x=4, y=3, speed=10, behavior=Behavior.ERRATIC | Behavior.INTELLIGENT)
        sim = make_sim(open_room_rows, pc=(1, 1), monsters=[m], seed=seed)
        out = []
        for _ in range(10):
            take_monster_turn(sim, m)
            out.append(m.pos)
        return out

    assert trail(5) == trail(5)
