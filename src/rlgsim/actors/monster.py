from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..dungeon.pathfinding import UNREACHED
from ..dungeon.terrain import IMMUTABLE_HARDNESS, NEIGHBOR_OFFSETS, OPEN_HARDNESS, Point
from .characters import Monster

if TYPE_CHECKING:  # pragma: no cover
    from ..engine.simulation import Simulation

logger = logging.getLogger(__name__)

# Erratic moves choose uniformly among the 8 neighbours and staying put.
_ERRATIC_OFFSETS = ((0, 0),) + NEIGHBOR_OFFSETS


def _sign(v: int) -> int:
    return (v > 0) - (v < 0)


def choose_destination(sim: "Simulation", monster: Monster) -> Point:
    """Pick the cell this monster wants to enter this turn.

    Erratic monsters move randomly half the time; otherwise unintelligent
    monsters step straight toward the PC and intelligent ones descend the
    distance field selected by their tunneling bit. Ties go to the first
    neighbour in row-major order. The result may lie outside the grid.
    """
    if monster.erratic and sim.rng.coin_flip():
        dx, dy = sim.rng.choice(_ERRATIC_OFFSETS)
        return (monster.x + dx, monster.y + dy)

    if not monster.intelligent:
        px, py = sim.pc.pos
        return (monster.x + _sign(px - monster.x), monster.y + _sign(py - monster.y))

    field = sim.fields.for_mode(monster.tunneling)
    best = monster.pos
    best_dist = UNREACHED
    for nx, ny in sim.terrain.neighbors8(monster.x, monster.y):
        d = field.values[ny][nx]
        if d < best_dist:
            best_dist = d
            best = (nx, ny)
    return best


def take_monster_turn(sim: "Simulation", monster: Monster) -> None:
    terrain = sim.terrain
    x, y = choose_destination(sim, monster)
    if not terrain.in_bounds(x, y):
        return

    hardness = terrain.hardness[y][x]
    if monster.tunneling and OPEN_HARDNESS < hardness < IMMUTABLE_HARDNESS:
        remaining = terrain.erode(x, y)
        logger.debug("%r tunnels at (%d,%d): hardness %d -> %d", monster, x, y, hardness, remaining)
        return
    if hardness != OPEN_HARDNESS:
        return

    monster.move_to(x, y)
    pc = sim.pc
    if pc.alive and pc.pos == (x, y):
        sim.kill(pc)
        sim.message = f"Killed by monster {monster.symbol}."
        logger.info("%r killed the PC at (%d,%d)", monster, x, y)
