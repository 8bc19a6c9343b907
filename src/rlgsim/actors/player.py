from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from ..dungeon.terrain import FloorKind, Point
from .characters import PlayerCharacter
from .commands import DIRECTIONS, Command

if TYPE_CHECKING:  # pragma: no cover
    from ..engine.simulation import Simulation
    from ..interfaces import InputProvider, Renderer

logger = logging.getLogger(__name__)


def take_player_turn(
    sim: "Simulation",
    pc: PlayerCharacter,
    input_provider: "InputProvider",
    renderer: Optional["Renderer"] = None,
) -> None:
    """Refresh fog memory, then read commands until one consumes the turn."""
    pc.fog.update(sim.terrain, pc.pos)
    while True:
        if renderer is not None:
            renderer.draw(sim)
        cmd = input_provider.next_command(sim)
        if resolve_command(sim, pc, cmd, renderer):
            return


def resolve_command(
    sim: "Simulation",
    pc: PlayerCharacter,
    cmd: Command,
    renderer: Optional["Renderer"] = None,
) -> bool:
    """Apply one command. Returns True if it used up the PC's turn."""
    logger.debug("PC at %s: %s", pc.pos, cmd.value)

    if cmd is Command.QUIT:
        pc.kill()
        sim.quit_requested = True
        sim.message = "Quit."
        return True
    if cmd is Command.TOGGLE_FOG:
        pc.fog_enabled = not pc.fog_enabled
        return False
    if cmd is Command.MONSTER_LIST:
        if renderer is not None:
            renderer.show_monster_list(sim)
        return False

    if pc.teleporting:
        return _resolve_teleport_mode(sim, pc, cmd)

    if cmd in DIRECTIONS:
        dx, dy = DIRECTIONS[cmd]
        _step(sim, pc, pc.x + dx, pc.y + dy)
        return True
    if cmd is Command.REST:
        return True
    if cmd is Command.STAIRS_DOWN:
        _use_stairs(sim, pc, FloorKind.STAIR_DOWN)
        return True
    if cmd is Command.STAIRS_UP:
        _use_stairs(sim, pc, FloorKind.STAIR_UP)
        return True
    if cmd is Command.TELEPORT:
        pc.teleporting = True
        pc.cursor = pc.pos
        return False
    # CONFIRM, CANCEL and RANDOM_TELEPORT only mean something in teleport mode.
    return False


def _resolve_teleport_mode(sim: "Simulation", pc: PlayerCharacter, cmd: Command) -> bool:
    terrain = sim.terrain
    cursor = pc.cursor if pc.cursor is not None else pc.pos

    if cmd in DIRECTIONS:
        dx, dy = DIRECTIONS[cmd]
        nx, ny = cursor[0] + dx, cursor[1] + dy
        if terrain.in_bounds(nx, ny):
            pc.cursor = (nx, ny)
        return False
    if cmd is Command.CANCEL:
        _leave_teleport_mode(pc)
        return False
    if cmd in (Command.TELEPORT, Command.CONFIRM):
        if terrain.is_immutable(*cursor):
            sim.message = "Cannot teleport into immutable rock."
        else:
            _occupy(sim, pc, cursor)
        _leave_teleport_mode(pc)
        return True
    if cmd is Command.RANDOM_TELEPORT:
        candidates = [
            (x, y)
            for y in range(terrain.height)
            for x in range(terrain.width)
            if not terrain.is_immutable(x, y)
        ]
        if candidates:
            _occupy(sim, pc, sim.rng.choice(candidates))
        _leave_teleport_mode(pc)
        return True
    # Rest and stairs do nothing while the cursor is up.
    return False


def _leave_teleport_mode(pc: PlayerCharacter) -> None:
    pc.teleporting = False
    pc.cursor = None


def _step(sim: "Simulation", pc: PlayerCharacter, x: int, y: int) -> None:
    if not sim.terrain.is_walkable(x, y):
        logger.debug("PC move to (%d,%d) blocked", x, y)
        return
    _occupy(sim, pc, (x, y))


def _occupy(sim: "Simulation", pc: PlayerCharacter, dest: Point) -> None:
    """Move the PC onto `dest`, killing whatever else lives there."""
    for other in sim.live_at(*dest):
        if other is not pc:
            sim.kill(other)
            logger.info("PC killed %r at %s", other, dest)
    pc.move_to(*dest)


def _use_stairs(sim: "Simulation", pc: PlayerCharacter, kind: FloorKind) -> None:
    if sim.terrain.kind_at(*pc.pos) is kind:
        sim.level_changed = True
        logger.info("PC took the %s at %s", kind.name.lower().replace("_", " "), pc.pos)
    else:
        sim.message = "There are no such stairs here."
