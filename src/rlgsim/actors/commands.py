from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple


class Command(str, Enum):
    """Discrete tokens the input collaborator hands to the PC, one at a time."""

    MOVE_NW = "move_nw"
    MOVE_N = "move_n"
    MOVE_NE = "move_ne"
    MOVE_W = "move_w"
    MOVE_E = "move_e"
    MOVE_SW = "move_sw"
    MOVE_S = "move_s"
    MOVE_SE = "move_se"
    REST = "rest"
    STAIRS_UP = "stairs_up"
    STAIRS_DOWN = "stairs_down"
    TOGGLE_FOG = "toggle_fog"
    TELEPORT = "teleport"  # enter cursor mode, or confirm when already in it
    CONFIRM = "confirm"
    RANDOM_TELEPORT = "random_teleport"
    CANCEL = "cancel"
    MONSTER_LIST = "monster_list"
    QUIT = "quit"


DIRECTIONS: Dict[Command, Tuple[int, int]] = {
    Command.MOVE_NW: (-1, -1),
    Command.MOVE_N: (0, -1),
    Command.MOVE_NE: (1, -1),
    Command.MOVE_W: (-1, 0),
    Command.MOVE_E: (1, 0),
    Command.MOVE_SW: (-1, 1),
    Command.MOVE_S: (0, 1),
    Command.MOVE_SE: (1, 1),
}
