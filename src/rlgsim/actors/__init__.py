from .characters import (
    Behavior,
    Character,
    Monster,
    PlayerCharacter,
    describe_bearing,
    make_player,
    spawn_monster,
)
from .commands import DIRECTIONS, Command
from .turns import take_turn

__all__ = [
    "Behavior",
    "Character",
    "Command",
    "DIRECTIONS",
    "Monster",
    "PlayerCharacter",
    "describe_bearing",
    "make_player",
    "spawn_monster",
    "take_turn",
]
