from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from .characters import Character, Monster, PlayerCharacter
from .monster import take_monster_turn
from .player import take_player_turn

if TYPE_CHECKING:  # pragma: no cover
    from ..engine.simulation import Simulation
    from ..interfaces import InputProvider, Renderer


def take_turn(
    actor: Character,
    sim: "Simulation",
    input_provider: "InputProvider",
    renderer: Optional["Renderer"] = None,
) -> None:
    """Let one actor act. Dispatches over the closed set of actor kinds."""
    if isinstance(actor, PlayerCharacter):
        take_player_turn(sim, actor, input_provider, renderer)
    elif isinstance(actor, Monster):
        take_monster_turn(sim, actor)
    else:
        raise TypeError(f"Unknown actor kind: {actor!r}")
