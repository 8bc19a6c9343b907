from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:  # pragma: no cover
    from .actors.commands import Command
    from .engine.simulation import Simulation


class InputProvider(Protocol):
    """Source of PC commands.

    The simulation blocks on `next_command` during the PC's turn; nothing else
    runs while it waits. Implementations decide where tokens come from (a
    terminal, a script, an AI).
    """

    def next_command(self, sim: "Simulation") -> "Command":
        """Return the next command token for the PC."""


class Renderer(Protocol):
    """Presentation hooks the PC turn calls into. All are side-effect only."""

    def draw(self, sim: "Simulation") -> None:
        """Show the current visible map and status line."""

    def show_monster_list(self, sim: "Simulation") -> None:
        """Show the bearings of all living monsters relative to the PC."""

    def show_message(self, text: str) -> None:
        """Show a one-line message."""
