from __future__ import annotations

import logging
import sys
from collections import deque
from typing import TYPE_CHECKING, Iterable, Optional, TextIO

from ..actors.commands import Command
from .mapping import KeyMap

if TYPE_CHECKING:  # pragma: no cover
    from ..engine.simulation import Simulation

logger = logging.getLogger(__name__)


class ScriptedInput:
    """Replays a fixed sequence of commands, then quits.

    Handy for tests and for non-interactive runs (`rlgsim --keys ...`).
    """

    def __init__(self, commands: Iterable[Command]) -> None:
        self._queue = deque(commands)

    @classmethod
    def from_keys(cls, keys: str, keymap: Optional[KeyMap] = None) -> "ScriptedInput":
        keymap = keymap or KeyMap.default()
        commands = []
        for key in keys:
            cmd = keymap.translate(key)
            if cmd is None:
                logger.debug("Ignoring unbound key %r in script", key)
                continue
            commands.append(cmd)
        return cls(commands)

    def remaining(self) -> int:
        return len(self._queue)

    def next_command(self, sim: "Simulation") -> Command:
        if not self._queue:
            return Command.QUIT
        return self._queue.popleft()


class KeyboardInput:
    """Reads one character at a time from a text stream (stdin by default).

    Unbound characters, including newlines, are skipped. End of input quits.
    """

    def __init__(self, stream: Optional[TextIO] = None, keymap: Optional[KeyMap] = None) -> None:
        self.stream = stream if stream is not None else sys.stdin
        self.keymap = keymap or KeyMap.default()

    def next_command(self, sim: "Simulation") -> Command:
        while True:
            ch = self.stream.read(1)
            if ch == "":
                logger.info("Input closed; quitting")
                return Command.QUIT
            cmd = self.keymap.translate(ch)
            if cmd is not None:
                return cmd
            if ch not in "\r\n":
                logger.debug("Unbound key %r", ch)


__all__ = ["KeyboardInput", "ScriptedInput"]
