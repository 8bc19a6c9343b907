from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

from ..actors.commands import Command

logger = logging.getLogger(__name__)

ESC = "\x1b"

# Readable names for keys that are awkward to write literally.
_KEY_NAMES = {
    "ESC": ESC,
    "ESCAPE": ESC,
    "SPACE": " ",
}


class KeyMap:
    """Rebindable mapping from single characters to commands.

    Keys are case-sensitive ('Q' quits, 'q' does not). Named keys such as
    "ESC" and "SPACE" are accepted when binding.

    Example usage:
        keymap = KeyMap.default()
        keymap.translate("k")   # -> Command.MOVE_N
    """

    def __init__(self, bindings: Optional[Dict[str, Command]] = None) -> None:
        self._bindings: Dict[str, Command] = {}
        if bindings:
            for key, cmd in bindings.items():
                self.bind(key, cmd)

    @staticmethod
    def _normalize(key: str) -> Optional[str]:
        if not isinstance(key, str) or not key:
            return None
        if len(key) == 1:
            return key
        return _KEY_NAMES.get(key.upper())

    def bind(self, key: str, cmd: Command) -> None:
        nk = self._normalize(key)
        if nk is None:
            logger.warning("Attempted to bind invalid key: %r", key)
            return
        self._bindings[nk] = cmd

    def bind_many(self, keys: Iterable[str], cmd: Command) -> None:
        for k in keys:
            self.bind(k, cmd)

    def unbind(self, key: str) -> None:
        nk = self._normalize(key)
        if nk is not None:
            self._bindings.pop(nk, None)

    def translate(self, key: str) -> Optional[Command]:
        nk = self._normalize(key)
        if nk is None:
            return None
        return self._bindings.get(nk)

    @classmethod
    def default(cls) -> "KeyMap":
        """Numpad digits plus vi-keys for movement, and the usual single-key commands."""
        keymap = cls()
        keymap.bind_many(["7", "y"], Command.MOVE_NW)
        keymap.bind_many(["8", "k"], Command.MOVE_N)
        keymap.bind_many(["9", "u"], Command.MOVE_NE)
        keymap.bind_many(["6", "l"], Command.MOVE_E)
        keymap.bind_many(["3", "n"], Command.MOVE_SE)
        keymap.bind_many(["2", "j"], Command.MOVE_S)
        keymap.bind_many(["1", "b"], Command.MOVE_SW)
        keymap.bind_many(["4", "h"], Command.MOVE_W)
        keymap.bind_many(["5", "SPACE", "."], Command.REST)
        keymap.bind(">", Command.STAIRS_DOWN)
        keymap.bind("<", Command.STAIRS_UP)
        keymap.bind("f", Command.TOGGLE_FOG)
        keymap.bind("g", Command.TELEPORT)
        keymap.bind("r", Command.RANDOM_TELEPORT)
        keymap.bind("m", Command.MONSTER_LIST)
        keymap.bind("ESC", Command.CANCEL)
        keymap.bind("Q", Command.QUIT)
        return keymap


__all__ = ["ESC", "KeyMap"]
