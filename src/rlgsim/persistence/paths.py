from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Mapping, Optional

from ..config import SimConfig
from ..core.errors import ConfigError, SaveError
from .codec import SavedState, decode, encode

logger = logging.getLogger(__name__)

SAVE_DIRNAME = ".rlg327"
SAVE_FILENAME = "dungeon"


def resolve_save_path(env: Optional[Mapping[str, str]] = None) -> Path:
    """`$HOME/.rlg327/dungeon`. A missing HOME is a fatal configuration error."""
    env = os.environ if env is None else env
    home = env.get("HOME")
    if not home:
        raise ConfigError("HOME is not set; cannot locate the save file")
    return Path(home) / SAVE_DIRNAME / SAVE_FILENAME


def ensure_save_dir(path: Path, *, mode: int = 0o700) -> None:
    """Create the directory holding `path` with owner-only permissions."""
    directory = path.parent
    directory.mkdir(parents=True, exist_ok=True)
    try:
        os.chmod(directory, mode)
    except OSError:  # Platform may not support
        logger.debug("Could not chmod directory: %s", directory, exc_info=True)


def _atomic_write_bytes(path: Path, data: bytes) -> None:
    """Write to a temporary sibling, then replace, so a crash never leaves half a save."""
    ensure_save_dir(path)
    fd, tmp_name = tempfile.mkstemp(prefix=path.name, dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    finally:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)


def save_to_path(path: Path, state: SavedState) -> int:
    """Encode and write `state`. Returns the number of bytes written."""
    data = encode(state)
    try:
        _atomic_write_bytes(path, data)
    except OSError as e:
        raise SaveError(f"Could not write save file {path}: {e}") from e
    logger.info("Saved level to %s (%d bytes)", path, len(data))
    return len(data)


def load_from_path(path: Path, config: Optional[SimConfig] = None) -> SavedState:
    cfg = config or SimConfig()
    try:
        data = path.read_bytes()
    except OSError as e:
        raise SaveError(f"Could not read save file {path}: {e}") from e
    state = decode(data, width=cfg.width, height=cfg.height, max_rooms=cfg.load_max_rooms)
    logger.info(
        "Loaded level from %s: %d rooms, %d monsters",
        path,
        len(state.rooms),
        len(state.monsters),
    )
    return state


__all__ = ["resolve_save_path", "ensure_save_dir", "save_to_path", "load_from_path"]
