from __future__ import annotations

import dataclasses
import json
import logging
import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from jsonschema import Draft7Validator
from platformdirs import user_config_dir

from .core.errors import ConfigError

logger = logging.getLogger(__name__)

APP_NAME = "rlgsim"
SETTINGS_FILENAME = "settings.yaml"

_ENV_FIELDS = {
    "RLG_WIDTH": "width",
    "RLG_HEIGHT": "height",
    "RLG_MAX_ROOMS": "max_rooms",
    "RLG_NUMMON": "num_monsters",
    "RLG_SEED": "seed",
}


@dataclass(frozen=True)
class SimConfig:
    """Constants of one simulation run.

    Grid dimensions and room policy live here instead of being scattered
    through the generator, so alternate grid sizes are a drop-in change.
    Coordinates are persisted as single bytes, hence the 255 cap on the grid.
    """

    width: int = 80
    height: int = 21
    max_rooms: int = 6
    load_max_rooms: int = 10
    room_attempts: int = 2000
    room_min_width: int = 4
    room_max_width: int = 9
    room_min_height: int = 3
    room_max_height: int = 6
    num_monsters: int = 10
    pc_speed: int = 10
    pc_hp: int = 50
    monster_min_speed: int = 5
    monster_max_speed: int = 20
    monster_hp: int = 10
    light_radius: int = 3
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if not (3 <= self.width <= 255) or not (3 <= self.height <= 255):
            raise ConfigError(f"grid must be between 3x3 and 255x255, got {self.width}x{self.height}")
        if min(self.max_rooms, self.load_max_rooms, self.room_attempts) < 0:
            raise ConfigError("max_rooms, load_max_rooms and room_attempts must be >= 0")
        if not (1 <= self.room_min_width <= self.room_max_width):
            raise ConfigError("room width range is invalid")
        if not (1 <= self.room_min_height <= self.room_max_height):
            raise ConfigError("room height range is invalid")
        if self.num_monsters < 0:
            raise ConfigError("num_monsters must be >= 0")
        if not (1 <= self.pc_speed <= 255):
            raise ConfigError("pc_speed must be in [1, 255]")
        if not (1 <= self.monster_min_speed <= self.monster_max_speed <= 255):
            raise ConfigError("monster speed range must lie within [1, 255]")
        if not (0 <= self.monster_hp <= 255):
            raise ConfigError("monster_hp must fit in one byte")
        if self.light_radius < 0:
            raise ConfigError("light_radius must be >= 0")

    def replace(self, **changes: Any) -> "SimConfig":
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None, base: Optional["SimConfig"] = None) -> "SimConfig":
        """Overlay RLG_* environment variables onto `base` (or the defaults)."""
        env = os.environ if env is None else env
        cfg = base or cls()
        changes: Dict[str, Any] = {}
        for var, name in _ENV_FIELDS.items():
            raw = env.get(var)
            if raw is None or raw.strip() == "":
                continue
            try:
                changes[name] = int(raw)
            except ValueError as e:
                raise ConfigError(f"{var} must be an integer, got {raw!r}") from e
        if changes:
            logger.debug("Environment overrides: %s", changes)
        return cfg.replace(**changes) if changes else cfg

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], base: Optional["SimConfig"] = None) -> "SimConfig":
        validate_settings(data)
        cfg = base or cls()
        return cfg.replace(**dict(data))

    @classmethod
    def load(cls, path: Optional[Path] = None, env: Optional[Mapping[str, str]] = None) -> "SimConfig":
        """Defaults, then the settings file (if any), then environment overrides."""
        cfg = cls()
        data = load_settings(path)
        if data:
            cfg = cls.from_mapping(data, base=cfg)
        return cls.from_env(env, base=cfg)


def default_settings_path() -> Path:
    return Path(user_config_dir(APP_NAME)) / SETTINGS_FILENAME


def _settings_schema() -> Dict[str, Any]:
    with resources.files("rlgsim.schemas").joinpath("settings.schema.json").open("r", encoding="utf-8") as fh:
        return json.load(fh)


def validate_settings(data: Mapping[str, Any]) -> None:
    validator = Draft7Validator(_settings_schema())
    errors = sorted(validator.iter_errors(dict(data)), key=lambda e: list(e.path))
    if errors:
        parts = []
        for e in errors:
            where = "/".join(str(p) for p in e.path) or "<root>"
            parts.append(f"{where}: {e.message}")
        raise ConfigError("Invalid settings: " + "; ".join(parts))


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """Read a YAML settings file.

    With no explicit path the per-user config location is tried silently;
    an explicit path that does not exist only logs a warning.
    """
    explicit = path is not None
    target = path if path is not None else default_settings_path()
    if not target.exists():
        if explicit:
            logger.warning("Settings file not found: %s", target)
        else:
            logger.debug("No user settings at %s", target)
        return {}
    try:
        with target.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Could not parse settings file {target}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {target} must contain a mapping")
    logger.info("Loaded settings from %s", target)
    return data


def save_settings(cfg: SimConfig, path: Path) -> None:
    data = {k: v for k, v in dataclasses.asdict(cfg).items() if v is not None}
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        yaml.safe_dump(data, fh, sort_keys=False)
    logger.info("Saved settings to %s", path)
