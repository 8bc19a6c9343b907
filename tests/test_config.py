import pytest
import yaml

from rlgsim.config import (
    SimConfig,
    default_settings_path,
    load_settings,
    save_settings,
    validate_settings,
)
from rlgsim.core.errors import ConfigError


def test_defaults_match_classic_game():
    cfg = SimConfig()
    assert (cfg.width, cfg.height) == (80, 21)
    assert cfg.max_rooms == 6
    assert cfg.load_max_rooms == 10
    assert cfg.room_attempts == 2000
    assert cfg.num_monsters == 10
    assert cfg.pc_speed == 10
    assert (cfg.monster_min_speed, cfg.monster_max_speed) == (5, 20)
    assert cfg.light_radius == 3


@pytest.mark.parametrize(
    "changes",
    [
        {"width": 256},
        {"height": 2},
        {"num_monsters": -1},
        {"pc_speed": 0},
        {"monster_min_speed": 0},
        {"monster_min_speed": 30, "monster_max_speed": 20},
        {"room_min_width": 5, "room_max_width": 4},
        {"load_max_rooms": -1},
    ],
)
def test_invalid_values_rejected(changes):
    with pytest.raises(ConfigError):
        SimConfig(**changes)


def test_env_overrides():
    cfg = SimConfig.from_env({"RLG_NUMMON": "3", "RLG_SEED": "42", "RLG_WIDTH": ""})
    assert cfg.num_monsters == 3
    assert cfg.seed == 42
    assert cfg.width == 80


def test_env_override_must_be_integer():
    with pytest.raises(ConfigError):
        SimConfig.from_env({"RLG_HEIGHT": "tall"})


def test_load_settings_file(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("num_monsters: 4\nmax_rooms: 3\nseed: 9\n", encoding="utf-8")
    cfg = SimConfig.load(path, env={})
    assert (cfg.num_monsters, cfg.max_rooms, cfg.seed) == (4, 3, 9)


def test_env_wins_over_file(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("num_monsters: 4\n", encoding="utf-8")
    cfg = SimConfig.load(path, env={"RLG_NUMMON": "1"})
    assert cfg.num_monsters == 1


def test_unknown_key_fails_validation():
    with pytest.raises(ConfigError) as excinfo:
        validate_settings({"num_monsters": 2, "colour": "red"})
    assert "colour" in str(excinfo.value)


def test_wrong_type_fails_validation():
    with pytest.raises(ConfigError):
        SimConfig.from_mapping({"width": "wide"})


def test_bad_yaml_and_non_mapping(tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("num_monsters: [1, 2\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(bad)
    listy = tmp_path / "list.yaml"
    listy.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(listy)


def test_missing_explicit_file_is_empty(tmp_path):
    assert load_settings(tmp_path / "missing.yaml") == {}


def test_save_settings_round_trip(tmp_path):
    path = tmp_path / "nested" / "settings.yaml"
    cfg = SimConfig(num_monsters=2, seed=None)
    save_settings(cfg, path)
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    assert "seed" not in data
    assert SimConfig.load(path, env={}) == cfg


def test_default_settings_path_name():
    assert default_settings_path().name == "settings.yaml"
