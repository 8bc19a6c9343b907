import pytest

from rlgsim.cli import main


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    for var in ("RLG_WIDTH", "RLG_HEIGHT", "RLG_MAX_ROOMS", "RLG_NUMMON", "RLG_SEED", "RLG_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    return tmp_path


def test_no_monsters_wins_immediately(capsys):
    assert main(["--seed", "5", "--nummon", "0", "--keys", ""]) == 0
    assert "You win!" in capsys.readouterr().out


def test_quit_key(capsys):
    assert main(["--seed", "5", "--nummon", "1", "--keys", "Q"]) == 0
    out = capsys.readouterr().out
    assert "You quit." in out or "You lose!" in out
    assert "@" in out


def test_save_then_load(isolated_env, capsys):
    assert main(["--seed", "9", "--nummon", "3", "--save", "--keys", "Q"]) == 0
    path = isolated_env / ".rlg327" / "dungeon"
    assert path.exists()
    assert path.read_bytes()[:12] == b"RLG327-S2025"
    assert main(["--load", "--keys", "Q"]) == 0


def test_missing_home_is_reported(monkeypatch):
    monkeypatch.delenv("HOME", raising=False)
    assert main(["--load", "--keys", "Q"]) == 1


def test_corrupt_save_is_reported(isolated_env):
    path = isolated_env / ".rlg327" / "dungeon"
    path.parent.mkdir(parents=True)
    path.write_bytes(b"NOT-A-SAVE-FILE-AT-ALL")
    assert main(["--load", "--keys", "Q"]) == 1


def test_fields_dump(capsys):
    assert main(["--seed", "4", "--nummon", "0", "--fields"]) == 0
    out = capsys.readouterr().out
    assert out.count("@") == 2
    assert "1" in out


def test_negative_nummon_rejected():
    with pytest.raises(SystemExit):
        main(["--nummon", "-1"])
