import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from rlgsim.actors.characters import make_player  # noqa: E402
from rlgsim.config import SimConfig  # noqa: E402
from rlgsim.dungeon.generation import Level  # noqa: E402
from rlgsim.dungeon.terrain import TerrainModel  # noqa: E402
from rlgsim.engine.simulation import Simulation  # noqa: E402
from rlgsim.rng import RandomSource  # noqa: E402


@pytest.fixture
def rng():
    return RandomSource(seed=1234)


@pytest.fixture
def open_room_rows():
    # 9x7 with a 7x5 open interior
    return [
        "         ",
        " ....... ",
        " ....... ",
        " ....... ",
        " ....... ",
        " ....... ",
        "         ",
    ]


@pytest.fixture
def make_sim():
    """Build a Simulation over hand-drawn terrain with the PC at `pc`."""

    def _make(rows, pc=(1, 1), monsters=(), seed=7, rooms=(), up=None, down=None):
        terrain = TerrainModel.from_ascii(rows)
        cfg = SimConfig(width=terrain.width, height=terrain.height, num_monsters=0, seed=seed)
        level = Level(terrain=terrain, rooms=list(rooms), up_stairs=up, down_stairs=down)
        sim = Simulation(cfg, RandomSource(seed), level, make_player(pc[0], pc[1], cfg))
        sim.roster.extend(monsters)
        sim.refresh_fields()
        return sim

    return _make
