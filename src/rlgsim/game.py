from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Optional

from .config import SimConfig
from .engine.simulation import Outcome, Simulation
from .input.providers import KeyboardInput
from .interfaces import InputProvider, Renderer
from .persistence.paths import ensure_save_dir, load_from_path, resolve_save_path, save_to_path
from .rng import RandomSource

logger = logging.getLogger(__name__)

_FINAL_MESSAGES = {
    Outcome.VICTORY: "You win!",
    Outcome.PC_DIED: "You lose!",
    Outcome.QUIT: "You quit.",
    Outcome.QUEUE_EMPTY: "Nothing left to act.",
}


def final_message(outcome: Outcome) -> str:
    return _FINAL_MESSAGES.get(outcome, outcome.value)


def setup_simulation(
    config: Optional[SimConfig] = None,
    *,
    load: bool = False,
    save: bool = False,
    num_monsters: Optional[int] = None,
    save_path: Optional[Path] = None,
    rng: Optional[RandomSource] = None,
    env: Optional[Mapping[str, str]] = None,
) -> Simulation:
    """Build the starting state: load or generate, then optionally save.

    The save path is resolved before anything else so a missing HOME fails
    before any state exists.
    """
    cfg = config or SimConfig()
    path: Optional[Path] = None
    if load or save:
        path = save_path if save_path is not None else resolve_save_path(env)
    rng = rng or RandomSource(cfg.seed)

    if load:
        sim = Simulation.from_saved(load_from_path(path, cfg), cfg, rng)
    else:
        sim = Simulation.new(cfg, rng, num_monsters=num_monsters)

    if save:
        ensure_save_dir(path)
        save_to_path(path, sim.snapshot())
    return sim


def run_game(
    config: Optional[SimConfig] = None,
    *,
    load: bool = False,
    save: bool = False,
    num_monsters: Optional[int] = None,
    input_provider: Optional[InputProvider] = None,
    renderer: Optional[Renderer] = None,
    save_path: Optional[Path] = None,
    rng: Optional[RandomSource] = None,
    env: Optional[Mapping[str, str]] = None,
) -> Outcome:
    """High-level API: set up a run and play it to a terminal outcome."""
    sim = setup_simulation(
        config,
        load=load,
        save=save,
        num_monsters=num_monsters,
        save_path=save_path,
        rng=rng,
        env=env,
    )
    outcome = sim.play(input_provider or KeyboardInput(), renderer, num_monsters=num_monsters)
    if renderer is not None:
        renderer.show_message(final_message(outcome))
    return outcome


__all__ = ["final_message", "run_game", "setup_simulation"]
