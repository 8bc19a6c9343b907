from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import SimConfig
from .core.errors import RlgError
from .game import final_message, run_game, setup_simulation
from .input.providers import KeyboardInput, ScriptedInput
from .logging_config import configure_logging
from .render.text import TextRenderer

logger = logging.getLogger(__name__)


def _non_negative(value: str) -> int:
    n = int(value)
    if n < 0:
        raise argparse.ArgumentTypeError("must be >= 0")
    return n


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="rlgsim",
        description="Turn-based dungeon simulation: rooms, tunneling monsters and a binary save file",
    )
    parser.add_argument("--load", action="store_true", help="Load the level from $HOME/.rlg327/dungeon.")
    parser.add_argument("--save", action="store_true", help="Save the level after setup.")
    parser.add_argument("--nummon", type=_non_negative, default=None, help="Monsters per fresh level.")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed for deterministic runs.")
    parser.add_argument(
        "--settings",
        dest="settings_path",
        type=Path,
        default=None,
        help="Path to a settings YAML file overriding the defaults.",
    )
    parser.add_argument(
        "--save-path",
        type=Path,
        default=None,
        help="Use this file instead of $HOME/.rlg327/dungeon.",
    )
    parser.add_argument(
        "--keys",
        default=None,
        help="Play this key sequence instead of reading the keyboard (quits when exhausted).",
    )
    parser.add_argument(
        "--fields",
        action="store_true",
        help="Print the non-tunneling and tunneling distance maps after setup and exit.",
    )
    parser.add_argument("--debug", action="store_true", help="Enable verbose debug logging.")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(level=logging.DEBUG if args.debug else logging.WARNING)

    try:
        config = SimConfig.load(args.settings_path)
        if args.seed is not None:
            config = config.replace(seed=args.seed)

        if args.fields:
            sim = setup_simulation(
                config,
                load=args.load,
                save=args.save,
                num_monsters=args.nummon,
                save_path=args.save_path,
            )
            for field in (sim.fields.non_tunneling, sim.fields.tunneling):
                print("\n".join(field.to_rows()))
                print()
            return 0

        provider = ScriptedInput.from_keys(args.keys) if args.keys is not None else KeyboardInput()
        renderer = TextRenderer(sys.stdout)
        outcome = run_game(
            config,
            load=args.load,
            save=args.save,
            num_monsters=args.nummon,
            input_provider=provider,
            renderer=renderer,
            save_path=args.save_path,
        )
    except RlgError as e:
        logger.error("%s", e)
        return 1

    logger.debug("Run finished: %s (%s)", outcome.value, final_message(outcome))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
