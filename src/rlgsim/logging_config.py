import logging
import os
import sys
from typing import Optional, TextIO

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"


def configure_logging(level: int = logging.WARNING, stream: Optional[TextIO] = None) -> None:
    """Install a single stream handler on the root logger.

    RLG_LOG_LEVEL (e.g. "DEBUG") overrides `level` when set. Logs go to
    stderr by default so they never interleave with the rendered map.
    """
    level_name = os.getenv("RLG_LOG_LEVEL")
    if level_name:
        level = getattr(logging, level_name.upper(), level)

    handler = logging.StreamHandler(stream=stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))

    root = logging.getLogger()
    root.setLevel(level)
    # Remove existing handlers to avoid duplicates in repeated test runs
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
