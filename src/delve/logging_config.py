import logging
import os
import sys


def configure_logging(default_level: int = logging.INFO) -> None:
    """Configure the root logger with a single stream handler.

    Respects DELVE_LOG_LEVEL env var if present.
    """
    level_name = os.getenv("DELVE_LOG_LEVEL")
    level = default_level
    if level_name:
        level = getattr(logging, level_name.upper(), default_level)
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter("[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"))

    root = logging.getLogger()
    root.setLevel(level)
    # Remove existing handlers to avoid duplicates in repeated runs
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
