from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .config import GenerationSettings
from .dungeon.generator import LevelGenerator
from .exceptions import ConfigError, GenerationError
from .logging_config import configure_logging

logger = logging.getLogger("delve")


def _build_settings(args: argparse.Namespace) -> GenerationSettings:
    settings = GenerationSettings.from_yaml(args.config) if args.config else GenerationSettings()
    settings = GenerationSettings.from_env(base=settings)
    overrides = {
        name: value
        for name, value in (
            ("seed", args.seed),
            ("width", args.width),
            ("height", args.height),
            ("extra_connections", args.connections),
        )
        if value is not None
    }
    if args.mark_connections:
        overrides["mark_connections"] = True
    return settings.replace(**overrides)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="delve",
        description="Generate a dungeon level and print it as ASCII",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed (random when omitted)")
    parser.add_argument("--width", type=int, default=None, help="Level width in tiles")
    parser.add_argument("--height", type=int, default=None, help="Level height in tiles")
    parser.add_argument("--connections", type=int, default=None, help="Extra A* connections to attempt")
    parser.add_argument("--mark-connections", action="store_true", help="Draw A* connections as debug terrain")
    parser.add_argument("--config", type=Path, default=None, help="YAML file with generation settings")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")

    args = parser.parse_args(argv)
    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    configure_logging(level)

    try:
        settings = _build_settings(args)
        generator = LevelGenerator(settings)
        grid, start = generator.generate()
    except (ConfigError, FileNotFoundError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1
    except GenerationError as exc:
        logger.error("%s", exc)
        return 1

    for line in grid.to_ascii_lines(marker=start):
        print(line.rstrip())
    print(f"seed={generator.stats.seed} start={start}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
