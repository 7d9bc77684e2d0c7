from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass
class GenerationSettings:
    """Tunable parameters for level generation.

    Ranges follow Python's half-open convention: hallway lengths are drawn from
    [hallway_min_length, hallway_max_length), room sides from
    [room_min_size, room_max_size) and radii from [radius_min, radius_max).

    Settings are validated on construction; invalid values raise ConfigError.
    """

    width: int = 80
    height: int = 50
    seed: Optional[int] = None

    # Growth loop
    growth_attempts: int = 300
    hallway_min_length: int = 5
    hallway_max_length: int = 15

    # Seed placement: anchors are drawn within +/- seed_jitter of the centre
    seed_jitter: int = 5
    max_seed_attempts: int = 1000

    # A* loops carved between existing walls after growth
    extra_connections: int = 3
    mark_connections: bool = False

    # Shape table
    room_min_size: int = 3
    room_max_size: int = 15
    radius_min: int = 3
    radius_max: int = 7
    room_weight: int = 3
    diamond_weight: int = 1
    circle_weight: int = 1

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if self.width < 3 or self.height < 3:
            raise ConfigError(
                f"Level must be at least 3x3 to keep a one-tile margin, got {self.width}x{self.height}"
            )
        if self.growth_attempts < 0:
            raise ConfigError(f"growth_attempts must be >= 0, got {self.growth_attempts}")
        if self.extra_connections < 0:
            raise ConfigError(f"extra_connections must be >= 0, got {self.extra_connections}")
        if self.seed_jitter < 0:
            raise ConfigError(f"seed_jitter must be >= 0, got {self.seed_jitter}")
        if self.max_seed_attempts < 1:
            raise ConfigError(f"max_seed_attempts must be >= 1, got {self.max_seed_attempts}")
        for name, low, high in (
            ("hallway length", self.hallway_min_length, self.hallway_max_length),
            ("room size", self.room_min_size, self.room_max_size),
            ("radius", self.radius_min, self.radius_max),
        ):
            if low < 1 or high <= low:
                raise ConfigError(f"Invalid {name} range [{low}, {high})")
        weights = (self.room_weight, self.diamond_weight, self.circle_weight)
        if any(w < 0 for w in weights):
            raise ConfigError(f"Shape weights must be non-negative, got {weights}")
        if sum(weights) == 0:
            raise ConfigError("At least one shape weight must be positive")

    def replace(self, **overrides: Any) -> "GenerationSettings":
        return dataclasses.replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)

    # ---- Loading ---------------------------------------------------------
    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GenerationSettings":
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown generation settings: %s", ", ".join(unknown))
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def from_yaml(cls, path: Path) -> "GenerationSettings":
        """Load settings from a YAML mapping. Missing fields fall back to defaults."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with path.open("r", encoding="utf-8") as f:
            try:
                raw = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(f"Could not parse {path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise ConfigError(f"Expected a mapping at the top of {path}, got {type(raw).__name__}")
        settings = cls.from_mapping(raw)
        logger.info("Loaded generation settings from %s", path)
        return settings

    def to_yaml(self, path: Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(self.to_dict(), f, sort_keys=False)
        logger.info("Saved generation settings to %s", path)

    @classmethod
    def from_env(cls, prefix: str = "DELVE_", base: Optional["GenerationSettings"] = None) -> "GenerationSettings":
        """Overlay DELVE_<FIELD> environment variables onto `base` (or defaults).

        e.g. DELVE_WIDTH=60 DELVE_SEED=42 DELVE_MARK_CONNECTIONS=true
        """
        base = base or cls()
        overrides: Dict[str, Any] = {}
        for f in dataclasses.fields(cls):
            key = prefix + f.name.upper()
            raw = os.environ.get(key)
            if raw is None:
                continue
            current = getattr(base, f.name)
            try:
                overrides[f.name] = _parse_env_value(f.name, raw, current)
            except ValueError as exc:
                raise ConfigError(f"Invalid value for {key}: {raw!r}") from exc
        if overrides:
            logger.debug("Environment overrides: %s", overrides)
        return base.replace(**overrides)


def _parse_env_value(name: str, raw: str, current: Any) -> Any:
    value = raw.strip()
    if name == "seed":
        return int(value) if value else None
    if isinstance(current, bool):
        lowered = value.lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ValueError(value)
    return int(value)


__all__ = ["GenerationSettings"]
