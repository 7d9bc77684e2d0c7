"""Shape kinds the generator can draw from its weighted table.

Each table entry is a ShapeSpec: a tag plus the size range to roll. A single
factory, build_shape(), turns a spec into a concrete Feature with the caller's
RNG, so sampling the table and rolling dimensions stay reproducible per seed.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum

from ..config import GenerationSettings
from .feature import Feature
from .random_table import WeightedTable


class ShapeKind(Enum):
    ROOM = "room"
    DIAMOND = "diamond"
    CIRCLE = "circle"


@dataclass(frozen=True)
class ShapeSpec:
    kind: ShapeKind
    min_size: int
    max_size: int  # exclusive

    def __post_init__(self) -> None:
        if self.min_size < 1 or self.max_size <= self.min_size:
            raise ValueError(f"Invalid size range [{self.min_size}, {self.max_size}) for {self.kind.value}")


def build_shape(spec: ShapeSpec, rng: random.Random) -> Feature:
    if spec.kind is ShapeKind.ROOM:
        width = rng.randrange(spec.min_size, spec.max_size)
        height = rng.randrange(spec.min_size, spec.max_size)
        return Feature.room(width, height)
    radius = rng.randrange(spec.min_size, spec.max_size)
    if spec.kind is ShapeKind.DIAMOND:
        return Feature.diamond_room(radius)
    if spec.kind is ShapeKind.CIRCLE:
        return Feature.circle_room(radius)
    raise ValueError(f"Unsupported shape kind: {spec.kind!r}")


def default_shape_table(settings: GenerationSettings) -> WeightedTable[ShapeSpec]:
    """Table of the shapes enabled in `settings`; zero-weight shapes are left out."""
    candidates = (
        (ShapeSpec(ShapeKind.ROOM, settings.room_min_size, settings.room_max_size), settings.room_weight),
        (ShapeSpec(ShapeKind.DIAMOND, settings.radius_min, settings.radius_max), settings.diamond_weight),
        (ShapeSpec(ShapeKind.CIRCLE, settings.radius_min, settings.radius_max), settings.circle_weight),
    )
    return WeightedTable([(spec, weight) for spec, weight in candidates if weight > 0])


__all__ = ["ShapeKind", "ShapeSpec", "build_shape", "default_shape_table"]
