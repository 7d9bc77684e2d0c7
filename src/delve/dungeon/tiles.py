from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, auto


@dataclass(frozen=True)
class Location:
    """Integer grid coordinate. (0,0) is top-left; x grows right, y grows down."""

    x: int
    y: int

    def manhattan(self, other: "Location") -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def euclidean(self, other: "Location") -> int:
        """Straight-line distance, floored to an integer."""
        dx = self.x - other.x
        dy = self.y - other.y
        return math.isqrt(dx * dx + dy * dy)

    def offset(self, dx: int, dy: int) -> "Location":
        return Location(self.x + dx, self.y + dy)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


class Terrain(Enum):
    """Terrain tags.

    - NOTHING: unallocated void, not yet carved
    - FLOOR: walkable open tile
    - WALL: blocking boundary
    - DEBUG: marker used to visualise carved connections; walkable
    """

    NOTHING = auto()
    FLOOR = auto()
    WALL = auto()
    DEBUG = auto()

    @property
    def is_walkable(self) -> bool:
        return self in (Terrain.FLOOR, Terrain.DEBUG)

    @property
    def glyph(self) -> str:
        """Single-character visualisation used by the ASCII dump and logs."""
        return _GLYPHS[self]

    @classmethod
    def from_glyph(cls, ch: str) -> "Terrain":
        try:
            return _TERRAIN_BY_GLYPH[ch]
        except KeyError:
            raise ValueError(f"Unknown terrain glyph: {ch!r}") from None


_GLYPHS = {
    Terrain.NOTHING: " ",
    Terrain.FLOOR: ".",
    Terrain.WALL: "#",
    Terrain.DEBUG: "^",
}
_TERRAIN_BY_GLYPH = {glyph: terrain for terrain, glyph in _GLYPHS.items()}


@dataclass(frozen=True)
class Tile:
    loc: Location
    terrain: Terrain


__all__ = ["Location", "Terrain", "Tile"]
