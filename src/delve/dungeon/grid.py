from __future__ import annotations

import logging
from typing import Iterator, List, Mapping, Optional, Sequence, Tuple

from .tiles import Location, Terrain, Tile

logger = logging.getLogger(__name__)

# Clockwise from north, cardinals before diagonals. Search tie-breaking and
# seeded reproducibility depend on this order.
CARDINAL_OFFSETS: Tuple[Tuple[int, int], ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))
DIAGONAL_OFFSETS: Tuple[Tuple[int, int], ...] = ((1, -1), (1, 1), (-1, 1), (-1, -1))


class Grid:
    """
    Dense width x height tile storage for one dungeon level.

    Tiles live in a flat row-major list (index = y * width + x). Every access is
    bounds-checked; touching a location outside the grid is a programming error
    and raises IndexError rather than being clipped or ignored.
    """

    def __init__(self, width: int, height: int, fill: Terrain = Terrain.NOTHING) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("Grid width/height must be > 0")
        self.width = width
        self.height = height
        self._terrain: List[Terrain] = [fill] * (width * height)
        logger.debug("Grid created: %dx%d filled with %s", width, height, fill.name)

    # ---- Safety / Bounds -------------------------------------------------
    def in_bounds(self, loc: Location) -> bool:
        return 0 <= loc.x < self.width and 0 <= loc.y < self.height

    def _index(self, loc: Location) -> int:
        if not self.in_bounds(loc):
            raise IndexError(
                f"Tile out of bounds: {loc} not in [0,{self.width})x[0,{self.height})"
            )
        return loc.y * self.width + loc.x

    def get(self, loc: Location) -> Terrain:
        return self._terrain[self._index(loc)]

    def set(self, loc: Location, terrain: Terrain) -> None:
        self._terrain[self._index(loc)] = terrain

    def tile(self, loc: Location) -> Tile:
        return Tile(loc, self.get(loc))

    # ---- Query -----------------------------------------------------------
    def adjacent(self, loc: Location, include_diagonals: bool = False) -> List[Location]:
        """Neighbouring locations clipped to the grid, in a fixed order.

        Order is N, E, S, W and then (when requested) NE, SE, SW, NW.
        """
        offsets = CARDINAL_OFFSETS + DIAGONAL_OFFSETS if include_diagonals else CARDINAL_OFFSETS
        out: List[Location] = []
        for dx, dy in offsets:
            n = Location(loc.x + dx, loc.y + dy)
            if self.in_bounds(n):
                out.append(n)
        return out

    def is_walkable(self, loc: Location) -> bool:
        if not self.in_bounds(loc):
            return False
        return self.get(loc).is_walkable

    def iter(self) -> Iterator[Tuple[Tile, Location]]:
        """Yield (Tile, Location) pairs in row-major order.

        Each call returns a fresh generator starting from the top-left tile.
        """
        width = self.width
        for index, terrain in enumerate(self._terrain):
            loc = Location(index % width, index // width)
            yield Tile(loc, terrain), loc

    def __iter__(self) -> Iterator[Tuple[Tile, Location]]:
        return self.iter()

    def locations_of(self, terrain: Terrain) -> List[Location]:
        width = self.width
        return [
            Location(i % width, i // width) for i, t in enumerate(self._terrain) if t is terrain
        ]

    def count(self, terrain: Terrain) -> int:
        return self._terrain.count(terrain)

    # ---- Export / Compare -----------------------------------------------
    def to_ascii_lines(self, marker: Optional[Location] = None, marker_glyph: str = "@") -> List[str]:
        lines: List[str] = []
        for y in range(self.height):
            row = self._terrain[y * self.width:(y + 1) * self.width]
            chars = [t.glyph for t in row]
            if marker is not None and marker.y == y and 0 <= marker.x < self.width:
                chars[marker.x] = marker_glyph
            lines.append("".join(chars))
        return lines

    def snapshot(self) -> Tuple[Tuple[str, ...], ...]:
        """Deterministic, hashable snapshot of the terrain for equality tests."""
        return tuple(
            tuple(t.name for t in self._terrain[y * self.width:(y + 1) * self.width])
            for y in range(self.height)
        )

    def copy(self) -> "Grid":
        clone = Grid(self.width, self.height)
        clone._terrain = list(self._terrain)
        return clone

    @classmethod
    def from_ascii(cls, rows: Sequence[str], legend: Optional[Mapping[str, Terrain]] = None) -> "Grid":
        """
        Build a Grid from ASCII rows for tests/tools.

        Glyphs follow Terrain.glyph ('.', '#', ' ', '^') unless `legend` maps
        extra characters to terrain.
        """
        if not rows:
            raise ValueError("rows must not be empty")
        width = len(rows[0])
        for r in rows:
            if len(r) != width:
                raise ValueError("All rows must be same width")
        grid = cls(width, len(rows))
        legend = dict(legend or {})
        for y, row in enumerate(rows):
            for x, ch in enumerate(row):
                terrain = legend[ch] if ch in legend else Terrain.from_glyph(ch)
                grid.set(Location(x, y), terrain)
        return grid

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height})"


__all__ = ["Grid", "CARDINAL_OFFSETS", "DIAGONAL_OFFSETS"]
