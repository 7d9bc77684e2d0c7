from __future__ import annotations

from enum import Enum
from typing import Iterable, Iterator, List, NamedTuple, Tuple

from .tiles import Location, Terrain, Tile


class HorizontalAlignment(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class VerticalAlignment(Enum):
    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"


class Bounds(NamedTuple):
    min_x: int
    max_x: int
    min_y: int
    max_y: int

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1


class Feature:
    """A relocatable arrangement of terrain (room, hallway, ...).

    Tiles are kept in creation order. A Feature knows nothing about the Grid:
    checking that a placement fits is the generator's job.
    """

    __slots__ = ("_tiles",)

    def __init__(self, tiles: Iterable[Tile]) -> None:
        self._tiles: Tuple[Tile, ...] = tuple(tiles)
        if not self._tiles:
            raise ValueError("Feature must contain at least one tile")

    # ---- Shapes ------------------------------------------------------------
    @classmethod
    def room(cls, width: int, height: int) -> "Feature":
        """Solid rectangle of floor. Walls come from the surrounding pass."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Room size must be positive, got {width}x{height}")
        return cls(
            Tile(Location(x, y), Terrain.FLOOR) for x in range(width) for y in range(height)
        )

    @classmethod
    def diamond_room(cls, radius: int) -> "Feature":
        """Manhattan ball: floor inside the radius, wall on it."""
        return cls._ball(radius, Location.manhattan)

    @classmethod
    def circle_room(cls, radius: int) -> "Feature":
        """Euclidean ball: floor inside the radius, wall on it."""
        return cls._ball(radius, Location.euclidean)

    @classmethod
    def _ball(cls, radius: int, distance) -> "Feature":
        if radius <= 0:
            raise ValueError(f"Radius must be positive, got {radius}")
        center = Location(0, 0)
        tiles: List[Tile] = []
        for i in range(-radius, radius + 1):
            for j in range(-radius, radius + 1):
                loc = Location(i, j)
                dist = distance(loc, center)
                if dist < radius:
                    tiles.append(Tile(loc, Terrain.FLOOR))
                elif dist == radius:
                    tiles.append(Tile(loc, Terrain.WALL))
        return cls(tiles)

    @classmethod
    def hallway(cls, length: int, horizontal: bool) -> "Feature":
        if length <= 0:
            raise ValueError(f"Hallway length must be positive, got {length}")
        if horizontal:
            return cls(Tile(Location(i, 0), Terrain.FLOOR) for i in range(length))
        return cls(Tile(Location(0, i), Terrain.FLOOR) for i in range(length))

    # ---- Geometry ----------------------------------------------------------
    def bounds(self) -> Bounds:
        xs = [t.loc.x for t in self._tiles]
        ys = [t.loc.y for t in self._tiles]
        return Bounds(min(xs), max(xs), min(ys), max(ys))

    def translate(self, dx: int, dy: int) -> "Feature":
        return Feature(Tile(t.loc.offset(dx, dy), t.terrain) for t in self._tiles)

    def place(
        self,
        vertical: VerticalAlignment,
        horizontal: HorizontalAlignment,
        anchor: Location,
    ) -> "Feature":
        """Translate so that the aligned edge/midpoint of the bounding box sits on `anchor`.

        The centre of a span is min + (max - min + 1) // 2.
        """
        b = self.bounds()
        if horizontal is HorizontalAlignment.LEFT:
            dx = anchor.x - b.min_x
        elif horizontal is HorizontalAlignment.RIGHT:
            dx = anchor.x - b.max_x
        else:
            dx = anchor.x - (b.min_x + (b.max_x - b.min_x + 1) // 2)
        if vertical is VerticalAlignment.TOP:
            dy = anchor.y - b.min_y
        elif vertical is VerticalAlignment.BOTTOM:
            dy = anchor.y - b.max_y
        else:
            dy = anchor.y - (b.min_y + (b.max_y - b.min_y + 1) // 2)
        return self.translate(dx, dy)

    def overlaps(self, other: "Feature") -> bool:
        """True if any tile (location and terrain) appears in both features."""
        mine = set(self._tiles)
        return any(t in mine for t in other._tiles)

    def intersects_bounds(self, other: "Feature") -> bool:
        """Axis-aligned bounding-box test. Cheaper than, and not equivalent to, overlaps()."""
        a = self.bounds()
        b = other.bounds()
        return a.min_x <= b.max_x and b.min_x <= a.max_x and a.min_y <= b.max_y and b.min_y <= a.max_y

    # ---- Access ------------------------------------------------------------
    @property
    def tiles(self) -> Tuple[Tile, ...]:
        return self._tiles

    def locations(self) -> List[Location]:
        return [t.loc for t in self._tiles]

    def walls(self) -> List[Location]:
        return [t.loc for t in self._tiles if t.terrain is Terrain.WALL]

    def floors(self) -> List[Location]:
        return [t.loc for t in self._tiles if t.terrain is Terrain.FLOOR]

    def __iter__(self) -> Iterator[Tile]:
        return iter(self._tiles)

    def __len__(self) -> int:
        return len(self._tiles)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Feature):
            return NotImplemented
        return self._tiles == other._tiles

    def __hash__(self) -> int:
        return hash(self._tiles)

    def __repr__(self) -> str:
        b = self.bounds()
        return f"Feature({len(self._tiles)} tiles, x={b.min_x}..{b.max_x}, y={b.min_y}..{b.max_y})"


__all__ = ["Feature", "Bounds", "HorizontalAlignment", "VerticalAlignment"]
