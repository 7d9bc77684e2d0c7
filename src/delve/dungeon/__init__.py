"""
Dungeon level construction.

Grid primitives, relocatable features, the weighted shape table and the
hallway-growth generator, plus movement helpers for consumers of a finished
level.
"""
from .feature import Bounds, Feature, HorizontalAlignment, VerticalAlignment
from .generator import LevelGenerator, generate, remove_wall_slivers, surround_floors_with_walls
from .grid import Grid
from .movement import MoveResult, try_move
from .random_table import WeightedTable
from .shapes import ShapeKind, ShapeSpec, build_shape, default_shape_table
from .tiles import Location, Terrain, Tile

__all__ = [
    "Bounds",
    "Feature",
    "HorizontalAlignment",
    "VerticalAlignment",
    "LevelGenerator",
    "generate",
    "surround_floors_with_walls",
    "remove_wall_slivers",
    "Grid",
    "MoveResult",
    "try_move",
    "WeightedTable",
    "ShapeKind",
    "ShapeSpec",
    "build_shape",
    "default_shape_table",
    "Location",
    "Terrain",
    "Tile",
]
