"""
delve package root.

Procedural dungeon levels on a dense 2-D tile grid, with A* and Dijkstra-map
pathfinding for connecting spaces and guiding navigation. Rendering and input
handling live outside this package; they consume Grid, the start Location and
DistanceField queries.
"""

__version__ = "0.3.0"

from .config import GenerationSettings
from .dungeon import Grid, Location, Terrain, Tile, generate
from .exceptions import ConfigError, DelveError, GenerationError
from .pathfinding import DistanceField

__all__ = [
    "__version__",
    "GenerationSettings",
    "Grid",
    "Location",
    "Terrain",
    "Tile",
    "generate",
    "DistanceField",
    "DelveError",
    "ConfigError",
    "GenerationError",
]
