"""Search primitives: generic A* and multi-source distance fields."""
from .astar import ConnectLocations, SearchProblem, astar
from .dijkstra import DistanceField, step_toward

__all__ = ["SearchProblem", "astar", "ConnectLocations", "DistanceField", "step_toward"]
