"""Shortest walkable paths on bounded 2-D grids using A* search."""

from .core.costs import get_cost_model
from .core.grid import GridMap
from .core.node import Node
from .errors import (
    InvalidCoordinateError,
    PathfindingError,
    PathReconstructionError,
    UndefinedCapabilityError,
)
from .search.astar import AStarSearch
from .search.neighbors import get_neighborhood

__version__ = "0.1.0"

__all__ = [
    "AStarSearch",
    "GridMap",
    "InvalidCoordinateError",
    "Node",
    "PathfindingError",
    "PathReconstructionError",
    "UndefinedCapabilityError",
    "get_cost_model",
    "get_neighborhood",
]
