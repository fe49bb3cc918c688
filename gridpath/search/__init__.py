"""A* search engine and its movement models."""

from .astar import AStarSearch
from .neighbors import (
    LegacyNeighborhood,
    MooreNeighborhood,
    Neighborhood,
    VonNeumannNeighborhood,
    get_neighborhood,
)
from .trace import SearchTrace

__all__ = [
    "AStarSearch",
    "LegacyNeighborhood",
    "MooreNeighborhood",
    "Neighborhood",
    "SearchTrace",
    "VonNeumannNeighborhood",
    "get_neighborhood",
]
