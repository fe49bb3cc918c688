"""Grid, node and cost-model collaborators of the search engine."""

from .costs import (
    CostModel,
    EuclideanCostModel,
    ManhattanCostModel,
    OctileCostModel,
    get_cost_model,
)
from .grid import GridMap
from .node import Coord, Node

__all__ = [
    "Coord",
    "CostModel",
    "EuclideanCostModel",
    "GridMap",
    "ManhattanCostModel",
    "Node",
    "OctileCostModel",
    "get_cost_model",
]
