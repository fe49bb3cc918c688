"""Pluggable movement cost and heuristic strategies."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Dict, Type

if TYPE_CHECKING:
    from .node import Node


class CostModel(ABC):
    """Cost of moving between adjacent nodes plus an estimate to the goal.

    Step costs are the geometric move cost scaled by the destination's
    ``weight``. Weights are at least 1, so the unweighted estimates never
    overshoot the true remaining cost.
    """

    name: str = "abstract"

    @abstractmethod
    def move_cost(self, dx: int, dy: int) -> float:
        """Return the unweighted cost of a move by ``(dx, dy)``."""
        raise NotImplementedError

    @abstractmethod
    def distance(self, dx: int, dy: int) -> float:
        """Return the estimated cost of covering ``(dx, dy)``."""
        raise NotImplementedError

    def step_cost(self, from_node: "Node", to_node: "Node") -> float:
        """Return the cost of stepping from ``from_node`` onto ``to_node``."""

        dx = abs(to_node.x - from_node.x)
        dy = abs(to_node.y - from_node.y)
        return self.move_cost(dx, dy) * to_node.weight

    def estimate(self, node: "Node", goal: "Node") -> float:
        """Return the heuristic estimate from ``node`` to ``goal``."""

        return self.distance(abs(goal.x - node.x), abs(goal.y - node.y))


class ManhattanCostModel(CostModel):
    """Diagonal moves cost two orthogonal steps."""

    name = "manhattan"

    def move_cost(self, dx: int, dy: int) -> float:
        return float(dx + dy)

    def distance(self, dx: int, dy: int) -> float:
        return float(dx + dy)


class OctileCostModel(CostModel):
    """Orthogonal moves cost 1, diagonal moves cost sqrt(2)."""

    name = "octile"

    def move_cost(self, dx: int, dy: int) -> float:
        if dx and dy:
            return math.sqrt(2) * min(dx, dy) + abs(dx - dy)
        return float(dx + dy)

    def distance(self, dx: int, dy: int) -> float:
        return max(dx, dy) + (math.sqrt(2) - 1) * min(dx, dy)


class EuclideanCostModel(CostModel):
    """Straight-line distance for both moves and estimates."""

    name = "euclidean"

    def move_cost(self, dx: int, dy: int) -> float:
        return math.hypot(dx, dy)

    def distance(self, dx: int, dy: int) -> float:
        return math.hypot(dx, dy)


_COST_MODELS: Dict[str, Type[CostModel]] = {
    cls.name: cls
    for cls in (ManhattanCostModel, OctileCostModel, EuclideanCostModel)
}

DEFAULT_COST_MODEL = OctileCostModel.name


def get_cost_model(name: str) -> CostModel:
    """Return a new cost model registered under ``name``."""

    try:
        return _COST_MODELS[name.lower()]()
    except KeyError:
        known = ", ".join(sorted(_COST_MODELS))
        raise ValueError(f"Unknown cost model: {name} (expected one of {known})") from None


def available_cost_models() -> list[str]:
    return sorted(_COST_MODELS)


__all__ = [
    "CostModel",
    "ManhattanCostModel",
    "OctileCostModel",
    "EuclideanCostModel",
    "DEFAULT_COST_MODEL",
    "get_cost_model",
    "available_cost_models",
]
