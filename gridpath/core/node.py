"""Per-cell search state used by the A* engine."""

from __future__ import annotations

from typing import Optional, Tuple

from ..errors import UndefinedCapabilityError
from .costs import CostModel

Coord = Tuple[int, int]


class Node:
    """A single grid cell.

    Nodes are owned by :class:`~gridpath.core.grid.GridMap`. The search
    engine reads ``position`` and ``walkable`` and writes the cost fields
    and the back-pointer. ``previous`` holds the predecessor's position
    rather than the node itself; the grid resolves it.

    Equality and hashing use ``position`` only.
    """

    __slots__ = (
        "x",
        "y",
        "walkable",
        "weight",
        "cost_model",
        "past_cost",
        "future_cost",
        "previous",
    )

    def __init__(
        self,
        x: int,
        y: int,
        walkable: bool = True,
        weight: float = 1.0,
        cost_model: CostModel | None = None,
    ) -> None:
        if weight < 1:
            raise ValueError(f"weight must be >= 1, got {weight}")
        self.x = x
        self.y = y
        self.walkable = walkable
        self.weight = float(weight)
        self.cost_model = cost_model
        self.past_cost: float = 0.0
        self.future_cost: float = 0.0
        self.previous: Optional[Coord] = None

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------
    @property
    def position(self) -> Coord:
        return (self.x, self.y)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self.position == other.position

    def __hash__(self) -> int:
        return hash(self.position)

    def __repr__(self) -> str:
        return f"Node({self.x}, {self.y})"

    def is_walkable(self) -> bool:
        return self.walkable

    # ------------------------------------------------------------------
    # Search state
    # ------------------------------------------------------------------
    @property
    def total_cost(self) -> float:
        """Sum of ``past_cost`` and ``future_cost``."""
        return self.past_cost + self.future_cost

    def set_previous(self, node: "Node" | None) -> None:
        self.previous = None if node is None else node.position

    def candidate_past_cost(self, from_node: "Node") -> float:
        """Return the past cost this node would have if reached via ``from_node``."""

        return from_node.past_cost + self._costs().step_cost(from_node, self)

    def set_past_cost(self, from_node: "Node") -> None:
        self.past_cost = self.candidate_past_cost(from_node)

    def set_future_cost(self, goal: "Node") -> None:
        """Store the heuristic estimate from this node to ``goal``."""

        self.future_cost = self._costs().estimate(self, goal)

    def reset_search_state(self) -> None:
        self.past_cost = 0.0
        self.future_cost = 0.0
        self.previous = None

    def _costs(self) -> CostModel:
        if self.cost_model is None:
            raise UndefinedCapabilityError(
                f"Node {self.position} has no cost model assigned"
            )
        return self.cost_model


__all__ = ["Coord", "Node"]
