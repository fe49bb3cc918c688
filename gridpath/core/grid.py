"""Bounded 2-D terrain grid holding the node arena."""

from __future__ import annotations

from typing import Iterator, List, Optional

from ..errors import InvalidCoordinateError, UndefinedCapabilityError
from .costs import CostModel, OctileCostModel
from .node import Coord, Node


class GridMap:
    """Rectangular grid of :class:`Node` objects indexed by ``(x, y)``.

    All nodes share one cost model. Out-of-range lookups return ``None``.
    """

    def __init__(
        self, width: int, height: int, cost_model: CostModel | None = None
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"grid size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.cost_model: CostModel = cost_model if cost_model is not None else OctileCostModel()
        self.tile_map: List[List[Node]] = [
            [Node(x, y, cost_model=self.cost_model) for x in range(width)]
            for y in range(height)
        ]
        self._start: Optional[Coord] = None
        self._goal: Optional[Coord] = None

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def start_position(self) -> Optional[Coord]:
        return self._start

    @property
    def goal_position(self) -> Optional[Coord]:
        return self._goal

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def valid_coordinate(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def node_at(self, x: int, y: int) -> Node | None:
        if not self.valid_coordinate(x, y):
            return None
        return self.tile_map[y][x]

    def nodes(self) -> Iterator[Node]:
        for row in self.tile_map:
            yield from row

    def start_node(self) -> Node:
        if self._start is None:
            raise UndefinedCapabilityError("grid has no start node designated")
        return self.tile_map[self._start[1]][self._start[0]]

    def goal_node(self) -> Node:
        if self._goal is None:
            raise UndefinedCapabilityError("grid has no goal node designated")
        return self.tile_map[self._goal[1]][self._goal[0]]

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------
    def set_start(self, x: int, y: int) -> None:
        self._require(x, y, "start")
        self._start = (x, y)

    def set_goal(self, x: int, y: int) -> None:
        self._require(x, y, "goal")
        self._goal = (x, y)

    def set_walkable(self, x: int, y: int, walkable: bool = True) -> None:
        self._require(x, y, "cell")
        self.tile_map[y][x].walkable = walkable

    def set_obstacles(self, cells: set[Coord] | list[Coord]) -> None:
        """Mark every position in ``cells`` as blocked."""
        for x, y in cells:
            self.set_walkable(x, y, False)

    def set_weight(self, x: int, y: int, weight: float) -> None:
        self._require(x, y, "cell")
        if weight < 1:
            raise ValueError(f"weight must be >= 1, got {weight}")
        self.tile_map[y][x].weight = float(weight)

    def reset_search_state(self) -> None:
        for node in self.nodes():
            node.reset_search_state()

    def _require(self, x: int, y: int, role: str) -> None:
        if not self.valid_coordinate(x, y):
            raise InvalidCoordinateError(x, y, role)


__all__ = ["GridMap"]
