"""A* search over a :class:`~gridpath.core.grid.GridMap`."""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Deque, Dict, List, Set

from ..core.node import Coord, Node
from ..errors import (
    InvalidCoordinateError,
    PathReconstructionError,
    UndefinedCapabilityError,
)
from .neighbors import LegacyNeighborhood, Neighborhood
from .trace import SearchTrace


class AStarSearch:
    """Best-first search from a start cell to a goal cell.

    The engine keeps its own open and closed sets, rebuilt on every call,
    and writes cost and back-pointer fields on the grid's nodes in place.
    Calls on the same grid must not overlap.

    Parameters
    ----------
    grid:
        Object providing ``valid_coordinate``, ``node_at``, ``start_node``
        and ``goal_node``.
    neighborhood:
        Movement model; defaults to :class:`LegacyNeighborhood`.
    logger:
        Logger receiving per-search trace output.
    record_events:
        Keep a structured event list on each :class:`SearchTrace`.
    """

    def __init__(
        self,
        grid: Any,
        neighborhood: Neighborhood | None = None,
        logger: logging.Logger | None = None,
        record_events: bool = False,
    ) -> None:
        self.grid = grid
        self.neighborhood = neighborhood if neighborhood is not None else LegacyNeighborhood()
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.record_events = record_events
        self.open_list: List[Node] = []
        self._open_positions: Set[Coord] = set()
        self.closed_list: Dict[Coord, Node] = {}
        self.last_trace: SearchTrace | None = None
        self._trace: SearchTrace | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def find_path(self, from_x: int, from_y: int, to_x: int, to_y: int) -> List[Node]:
        """Return the nodes from start to goal inclusive, or ``[]`` if unreachable.

        Raises :class:`InvalidCoordinateError` before touching any node
        when either coordinate is rejected by the grid.
        """

        if not self.grid.valid_coordinate(from_x, from_y):
            raise InvalidCoordinateError(from_x, from_y, "FROM")
        if not self.grid.valid_coordinate(to_x, to_y):
            raise InvalidCoordinateError(to_x, to_y, "TO")

        self.open_list = []
        self._open_positions = set()
        self.closed_list = {}
        trace = SearchTrace(self.logger, self.record_events)
        self._trace = trace
        self.last_trace = trace
        trace.log.debug("searching (%d, %d) -> (%d, %d)", from_x, from_y, to_x, to_y)

        try:
            goal = self._node_at(to_x, to_y)
            start = self._node_at(from_x, from_y)
            start.reset_search_state()
            start.set_future_cost(goal)
            self._open(start)

            while self.open_list:
                current = self._lowest_cost_node()
                self._close(current)
                trace.expand(current)
                if current.position == (to_x, to_y):
                    path = self.calc_path(start, current)
                    trace.finish(path)
                    return path

                for neighbour in self.find_adjacent_nodes_to(current):
                    self._relax(neighbour, current, goal)

            trace.finish([])
            return []
        finally:
            self._trace = None

    def find_path_to_goal(self) -> List[Node]:
        """Search between the grid's designated start and goal nodes."""

        start = self.grid.start_node()
        goal = self.grid.goal_node()
        return self.find_path(start.x, start.y, goal.x, goal.y)

    def find_adjacent_nodes_to(self, node: Node) -> List[Node]:
        """Return walkable, not yet closed neighbours of ``node``."""

        adjacent: List[Node] = []
        for x, y in self.neighborhood.candidate_positions(node.x, node.y):
            candidate = self.grid.node_at(x, y)
            if (
                candidate is not None
                and candidate.is_walkable()
                and candidate.position not in self.closed_list
            ):
                adjacent.append(candidate)
        if self._trace is not None:
            self._trace.neighbours(node, adjacent)
        return adjacent

    def calc_path(self, start: Node, goal: Node) -> List[Node]:
        """Follow back-pointers from ``goal`` to ``start``.

        The walk is bounded by the size of the closed set; running out of
        steps or hitting a missing predecessor raises
        :class:`PathReconstructionError`.
        """

        path: Deque[Node] = deque([goal])
        if goal == start:
            return list(path)

        current = goal
        limit = len(self.closed_list)
        for _ in range(limit):
            if current.previous is None:
                raise PathReconstructionError(
                    f"{current.position} has no predecessor on the way to {start.position}"
                )
            current = self.grid.node_at(*current.previous)
            if current is None:
                raise PathReconstructionError(
                    f"back-pointer leads outside the grid from {path[0].position}"
                )
            path.appendleft(current)
            if current == start:
                return list(path)

        raise PathReconstructionError(
            f"back-pointers from {goal.position} did not reach {start.position} "
            f"within {limit} steps"
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _node_at(self, x: int, y: int) -> Node:
        node = self.grid.node_at(x, y)
        if node is None:
            raise UndefinedCapabilityError(f"grid returned no node at ({x}, {y})")
        return node

    def _open(self, node: Node) -> None:
        self.open_list.append(node)
        self._open_positions.add(node.position)

    def _close(self, node: Node) -> None:
        self.open_list.remove(node)
        self._open_positions.discard(node.position)
        self.closed_list[node.position] = node

    def _lowest_cost_node(self) -> Node:
        # Linear scan; the first node with the strictly lowest f-cost wins.
        cheapest = self.open_list[0]
        for node in self.open_list:
            if node.total_cost < cheapest.total_cost:
                cheapest = node
        return cheapest

    def _relax(self, neighbour: Node, current: Node, goal: Node) -> None:
        trace = self._trace
        if neighbour.position not in self._open_positions:
            neighbour.set_previous(current)
            neighbour.set_future_cost(goal)
            neighbour.set_past_cost(current)
            self._open(neighbour)
            if trace is not None:
                trace.discover(neighbour, current)
            return

        # Future cost depends only on position and the fixed goal, so it
        # is left as computed at discovery.
        old_cost = neighbour.past_cost
        if neighbour.candidate_past_cost(current) < old_cost:
            neighbour.set_previous(current)
            neighbour.set_past_cost(current)
            if trace is not None:
                trace.relax(neighbour, current, old_cost)


__all__ = ["AStarSearch"]
