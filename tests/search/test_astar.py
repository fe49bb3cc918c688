import math
from collections import Counter

import pytest

from gridpath.core.costs import OctileCostModel
from gridpath.core.grid import GridMap
from gridpath.errors import (
    InvalidCoordinateError,
    PathReconstructionError,
    UndefinedCapabilityError,
)
from gridpath.persistence.map_io import parse_map
from gridpath.search.astar import AStarSearch
from gridpath.search.neighbors import LegacyNeighborhood, MooreNeighborhood


def _positions(path):
    return [n.position for n in path]


class CountingCostModel(OctileCostModel):
    """Octile costs that remember how often each node was estimated."""

    def __init__(self):
        self.estimates = Counter()

    def estimate(self, node, goal):
        self.estimates[node.position] += 1
        return super().estimate(node, goal)


MAZE = """
S.....
.####.
.#..#.
.#G.#.
.#..#.
......
"""


# ---------- Concrete scenarios ---------------------------------------------

def test_open_3x3_diagonal():
    grid = GridMap(3, 3)
    path = AStarSearch(grid).find_path(0, 0, 2, 2)
    assert len(path) >= 3
    assert path[0].position == (0, 0)
    assert path[-1].position == (2, 2)
    assert _positions(path) == [(0, 0), (1, 1), (2, 2)]


def test_goal_surrounded_by_walls_returns_empty():
    grid = GridMap(3, 3)
    grid.set_obstacles({(1, 1), (1, 2), (2, 1)})
    search = AStarSearch(grid)
    assert search.find_path(0, 0, 2, 2) == []
    assert search.last_trace.found is False


def test_start_outside_grid_raises():
    grid = GridMap(3, 3)
    with pytest.raises(InvalidCoordinateError):
        AStarSearch(grid).find_path(-1, 0, 2, 2)


def test_start_equals_goal():
    grid = GridMap(3, 3)
    path = AStarSearch(grid).find_path(1, 1, 1, 1)
    assert _positions(path) == [(1, 1)]


# ---------- Validation -----------------------------------------------------

def test_goal_outside_grid_raises():
    grid = GridMap(3, 3)
    with pytest.raises(InvalidCoordinateError, match="TO"):
        AStarSearch(grid).find_path(0, 0, 3, 0)


def test_invalid_request_leaves_state_untouched():
    grid = GridMap(3, 3)
    marker = grid.node_at(1, 1)
    marker.past_cost = 42.0
    marker.previous = (0, 0)
    search = AStarSearch(grid)

    with pytest.raises(InvalidCoordinateError):
        search.find_path(0, 0, 5, 5)

    assert marker.past_cost == 42.0
    assert marker.previous == (0, 0)
    assert search.open_list == []
    assert search.closed_list == {}
    assert search.last_trace is None


def test_collaborator_errors_propagate():
    grid = GridMap(3, 3)
    grid.node_at(0, 0).cost_model = None
    with pytest.raises(UndefinedCapabilityError):
        AStarSearch(grid).find_path(0, 0, 2, 2)


# ---------- Path properties ------------------------------------------------

def test_path_follows_adjacency_and_avoids_walls():
    grid = parse_map(MAZE)
    search = AStarSearch(grid)
    path = search.find_path_to_goal()
    legacy = LegacyNeighborhood()

    assert path[0] == grid.start_node()
    assert path[-1] == grid.goal_node()
    for a, b in zip(path, path[1:]):
        assert b.position in legacy.candidate_positions(a.x, a.y)
    assert all(n.is_walkable() for n in path)


def test_past_cost_non_decreasing_along_path():
    grid = parse_map(MAZE)
    path = AStarSearch(grid).find_path_to_goal()
    costs = [n.past_cost for n in path]
    assert costs[0] == 0.0
    assert costs == sorted(costs)


def test_repeated_calls_return_same_path():
    grid = parse_map(MAZE)
    search = AStarSearch(grid)
    first = _positions(search.find_path_to_goal())
    second = _positions(search.find_path_to_goal())
    assert first and first == second


def test_repeated_calls_after_other_search():
    grid = GridMap(5, 5)
    search = AStarSearch(grid)
    first = _positions(search.find_path(1, 1, 4, 4))
    search.find_path(4, 4, 1, 1)
    assert _positions(search.find_path(1, 1, 4, 4)) == first


def test_blocked_goal_is_unreachable():
    grid = GridMap(4, 4)
    grid.set_walkable(3, 3, False)
    assert AStarSearch(grid).find_path(0, 0, 3, 3) == []


def test_row_zero_goal_unreachable_with_legacy_movement():
    grid = GridMap(4, 4)
    assert AStarSearch(grid).find_path(0, 0, 3, 0) == []


def test_row_zero_goal_reachable_with_moore_movement():
    grid = GridMap(4, 4)
    path = AStarSearch(grid, neighborhood=MooreNeighborhood()).find_path(0, 0, 3, 0)
    assert _positions(path) == [(0, 0), (1, 0), (2, 0), (3, 0)]


def test_moore_path_cost_is_optimal():
    grid = GridMap(5, 5)
    path = AStarSearch(grid, neighborhood=MooreNeighborhood()).find_path(0, 0, 4, 2)
    assert path[-1].past_cost == pytest.approx(2 * math.sqrt(2) + 2)


def test_weighted_cells_are_avoided():
    grid = parse_map(
        """
        S.....
        .9999.
        .9999.
        .....G
        """.replace(" ", "")
    )
    path = AStarSearch(grid, neighborhood=MooreNeighborhood()).find_path_to_goal()
    assert all(n.weight == 1.0 for n in path)


def test_find_path_to_goal_needs_designation():
    grid = GridMap(3, 3)
    with pytest.raises(UndefinedCapabilityError):
        AStarSearch(grid).find_path_to_goal()
    grid.set_start(0, 0)
    grid.set_goal(2, 2)
    assert _positions(AStarSearch(grid).find_path_to_goal()) == [(0, 0), (1, 1), (2, 2)]


# ---------- Open / closed bookkeeping --------------------------------------

def test_open_and_closed_sets_are_disjoint():
    grid = parse_map(MAZE)
    search = AStarSearch(grid)
    search.find_path_to_goal()
    open_positions = {n.position for n in search.open_list}
    assert open_positions.isdisjoint(search.closed_list)
    assert grid.goal_node().position in search.closed_list


def test_back_pointers_lead_to_closed_nodes():
    grid = parse_map(MAZE)
    search = AStarSearch(grid)
    search.find_path_to_goal()
    start = grid.start_node()
    for node in list(search.open_list) + list(search.closed_list.values()):
        if node == start:
            assert node.previous is None
        else:
            assert node.previous in search.closed_list


def test_lowest_cost_prefers_first_scanned_on_ties():
    grid = GridMap(3, 3)
    search = AStarSearch(grid)
    a, b, c = grid.node_at(1, 1), grid.node_at(2, 1), grid.node_at(1, 2)
    for node in (a, b, c):
        node.past_cost = 1.0
        node.future_cost = 1.0
        search._open(node)
    assert search._lowest_cost_node() is a
    c.past_cost = 0.5
    assert search._lowest_cost_node() is c


# ---------- Relaxation -----------------------------------------------------

def test_first_discovery_sets_all_fields():
    grid = GridMap(3, 3)
    search = AStarSearch(grid)
    current, neighbour, goal = grid.node_at(1, 1), grid.node_at(2, 1), grid.node_at(2, 2)
    current.past_cost = 2.0

    search._relax(neighbour, current, goal)

    assert neighbour.previous == (1, 1)
    assert neighbour.past_cost == pytest.approx(3.0)
    assert neighbour.future_cost == pytest.approx(1.0)
    assert neighbour in search.open_list


def test_cheaper_route_relaxes_without_recomputing_estimate():
    grid = GridMap(3, 3)
    search = AStarSearch(grid)
    current, neighbour, goal = grid.node_at(1, 1), grid.node_at(2, 1), grid.node_at(2, 2)
    neighbour.past_cost = 10.0
    neighbour.future_cost = 99.0
    neighbour.previous = (0, 0)
    search._open(neighbour)

    search._relax(neighbour, current, goal)

    assert neighbour.previous == (1, 1)
    assert neighbour.past_cost == pytest.approx(1.0)
    assert neighbour.future_cost == 99.0
    assert search.open_list.count(neighbour) == 1


def test_costlier_route_is_ignored():
    grid = GridMap(3, 3)
    search = AStarSearch(grid)
    current, neighbour, goal = grid.node_at(1, 1), grid.node_at(2, 1), grid.node_at(2, 2)
    current.past_cost = 5.0
    neighbour.past_cost = 1.0
    neighbour.previous = (0, 0)
    search._open(neighbour)

    search._relax(neighbour, current, goal)

    assert neighbour.previous == (0, 0)
    assert neighbour.past_cost == 1.0


def test_estimate_computed_once_per_node_per_search():
    model = CountingCostModel()
    grid = parse_map(MAZE, cost_model=model)
    search = AStarSearch(grid, neighborhood=MooreNeighborhood())
    assert search.find_path_to_goal()
    assert model.estimates
    assert set(model.estimates.values()) == {1}


# ---------- Path reconstruction --------------------------------------------

def test_calc_path_detects_cycle():
    grid = GridMap(3, 3)
    search = AStarSearch(grid)
    start, a, goal = grid.node_at(0, 0), grid.node_at(1, 1), grid.node_at(2, 2)
    goal.previous = (1, 1)
    a.previous = (2, 2)
    search.closed_list = {n.position: n for n in (start, a, goal)}

    with pytest.raises(PathReconstructionError):
        search.calc_path(start, goal)


def test_calc_path_detects_missing_predecessor():
    grid = GridMap(3, 3)
    search = AStarSearch(grid)
    start, goal = grid.node_at(0, 0), grid.node_at(2, 2)
    goal.previous = None
    search.closed_list = {start.position: start, goal.position: goal}

    with pytest.raises(PathReconstructionError, match="no predecessor"):
        search.calc_path(start, goal)


def test_calc_path_orders_start_to_goal():
    grid = GridMap(3, 3)
    search = AStarSearch(grid)
    start, mid, goal = grid.node_at(0, 0), grid.node_at(1, 1), grid.node_at(2, 2)
    mid.previous = (0, 0)
    goal.previous = (1, 1)
    search.closed_list = {n.position: n for n in (start, mid, goal)}

    assert search.calc_path(start, goal) == [start, mid, goal]
