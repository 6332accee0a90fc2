"""Tests for the round-trip tour solvers."""
import itertools
from unittest.mock import patch

import pytest

from planner.services.tour import (
    METHOD_EXACT,
    METHOD_NEAREST_NEIGHBOUR,
    _swap_permutations,
    _tour_cost,
    exact_duration_tour,
    nearest_neighbour_tour,
    optimise_tour,
)

# Asymmetric 5-location duration matrix (depot + 4 stops).
#
#      0   1   2   3   4
#  0 [ 0, 10,  1, 40, 25 ]
#  1 [ 12, 0, 30,  8, 14 ]
#  2 [ 3,  9,  0, 50,  2 ]
#  3 [ 7, 11, 35,  0,  9 ]
#  4 [ 30, 6, 20, 45,  0 ]
MATRIX_5 = [
    [0, 10, 1, 40, 25],
    [12, 0, 30, 8, 14],
    [3, 9, 0, 50, 2],
    [7, 11, 35, 0, 9],
    [30, 6, 20, 45, 0],
]


def _uniform_matrix(n: int) -> list[list[float]]:
    return [[0 if i == j else 1 for j in range(n)] for i in range(n)]


def _assert_closed_tour(tour: list[int], n: int):
    assert len(tour) == n + 1
    assert tour[0] == 0
    assert tour[-1] == 0
    assert sorted(tour[1:-1]) == list(range(1, n))


def _brute_force_best_cost(matrix: list[list[float]]) -> float:
    middle = range(1, len(matrix))
    return min(
        _tour_cost([0, *perm, 0], matrix) for perm in itertools.permutations(middle)
    )


class TestTourCost:
    def test_round_trip_cost(self):
        matrix = [[0, 2], [3, 0]]
        assert _tour_cost([0, 1, 0], matrix) == 5

    def test_direction_matters(self):
        matrix = [[0, 1, 9], [9, 0, 1], [1, 9, 0]]
        assert _tour_cost([0, 1, 2, 0], matrix) == 3
        assert _tour_cost([0, 2, 1, 0], matrix) == 27


class TestSwapPermutations:
    def test_swap_order(self):
        perms = list(_swap_permutations([1, 2, 3]))
        assert perms == [
            (1, 2, 3),
            (1, 3, 2),
            (2, 1, 3),
            (2, 3, 1),
            (3, 2, 1),
            (3, 1, 2),
        ]

    def test_yields_every_permutation_once(self):
        perms = list(_swap_permutations([1, 2, 3, 4, 5]))
        assert len(perms) == 120
        assert set(perms) == set(itertools.permutations([1, 2, 3, 4, 5]))

    def test_restores_input(self):
        items = [1, 2, 3, 4]
        list(_swap_permutations(items))
        assert items == [1, 2, 3, 4]


class TestNearestNeighbourTour:
    def test_returns_closed_tour(self):
        _assert_closed_tour(nearest_neighbour_tour(MATRIX_5), 5)

    def test_greedy_picks_cheapest_next(self):
        # 0→2 (1), 2→4 (2), 4→1 (6), 1→3 (8), back to 0
        assert nearest_neighbour_tour(MATRIX_5) == [0, 2, 4, 1, 3, 0]

    def test_ties_go_to_lowest_index(self):
        assert nearest_neighbour_tour(_uniform_matrix(5)) == [0, 1, 2, 3, 4, 0]

    def test_depot_only(self):
        assert nearest_neighbour_tour([[0]]) == [0, 0]

    def test_unreachable_stops_still_visited(self):
        inf = float("inf")
        matrix = [[0, inf, inf], [inf, 0, inf], [inf, inf, 0]]
        assert nearest_neighbour_tour(matrix) == [0, 1, 2, 0]

    def test_nan_costs_still_visited(self):
        nan = float("nan")
        matrix = [[0, 2, nan], [nan, 0, nan], [1, nan, 0]]
        assert nearest_neighbour_tour(matrix) == [0, 1, 2, 0]

    def test_ignores_diagonal(self):
        matrix = [[-5, 4, 3], [4, -5, 1], [3, 1, -5]]
        assert nearest_neighbour_tour(matrix) == [0, 2, 1, 0]


class TestExactDurationTour:
    def test_depot_only(self):
        assert exact_duration_tour([[0]]) == [0, 0]

    def test_single_stop(self):
        assert exact_duration_tour([[0, 7], [9, 0]]) == [0, 1, 0]

    def test_returns_closed_tour(self):
        _assert_closed_tour(exact_duration_tour(MATRIX_5), 5)

    def test_finds_minimum(self):
        tour = exact_duration_tour(MATRIX_5)
        assert _tour_cost(tour, MATRIX_5) == _brute_force_best_cost(MATRIX_5)

    def test_never_worse_than_nearest_neighbour(self):
        exact = exact_duration_tour(MATRIX_5)
        greedy = nearest_neighbour_tour(MATRIX_5)
        assert _tour_cost(exact, MATRIX_5) <= _tour_cost(greedy, MATRIX_5)

    def test_beats_greedy_trap(self):
        # Greedy heads 0→1 cheaply and pays 100 to get home from 3
        matrix = [
            [0, 1, 2, 1],
            [100, 0, 1, 100],
            [1, 100, 0, 1],
            [100, 1, 100, 0],
        ]
        assert nearest_neighbour_tour(matrix) == [0, 1, 2, 3, 0]
        assert _tour_cost([0, 1, 2, 3, 0], matrix) == 103
        # 0→3→1→2→0 = 1 + 1 + 1 + 1
        assert exact_duration_tour(matrix) == [0, 3, 1, 2, 0]

    def test_equal_totals_keep_first_enumerated(self):
        matrix = [[0, 10, 15], [10, 0, 20], [15, 20, 0]]
        assert exact_duration_tour(matrix) == [0, 1, 2, 0]

    def test_tie_break_follows_swap_order(self):
        # Only 0→3→2→1→0 and 0→3→1→2→0 cost 4; swap order reaches 3,2,1 first
        matrix = [
            [0, 100, 100, 1],
            [1, 0, 1, 100],
            [1, 1, 0, 100],
            [100, 1, 1, 0],
        ]
        assert exact_duration_tour(matrix) == [0, 3, 2, 1, 0]

    def test_all_infinite_costs_return_full_tour(self):
        inf = float("inf")
        matrix = [[0 if i == j else inf for j in range(4)] for i in range(4)]
        assert exact_duration_tour(matrix) == [0, 1, 2, 3, 0]

    def test_deterministic(self):
        matrix = _uniform_matrix(6)
        assert exact_duration_tour(matrix) == exact_duration_tour(matrix)
        assert exact_duration_tour(matrix) == [0, 1, 2, 3, 4, 5, 0]


class TestOptimiseTour:
    def test_reports_exact_for_small_input(self):
        tour, method = optimise_tour(MATRIX_5)
        assert method == METHOD_EXACT
        _assert_closed_tour(tour, 5)

    @pytest.mark.parametrize("n", [1, 2])
    def test_trivial_sizes_are_exact(self, n):
        _, method = optimise_tour(_uniform_matrix(n))
        assert method == METHOD_EXACT

    def test_ten_stops_use_nearest_neighbour(self):
        matrix = _uniform_matrix(11)
        with patch(
            "planner.services.tour.nearest_neighbour_tour",
            wraps=nearest_neighbour_tour,
        ) as heuristic:
            tour, method = optimise_tour(matrix)

        heuristic.assert_called_once_with(matrix)
        assert method == METHOD_NEAREST_NEIGHBOUR
        _assert_closed_tour(tour, 11)

    def test_nine_stops_use_exhaustive_search(self):
        matrix = _uniform_matrix(10)
        with patch("planner.services.tour.nearest_neighbour_tour") as heuristic:
            tour, method = optimise_tour(matrix)

        heuristic.assert_not_called()
        assert method == METHOD_EXACT
        assert tour == [0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 0]

    def test_threshold_is_configurable(self):
        _, method = optimise_tour(MATRIX_5, max_exact_stops=3)
        assert method == METHOD_NEAREST_NEIGHBOUR

        tour, method = optimise_tour(MATRIX_5, max_exact_stops=4)
        assert method == METHOD_EXACT
        assert _tour_cost(tour, MATRIX_5) == _brute_force_best_cost(MATRIX_5)

    def test_large_input_returns_valid_tour(self):
        n = 15
        matrix = [[abs(i - j) * 3 + (i * j) % 7 for j in range(n)] for i in range(n)]
        tour, method = optimise_tour(matrix)
        assert method == METHOD_NEAREST_NEIGHBOUR
        _assert_closed_tour(tour, n)
