"""Round-trip tour solvers: exhaustive search for few stops, nearest-neighbour for more."""
from collections.abc import Iterator

# 9 middle stops = 9! = 362,880 permutations
DEFAULT_MAX_EXACT_STOPS = 9

METHOD_EXACT = "exact"
METHOD_NEAREST_NEIGHBOUR = "nearest_neighbour"


def _tour_cost(tour: list[int], matrix: list[list[float]]) -> float:
    return sum(matrix[tour[i]][tour[i + 1]] for i in range(len(tour) - 1))


def _swap_permutations(items: list[int], start: int = 0) -> Iterator[tuple[int, ...]]:
    """
    Yield every ordering of *items* in index-swap order.

    Position *start* is swapped with each position at or after it, the rest is
    permuted recursively, then the swap is undone. For [1, 2, 3] this yields
    123, 132, 213, 231, 321, 312.
    """
    if start == len(items):
        yield tuple(items)
        return

    for i in range(start, len(items)):
        items[start], items[i] = items[i], items[start]
        yield from _swap_permutations(items, start + 1)
        items[start], items[i] = items[i], items[start]


def nearest_neighbour_tour(matrix: list[list[float]]) -> list[int]:
    """
    Greedy round trip from the depot at index 0.

    Always moves to the cheapest unvisited index; on equal costs the lowest
    index wins. The returned tour starts and ends at 0.
    """
    n = len(matrix)
    visited = {0}
    tour = [0]

    for _ in range(n - 1):
        last = tour[-1]
        best_idx = None
        best_cost = float("inf")
        for i in range(1, n):
            if i not in visited and matrix[last][i] < best_cost:
                best_cost = matrix[last][i]
                best_idx = i

        if best_idx is None:
            # every remaining cost is inf or NaN
            best_idx = next(i for i in range(1, n) if i not in visited)
        visited.add(best_idx)
        tour.append(best_idx)

    tour.append(0)
    return tour


def _exhaustive_tour(durations: list[list[float]]) -> list[int]:
    middle = list(range(1, len(durations)))

    best_tour: list[int] | None = None
    best_cost = float("inf")

    for perm in _swap_permutations(middle):
        tour = [0, *perm, 0]
        cost = _tour_cost(tour, durations)
        if best_tour is None or cost < best_cost:
            best_cost = cost
            best_tour = tour

    return best_tour


def optimise_tour(
    durations: list[list[float]], max_exact_stops: int = DEFAULT_MAX_EXACT_STOPS
) -> tuple[list[int], str]:
    """
    Choose a solver by stop count and return ``(tour, method)``.

    - depot only, or depot + 1 stop → trivial tour
    - ≤ *max_exact_stops* middle stops → exhaustive search (exact)
    - more → nearest-neighbour (heuristic)
    """
    n = len(durations)
    if n <= 1:
        return [0, 0], METHOD_EXACT
    if n == 2:
        return [0, 1, 0], METHOD_EXACT

    if n - 1 > max_exact_stops:
        return nearest_neighbour_tour(durations), METHOD_NEAREST_NEIGHBOUR

    return _exhaustive_tour(durations), METHOD_EXACT


def exact_duration_tour(
    durations: list[list[float]], max_exact_stops: int = DEFAULT_MAX_EXACT_STOPS
) -> list[int]:
    """Return the round trip with the lowest total duration."""
    tour, _ = optimise_tour(durations, max_exact_stops)
    return tour
