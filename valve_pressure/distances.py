from typing import Sequence

from valve_pressure.constants import INFINITY
from valve_pressure.errors import StructuralViolation
from valve_pressure.valves import Valve

DistanceMatrix = list[list[int]]


def saturating_add(a: int, b: int) -> int:
    if a >= INFINITY or b >= INFINITY:
        return INFINITY
    return min(a + b, INFINITY)


def all_pairs_shortest(valves: Sequence[Valve]) -> DistanceMatrix:
    """Hop count from every valve to every valve, INFINITY when unreachable"""
    n = len(valves)
    costs = [[INFINITY] * n for _ in range(n)]
    for i, valve in enumerate(valves):
        costs[i][i] = 0
        for exit_id in valve.exits:
            if not 0 <= exit_id < n:
                raise StructuralViolation(
                    f"Valve {valve.id} has a tunnel to unknown valve {exit_id}"
                )
            if exit_id != i:
                costs[i][exit_id] = 1
    return floyd_warshall(costs)


def floyd_warshall(costs: DistanceMatrix) -> DistanceMatrix:
    costs = [list(row) for row in costs]
    n = len(costs)
    for k in range(n):
        row_k = costs[k]
        for i in range(n):
            row_i = costs[i]
            through_k = row_i[k]
            if through_k >= INFINITY:
                continue
            for j in range(n):
                candidate = saturating_add(through_k, row_k[j])
                if candidate < row_i[j]:
                    row_i[j] = candidate
    return costs
