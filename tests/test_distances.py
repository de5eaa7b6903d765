import pytest

from valve_pressure.constants import INFINITY
from valve_pressure.distances import all_pairs_shortest, floyd_warshall, saturating_add
from valve_pressure.errors import StructuralViolation
from valve_pressure.valves import Valve


def test_floyd_warshall() -> None:
    inf = INFINITY

    #
    # x <----> y <-----> z
    #
    costs = [[0, 1, inf], [1, 0, 1], [inf, 1, 0]]
    assert floyd_warshall(costs) == [[0, 1, 2], [1, 0, 1], [2, 1, 0]]


def test_floyd_warshall_leaves_input_alone() -> None:
    costs = [[0, 1, INFINITY], [1, 0, 1], [INFINITY, 1, 0]]
    floyd_warshall(costs)
    assert costs[0][2] == INFINITY


def test_saturating_add() -> None:
    assert saturating_add(2, 3) == 5
    assert saturating_add(INFINITY, 1) == INFINITY
    assert saturating_add(1, INFINITY) == INFINITY
    assert saturating_add(INFINITY, INFINITY) == INFINITY


def test_small_cave(small_valves: list[Valve]) -> None:
    distances = all_pairs_shortest(small_valves)
    # AA=0, BB=1, CC=2, DD=3, EE=4, FF=5, GG=6, HH=7, II=8, JJ=9
    assert distances[0][3] == 1
    assert distances[0][9] == 2
    assert distances[0][7] == 5
    assert distances[9][7] == 7
    assert distances[1][4] == 3


def test_diagonal_and_symmetry(small_valves: list[Valve]) -> None:
    distances = all_pairs_shortest(small_valves)
    n = len(small_valves)
    for i in range(n):
        assert distances[i][i] == 0
        for j in range(n):
            assert distances[i][j] == distances[j][i]


def test_triangle_inequality(small_valves: list[Valve]) -> None:
    distances = all_pairs_shortest(small_valves)
    n = len(small_valves)
    for i in range(n):
        for j in range(n):
            for k in range(n):
                assert distances[i][j] <= distances[i][k] + distances[k][j]


def test_idempotent(small_valves: list[Valve]) -> None:
    distances = all_pairs_shortest(small_valves)
    assert all_pairs_shortest(small_valves) == distances
    assert floyd_warshall(distances) == distances


def test_unreachable_stays_infinite() -> None:
    valves = [
        Valve(id=0, flow_rate=0, exits=(1,)),
        Valve(id=1, flow_rate=3, exits=(0,)),
        Valve(id=2, flow_rate=50, exits=()),
    ]
    distances = all_pairs_shortest(valves)
    assert distances[0][2] == INFINITY
    assert distances[2][0] == INFINITY
    assert distances[2][2] == 0


def test_one_way_tunnel() -> None:
    valves = [Valve(id=0, flow_rate=0, exits=(1,)), Valve(id=1, flow_rate=3, exits=())]
    distances = all_pairs_shortest(valves)
    assert distances[0][1] == 1
    assert distances[1][0] == INFINITY


def test_exit_out_of_range() -> None:
    with pytest.raises(StructuralViolation):
        all_pairs_shortest([Valve(id=0, flow_rate=0, exits=(4,))])
