import random
from typing import Optional, Sequence

import pytest

from valve_pressure.opened import OpenedSet
from valve_pressure.valves import Valve, get_current_flow, parse_valves

SMALL_INPUT = """\
Valve AA has flow rate=0; tunnels lead to valves DD, II, BB
Valve BB has flow rate=13; tunnels lead to valves CC, AA
Valve CC has flow rate=2; tunnels lead to valves DD, BB
Valve DD has flow rate=20; tunnels lead to valves CC, AA, EE
Valve EE has flow rate=3; tunnels lead to valves FF, DD
Valve FF has flow rate=0; tunnels lead to valves EE, GG
Valve GG has flow rate=0; tunnels lead to valves FF, HH
Valve HH has flow rate=22; tunnel leads to valve GG
Valve II has flow rate=0; tunnels lead to valves AA, JJ
Valve JJ has flow rate=21; tunnel leads to valve II
"""


@pytest.fixture
def small_input() -> str:
    return SMALL_INPUT


@pytest.fixture
def small_valves() -> list[Valve]:
    return parse_valves(SMALL_INPUT)


def random_cave(seed: int, size: int = 6) -> list[Valve]:
    """Connected cave with undirected tunnels and a few positive-flow valves."""
    rng = random.Random(seed)
    neighbors: list[set[int]] = [set() for _ in range(size)]
    for valve_id in range(1, size):
        other = rng.randrange(valve_id)
        neighbors[valve_id].add(other)
        neighbors[other].add(valve_id)
    for _ in range(rng.randrange(size)):
        a, b = rng.sample(range(size), 2)
        neighbors[a].add(b)
        neighbors[b].add(a)
    return [
        Valve(
            id=valve_id,
            flow_rate=0 if valve_id == 0 or rng.random() < 0.3 else rng.randint(1, 25),
            exits=tuple(sorted(neighbors[valve_id])),
        )
        for valve_id in range(size)
    ]


@pytest.fixture
def make_cave():
    return random_cave


TwoAgentCache = dict[tuple[int, int, int, int], int]


def two_agent_optimum(
    valves: Sequence[Valve],
    a: int,
    b: int,
    time_left: int,
    opened: OpenedSet = OpenedSet(),
    cache: Optional[TwoAgentCache] = None,
) -> int:
    """Exact two-agent answer, deciding one tick at a time.

    Every tick each agent stays put, opens the closed valve it stands on, or
    takes a tunnel.
    """
    if cache is None:
        cache = {}

    def moves(at: int, opened_bits: int):
        yield at, 0
        if not opened_bits >> at & 1 and valves[at].flow_rate > 0:
            yield at, 1 << at
        for exit_id in valves[at].exits:
            yield exit_id, 0

    def best(a: int, b: int, opened_bits: int, time_left: int) -> int:
        if time_left <= 0:
            return 0
        key = (a, b, opened_bits, time_left)
        if key in cache:
            return cache[key]
        result = get_current_flow(OpenedSet(opened_bits), valves) + max(
            best(next_a, next_b, opened_bits | bit_a | bit_b, time_left - 1)
            for next_a, bit_a in moves(a, opened_bits)
            for next_b, bit_b in moves(b, opened_bits)
        )
        cache[key] = result
        return result

    return best(a, b, opened.bits, time_left)


@pytest.fixture
def two_agent_oracle():
    return two_agent_optimum
