from dataclasses import dataclass
from typing import Sequence

from valve_pressure.errors import StructuralViolation
from valve_pressure.opened import OpenedSet
from valve_pressure.valves import Valve, get_current_flow


@dataclass(frozen=True)
class State:
    at: int
    open: OpenedSet


Cache = dict[tuple[State, int], int]


def find_optimal_total_flow(starting_at: int, valves: Sequence[Valve], time_left: int) -> int:
    """Exact single-agent answer, deciding one tick at a time.

    Exponential in the number of valves worth opening; only meant for small
    caves and for checking the search against.
    """
    if not 0 <= starting_at < len(valves):
        raise StructuralViolation(f"Start valve {starting_at} is not in the table")
    start_state = State(at=starting_at, open=OpenedSet())
    return get_optimal_total_flow_internal(start_state, valves, time_left, {})


def get_optimal_total_flow_internal(
    state: State,
    valves: Sequence[Valve],
    time_left: int,
    cache: Cache,
) -> int:
    if time_left <= 0:
        return 0
    key = (state, time_left)
    if key in cache:
        return cache[key]

    current_flow = get_current_flow(state.open, valves)
    current_valve = valves[state.at]

    # Each tick: open the valve here, or take a tunnel.
    best_next = 0
    if current_valve.id not in state.open and current_valve.flow_rate > 0:
        opened_state = State(at=state.at, open=state.open.with_valve(current_valve.id))
        best_next = get_optimal_total_flow_internal(opened_state, valves, time_left - 1, cache)

    for exit_id in current_valve.exits:
        moved_state = State(at=exit_id, open=state.open)
        best_next = max(
            best_next,
            get_optimal_total_flow_internal(moved_state, valves, time_left - 1, cache),
        )

    result = current_flow + best_next
    cache[key] = result
    return result
