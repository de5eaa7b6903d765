from typing import Iterable, Sequence

from valve_pressure.constants import HEURISTIC_TICKS_PER_VALVE
from valve_pressure.opened import OpenedSet
from valve_pressure.valves import Valve, get_current_flow


def estimated_flow_heuristic(
    opened: OpenedSet,
    time_left: int,
    valves: Sequence[Valve],
    candidates: Iterable[int],
    agent_count: int = 1,
) -> int:
    """Upper bound on the flow still to come.

    Agents are allowed to teleport: each one opens a closed candidate every
    other tick, biggest flow rate first. Real walks are never shorter than one
    tick, so no actual schedule beats this.
    """
    closed_flow_rates = sorted(
        (valves[valve_id].flow_rate for valve_id in candidates if valve_id not in opened),
        reverse=True,
    )

    total_flow = 0
    current_flow = get_current_flow(opened, valves)
    next_closed = 0
    for i in range(time_left):
        total_flow += current_flow
        if i % HEURISTIC_TICKS_PER_VALVE != 0:
            continue
        if next_closed >= len(closed_flow_rates):
            # Nothing left to open.
            return total_flow + current_flow * (time_left - i - 1)
        current_flow += sum(closed_flow_rates[next_closed : next_closed + agent_count])
        next_closed += agent_count

    return total_flow
