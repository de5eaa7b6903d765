import heapq
import itertools
import logging
from typing import Sequence, Union

from tqdm import tqdm

from valve_pressure.state import GlobalState, expand, tick
from valve_pressure.tunnels import TunnelMap
from valve_pressure.valves import Valve

logger = logging.getLogger(__name__)


def find_optimal_total_flow(
    start_ids: Union[int, Sequence[int]],
    valves: Sequence[Valve],
    time_budget: int,
    *,
    show_progress: bool = False,
) -> int:
    """Most flow the agents can release together before time runs out.

    `start_ids` holds one starting valve per agent; a bare int means a single
    agent. States are expanded in order of their optimistic estimate, and any
    state whose estimate can't beat the best answer seen so far is dropped.
    """
    if isinstance(start_ids, int):
        start_ids = [start_ids]
    start_ids = list(start_ids)
    if not start_ids:
        raise ValueError("At least one agent is needed")
    if time_budget < 0:
        raise ValueError(f"time_budget must be >= 0, got {time_budget}")

    tunnel_map = TunnelMap.build(valves, start_ids)

    # heapq is a min-heap: negate the estimate. Ties go to the newest state, and
    # the states themselves are never compared.
    counter = itertools.count(0, -1)
    start_state = GlobalState.initial(start_ids, time_budget)
    state_priority_queue = [(-start_state.estimated_total, next(counter), start_state)]

    best_solution_so_far = 0
    expanded = 0
    pruned = 0

    with tqdm(desc="Searching", unit="state", disable=not show_progress) as progress:
        while state_priority_queue:
            _, _, state = heapq.heappop(state_priority_queue)
            expanded += 1
            progress.update()

            # Opening nothing more is always a valid answer.
            best_solution_so_far = max(best_solution_so_far, state.wait_out_flow(tunnel_map))
            if state.time_left == 0:
                continue

            state = tick(state, tunnel_map)
            best_solution_so_far = max(best_solution_so_far, state.wait_out_flow(tunnel_map))
            if state.time_left == 0:
                continue

            for child in expand(state, tunnel_map):
                if child.estimated_total <= best_solution_so_far:
                    pruned += 1
                    continue
                heapq.heappush(
                    state_priority_queue, (-child.estimated_total, next(counter), child)
                )
            progress.set_postfix(
                best=best_solution_so_far, queued=len(state_priority_queue), refresh=False
            )

    logger.debug(
        "search with %d agent(s) over %d ticks: best=%d expanded=%d pruned=%d",
        len(start_ids),
        time_budget,
        best_solution_so_far,
        expanded,
        pruned,
    )
    return best_solution_so_far
