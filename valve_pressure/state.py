import itertools
from dataclasses import dataclass, replace
from typing import Sequence

from valve_pressure.agents import (
    AgentState,
    Idle,
    Opening,
    Travelling,
    destination,
    is_busy,
    next_agent_states,
    tick_agent,
    ticks_until_decision,
)
from valve_pressure.constants import INFINITY
from valve_pressure.heuristic import estimated_flow_heuristic
from valve_pressure.opened import OpenedSet
from valve_pressure.tunnels import TunnelMap
from valve_pressure.valves import get_current_flow


@dataclass(frozen=True)
class GlobalState:
    agents: tuple[AgentState, ...]  # same order for the whole search
    opened: OpenedSet
    accumulated_flow: int
    time_left: int
    # accumulated_flow plus the heuristic bound; orders the queue, nothing more
    estimated_total: int = INFINITY

    @classmethod
    def initial(cls, start_ids: Sequence[int], time_budget: int) -> "GlobalState":
        return cls(
            agents=tuple(Idle(at=start_id) for start_id in start_ids),
            opened=OpenedSet(),
            accumulated_flow=0,
            time_left=time_budget,
        )

    def wait_out_flow(self, tunnel_map: TunnelMap) -> int:
        """Total flow if nobody opens anything else until the clock runs out"""
        return self.accumulated_flow + self.time_left * get_current_flow(
            self.opened, tunnel_map.valves
        )


def tick(state: GlobalState, tunnel_map: TunnelMap) -> GlobalState:
    """Moves time forward to the next moment some agent has to choose.

    Flow accrues at the current rate for the elapsed ticks, and valves whose
    opening finishes are added to the opened set. If no agent has anything
    left to do, the clock simply runs out.
    """
    waits = [ticks_until_decision(index, state, tunnel_map) for index in range(len(state.agents))]
    elapsed = min((wait for wait in waits if wait is not None), default=state.time_left)
    elapsed = min(elapsed, state.time_left)

    current_flow = get_current_flow(state.opened, tunnel_map.valves)
    agents = tuple(tick_agent(agent, elapsed) for agent in state.agents)
    opened = state.opened
    for agent in agents:
        if isinstance(agent, Opening) and agent.time_left == 0:
            opened = opened.with_valve(agent.at)

    return GlobalState(
        agents=agents,
        opened=opened,
        accumulated_flow=state.accumulated_flow + current_flow * elapsed,
        time_left=state.time_left - elapsed,
        estimated_total=state.estimated_total,
    )


def _is_new_trip(agent: AgentState, option: AgentState) -> bool:
    return isinstance(option, Travelling) and option != agent


def _is_valid_combination(combination: Sequence[AgentState]) -> bool:
    busy_destinations = [destination(agent) for agent in combination if is_busy(agent)]
    if not busy_destinations:
        # Everybody waits out the clock, which the search counts already.
        return False
    # Two agents never head for the same valve.
    return len(set(busy_destinations)) == len(busy_destinations)


def compose(state: GlobalState, options_per_agent: Sequence[Sequence[AgentState]]) -> list[GlobalState]:
    """Cartesian product of every agent's options, one GlobalState per combination.

    Opened valves, flow and time are carried over untouched. An agent with a new
    trip to choose may instead step aside for the rest of the search, leaving
    the remaining valves to the others.
    """
    options_with_rest: list[list[AgentState]] = []
    for agent, options in zip(state.agents, options_per_agent):
        options = list(options)
        if any(_is_new_trip(agent, option) for option in options):
            options.append(Idle(at=destination(agent), done=True))
        options_with_rest.append(options)

    return [
        GlobalState(
            agents=tuple(combination),
            opened=state.opened,
            accumulated_flow=state.accumulated_flow,
            time_left=state.time_left,
            estimated_total=state.estimated_total,
        )
        for combination in itertools.product(*options_with_rest)
        if _is_valid_combination(combination)
    ]


def expand(state: GlobalState, tunnel_map: TunnelMap) -> list[GlobalState]:
    options_per_agent = [
        next_agent_states(index, state, tunnel_map) for index in range(len(state.agents))
    ]
    children = compose(state, options_per_agent)

    # Every child shares the parent's opened set and clock, so one estimate fits all.
    estimated_total = state.accumulated_flow + estimated_flow_heuristic(
        state.opened,
        state.time_left,
        tunnel_map.valves,
        tunnel_map.non_zero_valves,
        agent_count=len(state.agents),
    )
    return [replace(child, estimated_total=estimated_total) for child in children]
