from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Union

from valve_pressure.constants import TIME_TO_OPEN_VALVE
from valve_pressure.distances import saturating_add
from valve_pressure.tunnels import TunnelMap

if TYPE_CHECKING:
    from valve_pressure.state import GlobalState


@dataclass(frozen=True)
class Idle:
    at: int
    # Set once the agent has stepped aside for the rest of the search.
    done: bool = False


@dataclass(frozen=True)
class Travelling:
    to: int
    time_left: int


@dataclass(frozen=True)
class Opening:
    at: int
    time_left: int


AgentState = Union[Idle, Travelling, Opening]

# Countdowns only move in tick_agent; next_agent_states changes the variant.


def destination(agent: AgentState) -> int:
    if isinstance(agent, Travelling):
        return agent.to
    return agent.at


def is_busy(agent: AgentState) -> bool:
    return not isinstance(agent, Idle)


def tick_agent(agent: AgentState, time_passed: int) -> AgentState:
    if isinstance(agent, Travelling):
        return Travelling(to=agent.to, time_left=max(agent.time_left - time_passed, 0))
    if isinstance(agent, Opening):
        return Opening(at=agent.at, time_left=max(agent.time_left - time_passed, 0))
    return agent


def travel_options(
    index: int, at: int, state: "GlobalState", tunnel_map: TunnelMap
) -> list[Travelling]:
    """Closed valves agent `index` standing at `at` could still open in time.

    Valves that another agent is already walking to or opening are left out.
    """
    distance_to = tunnel_map.distances[at]
    claimed = {
        destination(other)
        for other_index, other in enumerate(state.agents)
        if other_index != index and is_busy(other)
    }
    return [
        Travelling(to=valve_id, time_left=distance_to[valve_id])
        for valve_id in tunnel_map.non_zero_valves
        if valve_id not in state.opened
        and valve_id not in claimed
        and saturating_add(distance_to[valve_id], TIME_TO_OPEN_VALVE) < state.time_left
    ]


def ticks_until_decision(index: int, state: "GlobalState", tunnel_map: TunnelMap) -> Optional[int]:
    """None when the agent has nothing left to do for the rest of the search."""
    agent = state.agents[index]
    if not isinstance(agent, Idle):
        return agent.time_left
    if not agent.done and travel_options(index, agent.at, state, tunnel_map):
        return 0
    return None


def next_agent_states(index: int, state: "GlobalState", tunnel_map: TunnelMap) -> list[AgentState]:
    agent = state.agents[index]
    if isinstance(agent, Travelling):
        if agent.time_left == 0:
            return [Opening(at=agent.to, time_left=TIME_TO_OPEN_VALVE)]
        return [agent]
    if isinstance(agent, Opening):
        if agent.time_left > 0:
            return [agent]
        # The valve is open already (see tick); pick the next trip now.
        agent = Idle(at=agent.at)
    elif agent.done:
        return [agent]
    options: list[AgentState] = list(travel_options(index, agent.at, state, tunnel_map))
    return options or [agent]
