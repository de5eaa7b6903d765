from dataclasses import dataclass
from typing import Sequence

from valve_pressure.constants import INFINITY
from valve_pressure.distances import DistanceMatrix, all_pairs_shortest
from valve_pressure.errors import StructuralViolation
from valve_pressure.valves import Valve


@dataclass(frozen=True, eq=False)
class TunnelMap:
    """Everything the search needs to know about the cave, computed once per search."""

    valves: tuple[Valve, ...]
    distances: DistanceMatrix
    # Valves worth opening: positive flow and reachable from some start,
    # highest flow first.
    non_zero_valves: tuple[int, ...]

    @classmethod
    def build(cls, valves: Sequence[Valve], start_ids: Sequence[int]) -> "TunnelMap":
        for index, valve in enumerate(valves):
            if valve.id != index:
                raise StructuralViolation(f"Valve at position {index} has id {valve.id}")
        for start_id in start_ids:
            if not 0 <= start_id < len(valves):
                raise StructuralViolation(f"Start valve {start_id} is not in the table")
        distances = all_pairs_shortest(valves)
        non_zero_valves = sorted(
            (
                valve.id
                for valve in valves
                if valve.flow_rate > 0
                and any(distances[start_id][valve.id] < INFINITY for start_id in start_ids)
            ),
            key=lambda valve_id: valves[valve_id].flow_rate,
            reverse=True,
        )
        return cls(
            valves=tuple(valves),
            distances=distances,
            non_zero_valves=tuple(non_zero_valves),
        )
