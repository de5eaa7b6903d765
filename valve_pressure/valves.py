import logging
import re
from dataclasses import dataclass
from typing import Iterable, Sequence, Union

from valve_pressure.constants import START_VALVE
from valve_pressure.errors import ParseError
from valve_pressure.opened import OpenedSet

logger = logging.getLogger(__name__)

LINE_REGEX = re.compile(
    r"^Valve (\w+) has flow rate=([^;]*); tunnels? leads? to valves? (\w+(?:, \w+)*)$"
)


@dataclass
class Vertex:
    name: str
    flow_rate: int
    neighbors: list[str]


@dataclass(frozen=True)
class Valve:
    id: int
    flow_rate: int
    exits: tuple[int, ...]


VertexRecord = Union[Vertex, tuple[str, int, Sequence[str]]]


def parse_line(line: str) -> Vertex:
    match = LINE_REGEX.match(line.strip())
    if match is None:
        raise ParseError(f"Could not parse {line!r} as a valve")
    name, flow_str, neighbors_str = match.groups()
    try:
        flow_rate = int(flow_str)
    except ValueError:
        raise ParseError(f"Bad flow rate {flow_str!r} for valve {name}") from None
    if flow_rate < 0:
        raise ParseError(f"Negative flow rate {flow_rate} for valve {name}")
    neighbors = neighbors_str.split(", ")
    return Vertex(name=name, flow_rate=flow_rate, neighbors=neighbors)


def parse_lines(text: str) -> list[Vertex]:
    return [parse_line(line) for line in text.strip().splitlines() if line.strip()]


def parse_file(path: str) -> list[Vertex]:
    with open(path, "r") as f:
        return parse_lines(f.read())


def _as_vertex(record: VertexRecord) -> Vertex:
    if isinstance(record, Vertex):
        name, flow_rate, neighbors = record.name, record.flow_rate, record.neighbors
    else:
        try:
            name, flow_rate, neighbors = record
        except (TypeError, ValueError):
            raise ParseError(f"Expected (name, flow_rate, neighbors), got {record!r}") from None
    if not isinstance(name, str) or not name:
        raise ParseError(f"Bad valve name {name!r}")
    if isinstance(flow_rate, bool):
        raise ParseError(f"Bad flow rate {flow_rate!r} for valve {name}")
    try:
        flow_rate = int(flow_rate)
    except (TypeError, ValueError):
        raise ParseError(f"Bad flow rate {flow_rate!r} for valve {name}") from None
    if flow_rate < 0:
        raise ParseError(f"Negative flow rate {flow_rate} for valve {name}")
    if isinstance(neighbors, str) or not neighbors:
        raise ParseError(f"Valve {name} has no tunnels")
    return Vertex(name=name, flow_rate=flow_rate, neighbors=list(neighbors))


def normalize_valves(records: Iterable[VertexRecord], start: str = START_VALVE) -> list[Valve]:
    """Numbers the valves densely, with `start` as valve 0.

    Names get ids in the order they are first seen: declared names first, then
    tunnel destinations. A destination that is never declared still gets a
    valve, with no flow and no tunnels of its own.
    """
    vertices = [_as_vertex(record) for record in records]

    mapping: dict[str, int] = {start: 0}
    declared: dict[str, Vertex] = {}
    for vertex in vertices:
        if vertex.name in declared:
            raise ParseError(f"Valve {vertex.name} is declared twice")
        declared[vertex.name] = vertex
        mapping.setdefault(vertex.name, len(mapping))
    for vertex in vertices:
        for neighbor in vertex.neighbors:
            mapping.setdefault(neighbor, len(mapping))

    result: list[Valve] = []
    for name, valve_id in mapping.items():
        vertex = declared.get(name)
        if vertex is None:
            result.append(Valve(id=valve_id, flow_rate=0, exits=()))
            continue
        result.append(
            Valve(
                id=valve_id,
                flow_rate=vertex.flow_rate,
                exits=tuple(mapping[neighbor] for neighbor in vertex.neighbors),
            )
        )
    logger.debug("normalized %d valves (%d declared)", len(result), len(declared))
    return result


def parse_valves(text: str, start: str = START_VALVE) -> list[Valve]:
    return normalize_valves(parse_lines(text), start=start)


def get_current_flow(opened: OpenedSet, valves: Sequence[Valve]) -> int:
    return sum(valves[valve_id].flow_rate for valve_id in opened)
