from valve_pressure.errors import ParseError, StructuralViolation
from valve_pressure.search import find_optimal_total_flow
from valve_pressure.valves import Valve, Vertex, normalize_valves, parse_valves

__all__ = [
    "ParseError",
    "StructuralViolation",
    "Valve",
    "Vertex",
    "find_optimal_total_flow",
    "normalize_valves",
    "parse_valves",
]
