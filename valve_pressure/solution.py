import argparse
import logging
from typing import Optional, Sequence

from valve_pressure import dynamic_programming, search
from valve_pressure.constants import PART_1_TIME
from valve_pressure.valves import Valve, normalize_valves, parse_file, parse_valves


def part_1(text: str) -> int:
    return _part_1(parse_valves(text))


def part_1_with_search(text: str) -> int:
    return _part_1_with_search(parse_valves(text))


def _part_1(valves: Sequence[Valve]) -> int:
    return dynamic_programming.find_optimal_total_flow(0, valves, PART_1_TIME)


def _part_1_with_search(valves: Sequence[Valve]) -> int:
    return search.find_optimal_total_flow(0, valves, PART_1_TIME)


def solve(path: str = "input.txt") -> tuple[int, int]:
    valves = normalize_valves(parse_file(path))
    return _part_1(valves), _part_1_with_search(valves)


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Most pressure one agent can release")
    parser.add_argument("path", nargs="?", default="input.txt")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    with_dynamic_programming, with_search = solve(args.path)
    print(f"part 1: {with_dynamic_programming}")
    print(f"part 1 (with search): {with_search}")


if __name__ == "__main__":
    main()
