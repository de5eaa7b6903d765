import argparse
import logging
from typing import Optional, Sequence

from valve_pressure.constants import PART_2_AGENTS, PART_2_TIME
from valve_pressure.search import find_optimal_total_flow
from valve_pressure.valves import Valve, normalize_valves, parse_file, parse_valves


def part_2_with_search(text: str, show_progress: bool = False) -> int:
    return _part_2(parse_valves(text), show_progress=show_progress)


def _part_2(valves: Sequence[Valve], show_progress: bool = False) -> int:
    # You and the elephant both start at AA.
    return find_optimal_total_flow(
        [0] * PART_2_AGENTS, valves, PART_2_TIME, show_progress=show_progress
    )


def solve(path: str = "input.txt") -> int:
    return _part_2(normalize_valves(parse_file(path)), show_progress=True)


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Most pressure you and an elephant can release")
    parser.add_argument("path", nargs="?", default="input.txt")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    print(f"part 2 (with search): {solve(args.path)}")


if __name__ == "__main__":
    main()
