import sys

START_VALVE = "AA"

PART_1_TIME = 30
PART_2_TIME = 26
PART_2_AGENTS = 2  # You and the elephant

TIME_TO_OPEN_VALVE = 1

# The heuristic pretends every agent can teleport to the next best valve and
# open it, one valve per agent every HEURISTIC_TICKS_PER_VALVE ticks.
HEURISTIC_TICKS_PER_VALVE = 2

# Stands in for "unreachable" distances and for "not estimated yet" totals.
INFINITY = sys.maxsize
