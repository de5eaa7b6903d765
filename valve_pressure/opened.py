from dataclasses import dataclass
from typing import Iterable, Iterator


@dataclass(frozen=True)
class OpenedSet:
    """Set of open valve ids, packed into the bits of an int.

    Values are immutable: adding a valve returns a new set, so a parent state
    and all of its children can share the same instance safely.
    """

    bits: int = 0

    @classmethod
    def of(cls, valve_ids: Iterable[int]) -> "OpenedSet":
        bits = 0
        for valve_id in valve_ids:
            bits |= 1 << valve_id
        return cls(bits=bits)

    def with_valve(self, valve_id: int) -> "OpenedSet":
        return OpenedSet(bits=self.bits | (1 << valve_id))

    def __contains__(self, valve_id: object) -> bool:
        if not isinstance(valve_id, int) or valve_id < 0:
            return False
        return (self.bits >> valve_id) & 1 == 1

    def __iter__(self) -> Iterator[int]:
        bits = self.bits
        valve_id = 0
        while bits:
            if bits & 1:
                yield valve_id
            bits >>= 1
            valve_id += 1

    def __len__(self) -> int:
        return bin(self.bits).count("1")

    def __repr__(self) -> str:
        return f"OpenedSet({sorted(self)})"
