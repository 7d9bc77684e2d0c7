from __future__ import annotations

import random
from typing import Generic, List, Sequence, Tuple, TypeVar

T = TypeVar("T")


class WeightedTable(Generic[T]):
    """
    Weighted random selector over a fixed list of values.

    Each entry owns an inclusive integer range inside [0, total_weight). Ranges
    are assigned cumulatively in insertion order, so entries [(a, 1), (b, 2)]
    own 0..0 and 1..2 respectively. sample() draws uniformly from
    [0, total_weight) and scans for the owning entry.
    """

    def __init__(self, entries: Sequence[Tuple[T, int]]) -> None:
        if not entries:
            raise ValueError("WeightedTable requires at least one entry")
        self._entries: List[Tuple[T, Tuple[int, int]]] = []
        total = 0
        for value, weight in entries:
            if isinstance(weight, bool) or not isinstance(weight, int):
                raise ValueError(f"Weight for {value!r} must be an integer, got {weight!r}")
            if weight <= 0:
                raise ValueError(f"Weight for {value!r} must be positive, got {weight}")
            self._entries.append((value, (total, total + weight - 1)))
            total += weight
        self._total = total

    @property
    def total_weight(self) -> int:
        return self._total

    @property
    def ranges(self) -> List[Tuple[int, int]]:
        return [r for _, r in self._entries]

    def values(self) -> List[T]:
        return [v for v, _ in self._entries]

    def sample(self, rng: random.Random) -> T:
        draw = rng.randrange(0, self._total)
        for value, (low, high) in self._entries:
            if low <= draw <= high:
                return value
        raise RuntimeError(f"WeightedTable ranges do not cover draw {draw} of {self._total}")

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"WeightedTable({len(self._entries)} entries, total={self._total})"


__all__ = ["WeightedTable"]
