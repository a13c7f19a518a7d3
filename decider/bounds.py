# decider/bounds.py
from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, Tuple


def as_elements(sequence: Iterable[int]) -> Tuple[int, ...]:
    """
    Snapshot the caller's sequence as a tuple of Python ints.

    Accepts anything with __index__ (int, numpy ints, ...). Floats and
    strings are rejected with TypeError rather than silently truncated.
    """
    return tuple(operator.index(x) for x in sequence)


@dataclass(frozen=True)
class SumBounds:
    """
    Closed range [low, high] of sums any subset of the input can reach.

    low is the sum of the negative elements, high the sum of the positive
    ones, so low <= 0 <= high always holds.
    """

    low: int
    high: int

    @classmethod
    def of(cls, elements: Sequence[int]) -> "SumBounds":
        low = sum(x for x in elements if x < 0)
        high = sum(x for x in elements if x > 0)
        return cls(low=low, high=high)

    @property
    def size(self) -> int:
        return self.high - self.low + 1

    def contains(self, value: int) -> bool:
        return self.low <= value <= self.high

    def offset(self, value: int) -> int:
        return value - self.low

    def values(self) -> range:
        return range(self.low, self.high + 1)


class OffsetVector:
    """
    Dense boolean vector indexed by sum value instead of position.

    Every read and write goes through SumBounds.offset, so callers never
    subtract the lower bound themselves. Reads outside [low, high] are
    plain False.
    """

    __slots__ = ("bounds", "cells")

    def __init__(self, bounds: SumBounds):
        self.bounds = bounds
        self.cells: List[bool] = [False] * bounds.size

    def get(self, value: int) -> bool:
        idx = value - self.bounds.low
        if 0 <= idx < len(self.cells):
            return self.cells[idx]
        return False

    def set(self, value: int, flag: bool = True) -> None:
        # negative offsets would wrap around in a list
        if not self.bounds.contains(value):
            raise IndexError(f"sum {value} outside [{self.bounds.low}, {self.bounds.high}]")
        self.cells[self.bounds.offset(value)] = flag

    def clear(self) -> None:
        self.cells[:] = [False] * len(self.cells)

    def copy(self) -> "OffsetVector":
        twin = OffsetVector.__new__(OffsetVector)
        twin.bounds = self.bounds
        twin.cells = list(self.cells)
        return twin

    def count(self) -> int:
        return sum(1 for c in self.cells if c)

    def reachable(self) -> Iterator[int]:
        """Yield the sum values currently marked."""
        low = self.bounds.low
        for idx, flag in enumerate(self.cells):
            if flag:
                yield low + idx

    def __len__(self) -> int:
        return len(self.cells)


@dataclass(frozen=True)
class Query:
    """One decision request: the input snapshot, the target and the sum range."""

    elements: Tuple[int, ...]
    target: int
    bounds: SumBounds

    @classmethod
    def build(cls, sequence: Iterable[int], target: int = 0) -> "Query":
        elements = as_elements(sequence)
        return cls(elements=elements, target=operator.index(target), bounds=SumBounds.of(elements))

    def rejected(self) -> bool:
        """
        True when the answer is False without touching any DP state:
        no elements at all, or the target lies outside [low, high].
        """
        return not self.elements or not self.bounds.contains(self.target)
