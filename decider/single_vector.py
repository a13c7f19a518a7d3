# decider/single_vector.py
"""
Reachability kept in one mutable vector across all elements.

Two behaviours, picked explicitly by Mode:

  SETTLED (default)
      Each step only reads values settled by the previous step, the same
      semantics as the rolling pair. For a positive element the scan runs
      from high sums to low, for a negative one from low to high, so the
      cell read (j - x) has not been written yet in the current step.
      element[i] itself is marked after the scan. The result equals reading
      from a frozen snapshot taken at the start of the step. The scan only
      covers [lo + x, hi + x], where lo and hi are the smallest and largest
      sums reachable so far.

  LEGACY_IN_PLACE
      Fast but unverified; for benchmarking only. Marks element[i] first,
      then scans low to high reading the cells it is writing, so one element
      may be counted twice in a single step: [-4, 2] "reaches" 0 through
      -4 + 2 + 2. Never selected by default.
"""
from __future__ import annotations

import enum
from typing import Iterable, Optional

from .bounds import OffsetVector, Query
from .capacity import NO_DEADLINE, Deadline, allocate, check_capacity


class Mode(str, enum.Enum):
    SETTLED = "settled"
    LEGACY_IN_PLACE = "legacy_in_place"


def _solve_settled(query: Query, vec: OffsetVector, deadline: Deadline) -> bool:
    elements, target, bounds = query.elements, query.target, query.bounds

    first = elements[0]
    vec.set(first)
    if first == target:
        return True

    # window [lo, hi] holding every sum reachable so far
    lo = hi = first

    for i in range(1, len(elements)):
        deadline.check(f"vector step {i}")
        x = elements[i]

        if x != 0:
            # only j with j - x inside [lo, hi] can change
            start = max(bounds.low, lo + x)
            stop = min(bounds.high, hi + x)
            scan = range(stop, start - 1, -1) if x > 0 else range(start, stop + 1)
            for j in scan:
                if not vec.get(j) and vec.get(j - x):
                    vec.set(j)
                    if j == target:
                        return True

        if not vec.get(x):
            vec.set(x)
            if x == target:
                return True

        lo = min(lo, lo + x, x)
        hi = max(hi, hi + x, x)

    return False


def _solve_legacy(query: Query, vec: OffsetVector, deadline: Deadline) -> bool:
    elements, target, bounds = query.elements, query.target, query.bounds

    vec.set(elements[0])
    if elements[0] == target:
        return True

    for i in range(1, len(elements)):
        deadline.check(f"legacy vector step {i}")
        x = elements[i]
        vec.set(x)
        for j in bounds.values():
            if vec.get(j - x):
                vec.set(j)
            if j == target and vec.get(j):
                return True

    return False


def solve(
    sequence: Iterable[int],
    target: int = 0,
    *,
    mode: Mode = Mode.SETTLED,
    max_cells: Optional[int] = None,
    deadline: Deadline = NO_DEADLINE,
) -> bool:
    query = Query.build(sequence, target)
    if query.rejected():
        return False

    mode = Mode(mode)
    cells, limit = check_capacity(query.bounds, 1, max_cells)
    vec = allocate(lambda: OffsetVector(query.bounds), cells, limit)

    if mode is Mode.LEGACY_IN_PLACE:
        return _solve_legacy(query, vec, deadline)
    return _solve_settled(query, vec, deadline)


def solve_legacy(
    sequence: Iterable[int],
    target: int = 0,
    *,
    max_cells: Optional[int] = None,
    deadline: Deadline = NO_DEADLINE,
) -> bool:
    return solve(sequence, target, mode=Mode.LEGACY_IN_PLACE, max_cells=max_cells, deadline=deadline)
