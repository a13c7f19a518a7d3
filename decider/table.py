# decider/table.py
"""
Full 2-D reachability table.

rows[i] marks every sum reachable by a non-empty subset of elements 0..i:

    reachable(i, j) = reachable(i-1, j) or element[i] == j or reachable(i-1, j - element[i])

Time and space are O(N * (B - A)), pseudo-polynomial in the magnitudes.
This is the only variant that keeps enough history to name a witness.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from .bounds import OffsetVector, Query
from .capacity import NO_DEADLINE, Deadline, allocate, check_capacity


def _fill(
    query: Query,
    *,
    short_circuit: bool,
    max_cells: Optional[int],
    deadline: Deadline,
) -> Tuple[bool, List[OffsetVector]]:
    elements, target, bounds = query.elements, query.target, query.bounds

    cells, limit = check_capacity(bounds, len(elements), max_cells)
    rows = allocate(lambda: [OffsetVector(bounds) for _ in elements], cells, limit)

    rows[0].set(elements[0])
    if short_circuit and elements[0] == target:
        return True, rows

    for i in range(1, len(elements)):
        deadline.check(f"table row {i}")
        x = elements[i]
        prev_get = rows[i - 1].get
        cur = rows[i]
        for j in bounds.values():
            if prev_get(j) or x == j or prev_get(j - x):
                cur.set(j)
                if short_circuit and j == target:
                    return True, rows

    return rows[-1].get(target), rows


def _reconstruct(rows: List[OffsetVector], elements: Tuple[int, ...], target: int) -> Optional[List[int]]:
    """
    Walk rows backward. Skip rows that already reached `remaining` one row
    earlier; the first row where it turns True owns an element of the
    witness. Subtract it and continue until the element itself is the sum.
    """
    i = len(rows) - 1
    if i < 0 or not rows[i].get(target):
        return None

    remaining = target
    picked: List[int] = []
    while True:
        while i > 0 and rows[i - 1].get(remaining):
            i -= 1
        x = elements[i]
        picked.append(x)
        if x == remaining:
            break
        remaining -= x
        i -= 1

    picked.reverse()
    return picked


def solve(
    sequence: Iterable[int],
    target: int = 0,
    *,
    max_cells: Optional[int] = None,
    deadline: Deadline = NO_DEADLINE,
) -> bool:
    query = Query.build(sequence, target)
    if query.rejected():
        return False
    found, _ = _fill(query, short_circuit=True, max_cells=max_cells, deadline=deadline)
    return found


def solve_with_witness(
    sequence: Iterable[int],
    target: int = 0,
    *,
    max_cells: Optional[int] = None,
    deadline: Deadline = NO_DEADLINE,
) -> Tuple[bool, Optional[List[int]]]:
    """
    Build the whole table (no short-circuit) and recover one subset.

    Returns (found, witness). witness is in input order and None when
    nothing sums to target.
    """
    query = Query.build(sequence, target)
    if query.rejected():
        return False, None
    found, rows = _fill(query, short_circuit=False, max_cells=max_cells, deadline=deadline)
    if not found:
        return False, None
    return True, _reconstruct(rows, query.elements, query.target)
