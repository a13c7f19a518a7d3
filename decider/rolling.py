# decider/rolling.py
from __future__ import annotations

from typing import Iterable, Optional

from .bounds import OffsetVector, Query
from .capacity import NO_DEADLINE, Deadline, allocate, check_capacity


def solve(
    sequence: Iterable[int],
    target: int = 0,
    *,
    max_cells: Optional[int] = None,
    deadline: Deadline = NO_DEADLINE,
) -> bool:
    """
    Same recurrence as the 2-D table, holding only two rows.

    Row i is computed reading `previous` only, which holds row i-1 fully
    settled; then the pair is swapped and the new `current` cleared.
    O(B - A) space, no witness.
    """
    query = Query.build(sequence, target)
    if query.rejected():
        return False

    elements, target, bounds = query.elements, query.target, query.bounds
    cells, limit = check_capacity(bounds, 2, max_cells)
    previous, current = allocate(lambda: (OffsetVector(bounds), OffsetVector(bounds)), cells, limit)

    previous.set(elements[0])
    if elements[0] == target:
        return True

    for i in range(1, len(elements)):
        deadline.check(f"rolling row {i}")
        x = elements[i]
        prev_get = previous.get
        for j in bounds.values():
            if prev_get(j) or x == j or prev_get(j - x):
                current.set(j)
                if j == target:
                    return True
        previous, current = current, previous
        current.clear()

    return False
