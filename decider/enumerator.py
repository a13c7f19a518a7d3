# decider/enumerator.py
from __future__ import annotations

from typing import Iterable, List, Optional

from .bounds import Query
from .capacity import NO_DEADLINE, Deadline

# masks between deadline checks
_CHECK_EVERY = 1 << 12


def find_subset(
    sequence: Iterable[int],
    target: int = 0,
    *,
    deadline: Deadline = NO_DEADLINE,
) -> Optional[List[int]]:
    """
    Brute force over every non-empty subset, O(N * 2^N).

    Mask m in 1 .. 2^N - 1 selects element i when bit i is set. Returns
    the first subset that sums to target, or None. The empty subset is
    never a solution, so [] always gives None. A target outside the sum
    range returns None before any mask is tried.
    """
    query = Query.build(sequence, target)
    if query.rejected():
        return None

    elements, target = query.elements, query.target
    n = len(elements)

    for mask in range(1, 1 << n):
        if mask % _CHECK_EVERY == 0:
            deadline.check("enumerator")
        total = 0
        for i in range(n):
            if mask >> i & 1:
                total += elements[i]
        if total == target:
            return [elements[i] for i in range(n) if mask >> i & 1]
    return None


def solve(sequence: Iterable[int], target: int = 0, *, deadline: Deadline = NO_DEADLINE) -> bool:
    return find_subset(sequence, target, deadline=deadline) is not None
