# decider/selector.py
from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, Tuple

from . import config, enumerator, rolling, single_vector, table
from .bounds import as_elements
from .capacity import NO_DEADLINE, Deadline

Solver = Callable[..., bool]

# Strategies that take max_cells (everything except the enumerator).
DP_STRATEGIES: Dict[str, Solver] = {
    "table": table.solve,
    "rolling": rolling.solve,
    "vector": single_vector.solve,
    "vector_legacy": single_vector.solve_legacy,
}

STRATEGIES: Dict[str, Solver] = {"naive": enumerator.solve, **DP_STRATEGIES}

# The strategies expected to agree on every input.
VERIFIED_STRATEGIES = ("naive", "table", "rolling", "vector")


def route(n: int, threshold: Optional[int] = None, strategy: Optional[str] = None) -> str:
    """
    Name of the strategy decide() would run for an input of length n.

    n < threshold -> "naive"; otherwise the requested DP variant, or
    DP_STRATEGY from the environment.
    """
    threshold = config.NAIVE_THRESHOLD if threshold is None else threshold
    if isinstance(threshold, bool) or not isinstance(threshold, int) or threshold < 1:
        raise ValueError(f"naive_threshold must be an int >= 1, got {threshold!r}")

    if n < threshold:
        return "naive"

    name = strategy or config.DP_STRATEGY
    if name not in DP_STRATEGIES:
        raise ValueError(f"Unknown DP strategy {name!r}. Known: {sorted(DP_STRATEGIES)}")
    return name


def run_strategy(
    name: str,
    elements: Iterable[int],
    target: int = 0,
    *,
    max_cells: Optional[int] = None,
    deadline: Deadline = NO_DEADLINE,
) -> bool:
    fn = STRATEGIES.get(name)
    if fn is None:
        raise ValueError(f"Unknown strategy {name!r}. Known: {sorted(STRATEGIES)}")
    if name in DP_STRATEGIES:
        return fn(elements, target, max_cells=max_cells, deadline=deadline)
    return fn(elements, target, deadline=deadline)


def decide(
    sequence: Iterable[int],
    threshold: Optional[int] = None,
    *,
    target: int = 0,
    strategy: Optional[str] = None,
    max_cells: Optional[int] = None,
    deadline: Deadline = NO_DEADLINE,
) -> bool:
    """
    Route one query to exactly one solver.

    Inputs shorter than `threshold` go to the bitmask enumerator, whose
    constant factor wins for small N; longer ones go to a DP variant
    (rolling pair unless told otherwise).
    """
    elements = as_elements(sequence)
    name = route(len(elements), threshold, strategy)
    return run_strategy(name, elements, target, max_cells=max_cells, deadline=deadline)


def decide_subset_sum(elements: Iterable[int], target: int = 0) -> bool:
    """Does some non-empty subset of `elements` sum to `target`?"""
    return decide(elements, target=target)


def decide_subset_sum_with_witness(
    elements: Iterable[int],
    target: int = 0,
    *,
    max_cells: Optional[int] = None,
    deadline: Deadline = NO_DEADLINE,
) -> Tuple[bool, Optional[List[int]]]:
    """Like decide_subset_sum, via the full 2-D table, also returning one subset."""
    return table.solve_with_witness(elements, target, max_cells=max_cells, deadline=deadline)
