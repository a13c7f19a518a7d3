# decider/__init__.py
"""
Subset-sum decision engine.

decide_subset_sum(elements, target=0) answers whether a non-empty subset
of `elements` sums to `target`: bitmask enumeration for short inputs,
DP reachability over [sum of negatives, sum of positives] for long ones.
"""
from .bounds import OffsetVector, Query, SumBounds
from .capacity import Deadline, dp_cell_budget
from .errors import DeadlineExceededError, ResourceExhaustedError, SubsetSumError
from .selector import (
    STRATEGIES,
    VERIFIED_STRATEGIES,
    decide,
    decide_subset_sum,
    decide_subset_sum_with_witness,
    route,
    run_strategy,
)
from .single_vector import Mode

__all__ = [
    "Deadline",
    "DeadlineExceededError",
    "Mode",
    "OffsetVector",
    "Query",
    "ResourceExhaustedError",
    "STRATEGIES",
    "SubsetSumError",
    "SumBounds",
    "VERIFIED_STRATEGIES",
    "decide",
    "decide_subset_sum",
    "decide_subset_sum_with_witness",
    "dp_cell_budget",
    "route",
    "run_strategy",
]
