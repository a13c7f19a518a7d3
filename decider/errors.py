# decider/errors.py
from __future__ import annotations


class SubsetSumError(Exception):
    """Base class for failures the decider surfaces to its caller."""


class ResourceExhaustedError(SubsetSumError):
    """
    The reachability state for a query does not fit the cell budget.

    The caller decides what to do next (fall back to the enumerator,
    reject the input, retry on a bigger worker).
    """

    def __init__(self, cells: int, limit: int, *, detail: str = ""):
        self.cells = cells
        self.limit = limit
        msg = f"reachability state needs {cells} cells, limit is {limit}"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)


class DeadlineExceededError(SubsetSumError):
    """Raised by the per-row deadline check."""
