# decider/capacity.py
from __future__ import annotations

import sys
import time
from typing import Callable, Optional, Tuple, TypeVar

try:
    import psutil
except ImportError:
    psutil = None

from . import config
from .bounds import SumBounds
from .errors import DeadlineExceededError, ResourceExhaustedError

T = TypeVar("T")


def dp_cell_budget(fraction: Optional[float] = None) -> int:
    """
    Largest number of boolean cells one query may allocate.

    MAX_DP_CELLS is the hard cap; when psutil can see the machine it is
    lowered to a share of the memory that is available right now.
    """
    cap = config.MAX_DP_CELLS
    if psutil is None:
        return cap

    frac = config.DP_MEMORY_FRACTION if fraction is None else fraction
    try:
        available = int(psutil.virtual_memory().available)
    except Exception:
        return cap

    from_ram = int(available * frac) // config.BYTES_PER_CELL
    return max(0, min(cap, from_ram))


def check_capacity(bounds: SumBounds, rows: int, max_cells: Optional[int] = None) -> Tuple[int, int]:
    """
    Validate that `rows` vectors over `bounds` can be allocated.

    Returns (cells, limit). OverflowError when a single vector is
    wider than the platform can index; ResourceExhaustedError when the
    total exceeds the budget.
    """
    width = bounds.size
    if width > sys.maxsize:
        raise OverflowError(
            f"sum range [{bounds.low}, {bounds.high}] is wider than sys.maxsize ({sys.maxsize})"
        )

    cells = width * max(1, rows)
    limit = config.MAX_DP_CELLS if max_cells is None else int(max_cells)
    if cells > limit:
        raise ResourceExhaustedError(cells, limit, detail=f"{rows} row(s) x {width} sums")
    return cells, limit


def allocate(factory: Callable[[], T], cells: int, limit: int) -> T:
    """Run an allocation, reporting MemoryError as ResourceExhaustedError."""
    try:
        return factory()
    except MemoryError:
        raise ResourceExhaustedError(cells, limit, detail="allocation failed") from None


class Deadline:
    """
    Wall-clock budget checked between DP rows.

    Deadline(None) never expires so solvers can call check() unconditionally.
    """

    __slots__ = ("expires_at",)

    def __init__(self, seconds: Optional[float]):
        self.expires_at = None if seconds is None else time.monotonic() + float(seconds)

    @classmethod
    def from_ms(cls, ms: Optional[float]) -> "Deadline":
        return cls(None if ms is None else float(ms) / 1000.0)

    def expired(self) -> bool:
        return self.expires_at is not None and time.monotonic() >= self.expires_at

    def check(self, where: str = "") -> None:
        if self.expired():
            raise DeadlineExceededError(f"deadline exceeded{' at ' + where if where else ''}")


NO_DEADLINE = Deadline(None)
