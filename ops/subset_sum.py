# ops/subset_sum.py
from __future__ import annotations

import time
from typing import Any, Dict, List, Optional

from decider import capacity, config, inputs, selector
from decider.capacity import Deadline
from decider.errors import SubsetSumError

from . import register_op
from .wrapper import _classify_exception

# Safety limits for generated inputs
MAX_GENERATED = 200000


def _int_field(payload: Dict[str, Any], key: str, default: Optional[int] = None) -> Optional[int]:
    raw = payload.get(key)
    if raw is None:
        return default
    if isinstance(raw, bool):
        raise ValueError(f"payload.{key} must be an int")
    if isinstance(raw, float) and not raw.is_integer():
        raise ValueError(f"payload.{key} must be an int")
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValueError(f"payload.{key} must be an int")


def _elements(payload: Dict[str, Any]) -> List[int]:
    """Read payload.elements (or payload.nums) as a list of ints."""
    raw = payload.get("elements")
    if raw is None:
        raw = payload.get("nums")
    if not isinstance(raw, list):
        raise ValueError("payload.elements must be a list of integers")

    out: List[int] = []
    for x in raw:
        if isinstance(x, bool) or not isinstance(x, (int, float, str)):
            raise ValueError("payload.elements must contain only integers")
        if isinstance(x, float) and not x.is_integer():
            raise ValueError("payload.elements must contain only integers")
        try:
            out.append(int(x))
        except (TypeError, ValueError):
            raise ValueError("payload.elements must contain only int-coercible values")
    return out


def _generated(payload: Dict[str, Any]) -> List[int]:
    count = _int_field(payload, "count", inputs.DEFAULT_COUNT)
    low = _int_field(payload, "low", inputs.DEFAULT_LOW)
    high = _int_field(payload, "high", inputs.DEFAULT_HIGH)
    seed = _int_field(payload, "seed")
    if count > MAX_GENERATED:
        raise ValueError(f"payload.count too large (max {MAX_GENERATED})")
    return inputs.random_elements(count, low, high, rng=inputs.seeded(seed))


def _max_cells(payload: Dict[str, Any]) -> int:
    """Per-request cap, never above what this worker can hold."""
    budget = capacity.dp_cell_budget()
    requested = _int_field(payload, "max_cells")
    if requested is None:
        return budget
    if requested < 1:
        raise ValueError("payload.max_cells must be >= 1")
    return min(requested, budget)


def _deadline(payload: Dict[str, Any]) -> Deadline:
    ms = _int_field(payload, "deadline_ms")
    if ms is not None and ms <= 0:
        raise ValueError("payload.deadline_ms must be > 0")
    return Deadline.from_ms(ms)


@register_op("subset_sum")
def subset_sum(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Subset Sum decision op.
    payload:
      - elements: list[int]       (alias: nums)
      - target: int               (default 0)
      - strategy: str             optional DP variant: rolling | table | vector | vector_legacy
      - naive_threshold: int      optional, default NAIVE_THRESHOLD
      - witness: bool             also return one subset (2-D table, no short-circuit)
      - max_cells: int            optional cap on DP cells
      - deadline_ms: int          optional per-query wall-clock budget

    Returns:
      - found: bool
      - strategy: which solver answered
      - witness: list[int] | None   (only when requested)
    """
    elements = _elements(payload)
    target = _int_field(payload, "target", 0)
    threshold = _int_field(payload, "naive_threshold", config.NAIVE_THRESHOLD)
    strategy = payload.get("strategy")
    if strategy is not None and not isinstance(strategy, str):
        raise ValueError("payload.strategy must be a string")
    max_cells = _max_cells(payload)
    deadline = _deadline(payload)

    out: Dict[str, Any] = {"target": target, "n": len(elements)}

    start = time.time()
    if payload.get("witness"):
        found, witness = selector.decide_subset_sum_with_witness(
            elements, target, max_cells=max_cells, deadline=deadline
        )
        out.update({"found": found, "witness": witness, "strategy": "table"})
    else:
        name = selector.route(len(elements), threshold, strategy)
        found = selector.run_strategy(name, elements, target, max_cells=max_cells, deadline=deadline)
        out.update({"found": found, "strategy": name})
    out["compute_time_ms"] = (time.time() - start) * 1000.0
    return out


@register_op("subset_sum_compare")
def subset_sum_compare(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Run every strategy on the same input and time each one.

    Input is payload.elements, or generated from count/low/high/seed
    (defaults: 2000 values in [-65000, 65000)). payload.strategies limits
    the set. The enumerator is skipped at or above naive_threshold elements
    unless payload.force_naive is set.

    agree is computed over the verified strategies only; vector_legacy
    disagreeing with them is reported as legacy_divergent, not a failure.
    A strategy that runs out of cells, width or time is recorded as
    {"result": None, "error": <code>} and left out of agree.
    """
    if "elements" in payload or "nums" in payload:
        elements = _elements(payload)
    else:
        elements = _generated(payload)

    target = _int_field(payload, "target", 0)
    threshold = _int_field(payload, "naive_threshold", config.NAIVE_THRESHOLD)
    max_cells = _max_cells(payload)
    deadline = _deadline(payload)

    names = payload.get("strategies") or list(selector.STRATEGIES)
    if not isinstance(names, list) or any(n not in selector.STRATEGIES for n in names):
        raise ValueError(f"payload.strategies must be a subset of {sorted(selector.STRATEGIES)}")

    runs: Dict[str, Dict[str, Any]] = {}
    for name in names:
        if name == "naive" and len(elements) >= threshold and not payload.get("force_naive"):
            runs[name] = {"result": None, "skipped": True}
            continue
        start = time.time()
        try:
            res = selector.run_strategy(name, elements, target, max_cells=max_cells, deadline=deadline)
        except (SubsetSumError, OverflowError, MemoryError) as e:
            # recorded per strategy; the rest still run
            err = _classify_exception(e)
            runs[name] = {"result": None, "error": err.code, "message": err.message}
            continue
        runs[name] = {"result": res, "elapsed_ms": (time.time() - start) * 1000.0}

    verified = {
        runs[n]["result"] for n in selector.VERIFIED_STRATEGIES
        if n in runs and runs[n]["result"] is not None
    }
    legacy = runs.get("vector_legacy", {}).get("result")

    return {
        "target": target,
        "n": len(elements),
        "runs": runs,
        "agree": len(verified) <= 1,
        "legacy_divergent": legacy is not None and len(verified) == 1 and legacy not in verified,
    }
