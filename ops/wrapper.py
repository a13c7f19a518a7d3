# ops/wrapper.py
from __future__ import annotations

import time
import traceback
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from decider.errors import DeadlineExceededError, ResourceExhaustedError


Json = Dict[str, Any]
# Ops return RAW results (any JSON-ish type). Wrapper owns the envelope.
OpFn = Callable[[Dict[str, Any]], Any]


@dataclass
class OpError(Exception):
    code: str
    message: str
    retryable: bool = False

    def to_dict(self, *, trace: Optional[str] = None) -> Dict[str, Any]:
        d = {"code": self.code, "message": self.message, "retryable": self.retryable}
        if trace:
            d["trace"] = trace
        return d


def _now_ms() -> float:
    return time.time() * 1000.0


def _coerce_payload(payload: Any) -> Any:
    """
    Normalize raw payload forms:
      - None -> {}
      - list -> {"elements": list}   (bare input sequence)
      - dict -> dict
      - anything else is passed through and rejected by run_op
    """
    if payload is None:
        return {}
    if isinstance(payload, dict):
        return payload
    if isinstance(payload, list):
        return {"elements": payload}
    return payload


def _wrap_success(result: Any, metrics: Dict[str, Any]) -> Dict[str, Any]:
    return {"ok": True, "result": result, "metrics": metrics}


def _wrap_error(err: OpError, metrics: Dict[str, Any], *, trace: Optional[str] = None) -> Dict[str, Any]:
    return {"ok": False, "error": err.to_dict(trace=trace), "metrics": metrics}


def _classify_exception(e: Exception) -> OpError:
    """
    Map raw exceptions to stable error codes.

    Resource exhaustion and overflow are the only failures the decider
    itself reports; everything else is a bad payload or a bug.
    """
    if isinstance(e, OpError):
        return e

    msg = str(e) or e.__class__.__name__

    # Retrying on the same worker would hit the same limit.
    if isinstance(e, (ResourceExhaustedError, MemoryError)):
        return OpError("RESOURCE_EXHAUSTED", msg, retryable=False)

    if isinstance(e, OverflowError):
        return OpError("OVERFLOW", msg, retryable=False)

    if isinstance(e, DeadlineExceededError):
        return OpError("DEADLINE_EXCEEDED", msg, retryable=True)

    # Common “bad input” paths
    if isinstance(e, (ValueError, TypeError)):
        return OpError("INVALID_ARGUMENT", msg or "Invalid argument", retryable=False)

    return OpError("INTERNAL", msg, retryable=True)


def run_op(
    op_name: str,
    op_fn: OpFn,
    payload: Any,
    *,
    meta: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Execute an op under a strict envelope.

    Contract:
      - Ops return RAW results (any JSON-ish type). They do NOT return {"ok": ...}.
      - Wrapper ALWAYS returns {"ok": bool, "result"/"error": ..., "metrics": ...}
      - Each payload is exactly one query; there is no batch path.
    """
    t0 = _now_ms()
    meta = meta or {}

    metrics: Dict[str, Any] = {
        "op": op_name,
        "started_ms": t0,
        "meta": meta,
    }

    # Only include traceback when explicitly requested (keeps UI clean by default)
    want_trace = bool(meta.get("debug"))

    try:
        p = _coerce_payload(payload)
        if not isinstance(p, dict):
            raise OpError("INVALID_ARGUMENT", "payload must be an object or a list of integers", retryable=False)

        raw = op_fn(p)
        metrics["duration_ms"] = int(_now_ms() - t0)
        return _wrap_success(result=raw, metrics=metrics)

    except Exception as e:
        err = _classify_exception(e)
        metrics["duration_ms"] = int(_now_ms() - t0)
        trace = traceback.format_exc() if want_trace else None
        return _wrap_error(err=err, metrics=metrics, trace=trace)
