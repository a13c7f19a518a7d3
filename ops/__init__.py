# ops/__init__.py
from __future__ import annotations

from typing import Callable, Dict, Any, Optional

# Global registry of ops
OPS_REGISTRY: Dict[str, Callable[..., Any]] = {}


def register_op(name: str):
    """
    Decorator to register an op handler function.

    Expectations:
      - op modules are imported below so their decorators run
      - op names are unique
    """
    def decorator(fn: Callable[..., Any]):
        prev = OPS_REGISTRY.get(name)
        if prev is not None and prev is not fn:
            # Keep last one (explicit override), but make it obvious in logs.
            prev_name = getattr(prev, "__name__", str(prev))
            fn_name = getattr(fn, "__name__", str(fn))
            print(f"[ops] WARNING: op '{name}' re-registered ({prev_name} -> {fn_name})", flush=True)

        OPS_REGISTRY[name] = fn
        return fn

    return decorator


def list_ops():
    """Return sorted list of registered op names."""
    return sorted(OPS_REGISTRY.keys())


def get_op(name: str) -> Callable[..., Any]:
    """
    Return the handler function for a given op name.
    Raises ValueError for unknown ops.
    """
    fn = OPS_REGISTRY.get(name)
    if fn is None:
        raise ValueError(f"Unknown op {name!r}. Registered ops: {list_ops()}")
    return fn


def try_get_op(name: str) -> Optional[Callable[..., Any]]:
    """Return op or None (no exception)."""
    return OPS_REGISTRY.get(name)


# Import op modules so their @register_op decorators run.
from . import subset_sum  # noqa: F401,E402
