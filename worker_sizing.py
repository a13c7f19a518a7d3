import os
from typing import Dict, Any, Optional

try:
    import psutil
except ImportError:
    psutil = None

from decider import capacity, config


def _detect_cpu() -> Dict[str, Any]:
    """
    Basic CPU sizing using psutil if available, otherwise os.cpu_count().

    Queries are single-threaded, so one worker per usable core.
    """
    if psutil is not None:
        try:
            total_cores = psutil.cpu_count(logical=True) or 1
        except Exception:
            total_cores = os.cpu_count() or 1
    else:
        total_cores = os.cpu_count() or 1

    # Reserve some cores for the system / Docker overhead
    reserved_cores = min(4, max(1, total_cores // 4))
    usable_cores = max(1, total_cores - reserved_cores)

    return {
        "total_cores": int(total_cores),
        "reserved_cores": int(reserved_cores),
        "usable_cores": int(usable_cores),
        "min_cpu_workers": 1,
        "max_cpu_workers": int(usable_cores),
    }


def _detect_memory() -> Dict[str, Any]:
    """
    Total / available RAM in MiB. Values are None when psutil is missing.
    """
    total_mb: Optional[int] = None
    available_mb: Optional[int] = None
    if psutil is not None:
        try:
            vm = psutil.virtual_memory()
            total_mb = int(vm.total / (1024 * 1024))
            available_mb = int(vm.available / (1024 * 1024))
        except Exception:
            pass

    return {
        "total_mb": total_mb,
        "available_mb": available_mb,
    }


def _detect_dp_capacity() -> Dict[str, Any]:
    """
    How large a reachability state one query may allocate on this worker.

    max_sum_range is the widest (B - A + 1) the rolling pair can hold.
    """
    max_cells = capacity.dp_cell_budget()
    return {
        "max_dp_cells": int(max_cells),
        "max_sum_range": int(max_cells // 2),
        "bytes_per_cell": config.BYTES_PER_CELL,
        "naive_threshold": config.NAIVE_THRESHOLD,
        "dp_strategy": config.DP_STRATEGY,
    }


def build_worker_profile() -> Dict[str, Any]:
    """
    Combined CPU + memory + DP sizing.

      {
        "cpu": {...},
        "memory": {...},
        "dp": {...},
        "workers": {"max_total_workers": int, "current_workers": 0}
      }
    """
    cpu_info = _detect_cpu()
    mem_info = _detect_memory()
    dp_info = _detect_dp_capacity()

    max_total_workers = max(1, int(cpu_info.get("max_cpu_workers", 1)))

    return {
        "cpu": cpu_info,
        "memory": mem_info,
        "dp": dp_info,
        "workers": {
            "max_total_workers": int(max_total_workers),
            "current_workers": 0,
        },
    }
