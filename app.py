import os
import time
import socket
import signal
import threading
from collections import deque
from typing import Optional, Dict, Any

import requests

try:
    import psutil
except ImportError:
    psutil = None

from decider.capacity import dp_cell_budget
from worker_sizing import build_worker_profile
from ops import list_ops, try_get_op
from ops.wrapper import run_op

# ---------------- config ----------------

CONTROLLER_URL = os.getenv("CONTROLLER_URL", "http://controller:8080")
AGENT_NAME = os.getenv("AGENT_NAME", socket.gethostname())
HEARTBEAT_SEC = int(os.getenv("HEARTBEAT_INTERVAL", "30"))
TASK_WAIT_MS = int(os.getenv("TASK_WAIT_MS", "2000"))
HTTP_TIMEOUT_SEC = float(os.getenv("HTTP_TIMEOUT_SEC", "6"))
AGENT_LABELS_RAW = os.getenv("AGENT_LABELS", "")
DURATION_WINDOW = int(os.getenv("DURATION_WINDOW", "100"))

_running = True

# ---------------- worker profile / labels ----------------


def _parse_labels(raw: str) -> Dict[str, Any]:
    """Parse AGENT_LABELS="key=value,key2=value2"; bare keys become True."""
    labels: Dict[str, Any] = {}
    for item in raw.split(","):
        if not item.strip():
            continue
        if "=" in item:
            k, v = item.split("=", 1)
            labels[k.strip()] = v.strip()
        else:
            labels[item.strip()] = True
    return labels


WORKER_PROFILE = build_worker_profile()

BASE_LABELS: Dict[str, Any] = _parse_labels(AGENT_LABELS_RAW)
BASE_LABELS["worker_profile"] = WORKER_PROFILE

CAPABILITIES: Dict[str, Any] = {
    "ops": list_ops()
}

# ---------------- task stats ----------------


class TaskStats:
    """
    Counters and a bounded window of recent query durations.

    Heartbeats read it from another thread, so every access holds the lock.
    """

    def __init__(self, window: int = DURATION_WINDOW):
        self._lock = threading.Lock()
        self.completed = 0
        self.failed = 0
        self.durations: deque = deque(maxlen=max(1, window))

    def record(self, duration_ms: float, ok: bool) -> None:
        with self._lock:
            if ok:
                self.completed += 1
            else:
                self.failed += 1
            self.durations.append(duration_ms)

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            out: Dict[str, Any] = {"tasks_completed": self.completed, "tasks_failed": self.failed}
            if self.durations:
                out["avg_task_ms"] = sum(self.durations) / len(self.durations)
                out["max_task_ms"] = max(self.durations)
            return out


_stats = TaskStats()


def _host_metrics() -> Dict[str, Any]:
    """CPU load and memory headroom; empty when psutil is missing."""
    if psutil is None:
        return {}

    out: Dict[str, Any] = {}
    try:
        out["cpu_util"] = psutil.cpu_percent(interval=0.0) / 100.0
    except Exception:
        pass
    try:
        out["ram_available_mb"] = int(psutil.virtual_memory().available // (1024 * 1024))
    except Exception:
        pass
    return out


def _collect_metrics() -> Dict[str, Any]:
    """Heartbeat metrics: host load, current DP cell budget, query stats."""
    metrics = _host_metrics()
    # shrinks as other processes take memory
    metrics["dp_cell_budget"] = dp_cell_budget()
    metrics.update(_stats.snapshot())
    return metrics


# ---------------- controller calls ----------------


def _call(method: str, path: str, **kwargs: Any) -> Optional[Dict[str, Any]]:
    """
    One controller request. Returns the decoded JSON body, or None for
    an empty reply (204 included) and for any transport or HTTP error.
    """
    url = f"{CONTROLLER_URL}{path}"
    try:
        resp = requests.request(method, url, timeout=HTTP_TIMEOUT_SEC, **kwargs)
        if resp.status_code == 204:
            return None
        resp.raise_for_status()
        return resp.json() if resp.content else None
    except requests.RequestException as e:
        print(f"[agent] {method} {path} -> {e}", flush=True)
        return None


def _post_json(path: str, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    return _call("POST", path, json=payload)


def _get_json(path: str, params: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    return _call("GET", path, params=params)


# ---------------- register / heartbeat ----------------


def _agent_payload() -> Dict[str, Any]:
    return {
        "agent": AGENT_NAME,
        "labels": BASE_LABELS,
        "capabilities": CAPABILITIES,
        "worker_profile": WORKER_PROFILE,
        "metrics": _collect_metrics(),
    }


def register_agent() -> None:
    print(f"[agent] registering with controller as {AGENT_NAME}", flush=True)
    _post_json("/agents/register", _agent_payload())


def heartbeat_loop() -> None:
    while _running:
        _post_json("/agents/heartbeat", _agent_payload())
        time.sleep(HEARTBEAT_SEC)


# ---------------- task execution ----------------


def _execute_op(op: str, payload: Any, meta: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Dispatch through the ops registry and the run_op envelope.

    Always returns {"ok": bool, "result"/"error": ..., "metrics": ...};
    an unknown op is reported the same way as a failing one.
    """
    fn = try_get_op(op)
    if fn is None:
        return {
            "ok": False,
            "error": {"code": "UNKNOWN_OP", "message": f"Unknown op '{op}'", "retryable": False},
            "metrics": {"op": op},
        }
    return run_op(op, fn, payload, meta=meta)


def handle_task(task: Dict[str, Any]) -> Dict[str, Any]:
    """Run one controller task and build the /result body."""
    job_id = task.get("id")
    op = task.get("op")
    payload = task.get("payload")

    start_ts = time.time()
    envelope = _execute_op(op, payload, meta=task.get("meta"))
    duration_ms = (time.time() - start_ts) * 1000.0

    ok = bool(envelope.get("ok"))
    _stats.record(duration_ms, ok)

    if not ok:
        err = envelope.get("error") or {}
        print(f"[agent] task {job_id} op={op} failed: {err.get('code')}: {err.get('message')}", flush=True)

    return {
        "id": job_id,
        "agent": AGENT_NAME,
        "op": op,
        "ok": ok,
        "result": envelope.get("result") if ok else None,
        "error": envelope.get("error") if not ok else None,
        "metrics": envelope.get("metrics"),
        "duration_ms": duration_ms,
    }


def worker_loop() -> None:
    print(f"[agent] worker loop starting for {AGENT_NAME}", flush=True)
    while _running:
        task = _get_json("/task", {"agent": AGENT_NAME, "wait_ms": TASK_WAIT_MS})
        if not task:
            continue

        _post_json("/result", handle_task(task))


# ---------------- signal handling ----------------


def _stop(*_args, **_kwargs):
    global _running
    print("[agent] stop signal received, shutting down...", flush=True)
    _running = False


# ---------------- main ----------------


def main():
    signal.signal(signal.SIGINT, _stop)
    signal.signal(signal.SIGTERM, _stop)

    register_agent()

    hb_thread = threading.Thread(target=heartbeat_loop, daemon=True)
    hb_thread.start()

    worker_loop()


if __name__ == "__main__":
    main()
