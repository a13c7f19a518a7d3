"""Tests for the op result envelope."""

import pytest

from decider.errors import DeadlineExceededError, ResourceExhaustedError
from ops.wrapper import OpError, run_op


def _raiser(exc):
    def fn(_payload):
        raise exc
    return fn


class TestRunOp:
    def test_success_envelope(self):
        env = run_op("probe", lambda p: {"seen": p}, {"a": 1})
        assert env["ok"] is True
        assert env["result"] == {"seen": {"a": 1}}
        assert env["metrics"]["op"] == "probe"
        assert "duration_ms" in env["metrics"]

    def test_none_payload_becomes_empty_dict(self):
        env = run_op("probe", lambda p: p, None)
        assert env["result"] == {}

    def test_bare_list_payload_is_the_input_sequence(self):
        env = run_op("probe", lambda p: p, [1, -1])
        assert env["result"] == {"elements": [1, -1]}

    def test_scalar_payload_rejected(self):
        env = run_op("probe", lambda p: p, "nope")
        assert env["ok"] is False
        assert env["error"]["code"] == "INVALID_ARGUMENT"

    @pytest.mark.parametrize(
        "exc,code,retryable",
        [
            (ResourceExhaustedError(10, 5), "RESOURCE_EXHAUSTED", False),
            (MemoryError("no room"), "RESOURCE_EXHAUSTED", False),
            (OverflowError("too wide"), "OVERFLOW", False),
            (DeadlineExceededError("late"), "DEADLINE_EXCEEDED", True),
            (ValueError("bad"), "INVALID_ARGUMENT", False),
            (TypeError("bad type"), "INVALID_ARGUMENT", False),
            (RuntimeError("kaput"), "INTERNAL", True),
            (OpError("CUSTOM", "own code", retryable=True), "CUSTOM", True),
        ],
    )
    def test_error_classification(self, exc, code, retryable):
        env = run_op("probe", _raiser(exc), {})
        assert env["ok"] is False
        assert env["error"]["code"] == code
        assert env["error"]["retryable"] is retryable
        assert "trace" not in env["error"]

    def test_trace_only_on_debug(self):
        env = run_op("probe", _raiser(RuntimeError("x")), {}, meta={"debug": True})
        assert "RuntimeError" in env["error"]["trace"]
        assert env["metrics"]["meta"] == {"debug": True}
