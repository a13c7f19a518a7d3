"""Tests for cell budgets, overflow checks and deadlines."""

import time
from unittest.mock import MagicMock, patch

import pytest

from decider import capacity, config
from decider.bounds import SumBounds
from decider.errors import DeadlineExceededError, ResourceExhaustedError


class TestCheckCapacity:
    def test_within_budget(self):
        assert capacity.check_capacity(SumBounds(-5, 5), 3, max_cells=33) == (33, 33)

    def test_over_budget(self):
        with pytest.raises(ResourceExhaustedError) as exc:
            capacity.check_capacity(SumBounds(-5, 5), 3, max_cells=32)
        assert "33 cells" in str(exc.value)

    def test_default_limit_from_config(self, monkeypatch):
        monkeypatch.setattr(config, "MAX_DP_CELLS", 10)
        with pytest.raises(ResourceExhaustedError):
            capacity.check_capacity(SumBounds(0, 10), 1)

    def test_width_overflow(self):
        with pytest.raises(OverflowError):
            capacity.check_capacity(SumBounds(-(2 ** 70), 2 ** 70), 1, max_cells=2 ** 200)


class TestAllocate:
    def test_passes_result_through(self):
        assert capacity.allocate(lambda: [False] * 3, 3, 10) == [False, False, False]

    def test_memory_error_translated(self):
        def boom():
            raise MemoryError()

        with pytest.raises(ResourceExhaustedError):
            capacity.allocate(boom, 10, 10)


class TestCellBudget:
    def test_capped_by_available_memory(self, monkeypatch):
        monkeypatch.setattr(config, "MAX_DP_CELLS", 10 ** 9)
        fake = MagicMock()
        fake.virtual_memory.return_value.available = 1600
        with patch("decider.capacity.psutil", fake):
            assert capacity.dp_cell_budget(fraction=0.5) == 100

    def test_hard_cap_wins(self, monkeypatch):
        monkeypatch.setattr(config, "MAX_DP_CELLS", 42)
        fake = MagicMock()
        fake.virtual_memory.return_value.available = 10 ** 12
        with patch("decider.capacity.psutil", fake):
            assert capacity.dp_cell_budget() == 42

    def test_without_psutil(self, monkeypatch):
        monkeypatch.setattr(config, "MAX_DP_CELLS", 77)
        with patch("decider.capacity.psutil", None):
            assert capacity.dp_cell_budget() == 77


class TestDeadline:
    def test_none_never_expires(self):
        d = capacity.Deadline(None)
        assert not d.expired()
        d.check("anywhere")

    def test_zero_expires_immediately(self):
        with pytest.raises(DeadlineExceededError, match="row 3"):
            capacity.Deadline(0).check("row 3")

    def test_from_ms(self):
        assert capacity.Deadline.from_ms(None).expires_at is None
        d = capacity.Deadline.from_ms(60000)
        assert d.expires_at > time.monotonic() + 50

    def test_dp_rows_check_deadline(self):
        from decider import rolling

        with pytest.raises(DeadlineExceededError):
            rolling.solve([5, 6, 7, -100], 0, deadline=capacity.Deadline(0))
