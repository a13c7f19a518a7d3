"""Tests for strategy routing and the public decision entry points."""

from unittest.mock import patch

import pytest

from decider import config, enumerator, inputs, selector
from decider import decide, decide_subset_sum, decide_subset_sum_with_witness, route


class TestDecideSubsetSum:
    def test_reference_cases(self):
        assert decide_subset_sum([], 0) is False
        assert decide_subset_sum([], 3) is False
        assert decide_subset_sum([0], 0) is True
        assert decide_subset_sum([5], 0) is False
        assert decide_subset_sum([-1, 10, 5, 3, 2, 1], 0) is True
        assert decide_subset_sum([-2, -1, 5, 5, -1, 10, 4], 0) is True

    def test_default_target_is_zero(self):
        assert decide_subset_sum([-3, 3]) is True
        assert decide_subset_sum([3, 4]) is False

    def test_idempotent(self, rng):
        elements = inputs.random_elements(25, -40, 40, rng=rng)
        first = decide_subset_sum(elements, 0)
        assert decide_subset_sum(elements, 0) is first
        assert decide_subset_sum(list(elements), 0) is first

    def test_caller_sequence_not_mutated(self, rng):
        elements = inputs.random_elements(30, -50, 50, rng=rng)
        before = list(elements)
        decide_subset_sum(elements, 7)
        assert elements == before

    def test_with_witness(self):
        found, witness = decide_subset_sum_with_witness([-2, -1, 5, 5, -1, 10, 4], 0)
        assert found
        assert witness and sum(witness) == 0
        assert decide_subset_sum_with_witness([5], 0) == (False, None)


class TestRoute:
    def test_threshold_boundary(self):
        assert route(19, 20) == "naive"
        assert route(20, 20) == "rolling"
        assert route(0, 1) == "naive"
        assert route(1, 1) == "rolling"

    def test_default_threshold_from_config(self, monkeypatch):
        monkeypatch.setattr(config, "NAIVE_THRESHOLD", 5)
        assert route(4) == "naive"
        assert route(5) == "rolling"

    def test_default_strategy_from_config(self, monkeypatch):
        monkeypatch.setattr(config, "DP_STRATEGY", "table")
        assert route(30, 20) == "table"

    def test_explicit_strategy(self):
        for name in ("table", "rolling", "vector", "vector_legacy"):
            assert route(30, 20, name) == name
        # below the threshold the enumerator always wins
        assert route(3, 20, "table") == "naive"

    @pytest.mark.parametrize("threshold", [0, -1, 2.5, True, "20"])
    def test_invalid_threshold(self, threshold):
        with pytest.raises(ValueError):
            route(10, threshold)

    def test_unknown_strategy(self):
        with pytest.raises(ValueError):
            route(30, 20, "naive")
        with pytest.raises(ValueError):
            route(30, 20, "quantum")


class TestDecide:
    def test_routes_to_exactly_one_solver(self):
        naive = lambda *a, **kw: True  # noqa: E731
        dp = lambda *a, **kw: False  # noqa: E731
        with patch.dict(selector.STRATEGIES, {"naive": naive, "rolling": dp}):
            assert decide([1] * 19, 20) is True
            assert decide([1] * 20, 20) is False

    def test_both_sides_of_threshold_agree(self, rng):
        threshold = 8
        for _ in range(10):
            base = inputs.random_elements(threshold, -30, 30, rng=rng)
            short = base[:threshold - 1]
            assert route(len(short), threshold) == "naive"
            assert route(len(base), threshold) == "rolling"
            for elements in (short, base):
                expected = enumerator.solve(elements, 0)
                assert decide(elements, threshold) is expected
                # same input on the other side of the boundary
                assert decide(elements, 1) is expected
                assert decide(elements, len(elements) + 1) is expected

    def test_cross_strategy_agreement(self, small_inputs):
        for elements in small_inputs:
            for target in (-6, 0, 2):
                answers = {
                    name: selector.run_strategy(name, elements, target)
                    for name in selector.VERIFIED_STRATEGIES
                }
                assert len(set(answers.values())) == 1, (elements, target, answers)

    def test_legacy_divergence_is_the_documented_case(self):
        answers = {name: selector.run_strategy(name, [-4, 2], 0) for name in selector.STRATEGIES}
        assert answers.pop("vector_legacy") is True
        assert set(answers.values()) == {False}

    def test_target_parameter_flows_through(self):
        assert decide([3, 34, 4, 12, 5, 2], 1, target=9, strategy="table")
        assert not decide([3, 34, 4, 12, 5, 2], 1, target=30, strategy="vector")

    def test_unknown_strategy_name(self):
        with pytest.raises(ValueError):
            selector.run_strategy("bogus", [1], 1)
