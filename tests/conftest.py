"""Global fixtures for the subset-sum agent tests."""

import pytest

from decider import inputs


# (elements, target, expected)
KNOWN_CASES = [
    ([], 0, False),
    ([], 5, False),
    ([0], 0, True),
    ([5], 0, False),
    ([-1, 10, 5, 3, 2, 1], 0, True),
    ([-2, -1, 5, 5, -1, 10, 4], 0, True),
    ([1, 2, 3], 0, False),
    ([3, 34, 4, 12, 5, 2], 9, True),
    ([3, 34, 4, 12, 5, 2], 30, False),
    ([-7, -3, -2, 5, 8], 0, True),
    ([-4, 2], 0, False),
]


@pytest.fixture
def rng():
    """Deterministic generator, same values on every run."""
    return inputs.seeded(123)


@pytest.fixture
def small_inputs(rng):
    """Short mixed-sign sequences the enumerator can check exhaustively."""
    cases = []
    for n in range(1, 11):
        for _ in range(6):
            cases.append(inputs.random_elements(n, -15, 16, rng=rng))
    return cases


@pytest.fixture
def known_cases():
    """Hand-checked (elements, target, expected) triples."""
    return list(KNOWN_CASES)
