"""Numeric tolerance engine."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from decimal import Decimal
from fractions import Fraction
from typing import Any

import numpy as np
from pydantic import BaseModel, ConfigDict


class Outcome(BaseModel):
    """Result of a check that can fail for more than one reason.

    Attributes
    ----------
    passed
        Whether the check succeeded.
    message
        Failure detail; ``None`` when the check passed.

    Notes
    -----
    ``bool(outcome)`` is equivalent to ``outcome.passed``.
    """

    model_config = ConfigDict(frozen=True)

    passed: bool
    message: str | None = None

    def __bool__(self) -> bool:
        return self.passed


_PASSED = Outcome(passed=True)


def _failed(message: str) -> Outcome:
    return Outcome(passed=False, message=message)


def to_float(value: Any) -> tuple[float, bool]:
    """Convert a numeric value to ``float``.

    Booleans, strings and complex numbers are not considered numerical.
    Values too large for a float become signed infinity.
    """
    if isinstance(value, (bool, np.bool_)):
        return 0.0, False
    if isinstance(value, (int, float, Decimal, Fraction, np.integer, np.floating)):
        try:
            return float(value), True
        except OverflowError:
            # Integers and fractions beyond the float range.
            return (math.inf if value > 0 else -math.inf), True
    return 0.0, False


def check_in_delta(expected: Any, actual: Any, delta: float) -> Outcome:
    """Check that ``expected - actual`` lies within ``[-delta, delta]``."""
    ef, eok = to_float(expected)
    af, aok = to_float(actual)

    if not eok or not aok:
        return _failed("Parameters must be numerical")

    if math.isnan(ef):
        return _failed("Expected must not be NaN")

    if math.isnan(af):
        return _failed(f"Expected {expected} with delta {delta}, but was NaN")

    dt = ef - af
    if not -delta <= dt <= delta:
        return _failed(
            f"Max difference between {expected} and {actual} allowed is {delta}, but difference was {dt}"
        )

    return _PASSED


def epsilon_delta(expected: Any, epsilon: float) -> tuple[float, bool]:
    """Absolute delta for a relative error of ``epsilon`` around ``expected``."""
    ef, ok = to_float(expected)
    if not ok:
        return 0.0, False
    return epsilon * abs(ef), True


def check_in_epsilon(expected: Any, actual: Any, epsilon: float) -> Outcome:
    """Check that the relative error ``|expected - actual| / |expected|`` is within ``epsilon``."""
    ef, eok = to_float(expected)
    _, aok = to_float(actual)
    if not eok or not aok:
        return _failed("Parameters must be numerical")

    if ef == 0:
        return _failed("Expected must have a value other than zero to calculate the relative error")

    if math.isinf(ef):
        return _failed("Expected must be finite to calculate the relative error")

    delta, _ = epsilon_delta(expected, epsilon)
    return check_in_delta(expected, actual, delta)


def _is_ordered(value: Any) -> bool:
    if isinstance(value, np.ndarray):
        return value.ndim == 1
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _check_slice(
    check: Callable[[Any, Any, float], Outcome],
    expected: Any,
    actual: Any,
    tolerance: float,
) -> Outcome:
    if not _is_ordered(expected) or not _is_ordered(actual):
        return _failed("Parameters must be ordered sequences")

    if len(expected) != len(actual):
        return _failed(f"Lengths differ: expected {len(expected)} item(s), but actual has {len(actual)}")

    for i, (e, a) in enumerate(zip(expected, actual)):
        outcome = check(e, a, tolerance)
        if not outcome:
            return _failed(f"at index {i}: {outcome.message}")

    return _PASSED


def check_in_delta_slice(expected: Any, actual: Any, delta: float) -> Outcome:
    """Elementwise :func:`check_in_delta` over two equal-length sequences."""
    return _check_slice(check_in_delta, expected, actual, delta)


def check_in_epsilon_slice(expected: Any, actual: Any, epsilon: float) -> Outcome:
    """Elementwise :func:`check_in_epsilon` over two equal-length sequences."""
    return _check_slice(check_in_epsilon, expected, actual, epsilon)
