"""Direct-call assertion functions.

Every function takes the reporter first and an optional ``msg`` last, returns
``True`` on success and ``False`` on failure. Failures are handed to
``reporter.record`` exactly once; nothing here raises or aborts.

    >>> from affirm import assertions as check
    >>> check.equal(reporter, 123, 123, msg="123 and 123 should be equal")
    True
"""

from __future__ import annotations

import datetime
import logging
import re
from collections.abc import Callable
from typing import Any

from affirm.equality import objects_are_equal, objects_are_equivalent
from affirm.inspection import get_len, is_empty, is_nil
from affirm.messages import MessageLike, build_failure, render_value
from affirm.patterns import includes_element, match_regexp
from affirm.reporters import Reporter
from affirm.signals import did_raise
from affirm.tolerance import (
    Outcome,
    check_in_delta,
    check_in_delta_slice,
    check_in_epsilon,
    check_in_epsilon_slice,
)

logger = logging.getLogger(__name__)

Comparison = Callable[[], bool]


def fail(reporter: Reporter, failure_message: str, msg: MessageLike = None) -> bool:
    """Report a failure and return False."""
    failure = build_failure(failure_message, msg)
    logger.debug("Assertion failed: %s", failure.error)
    reporter.record(failure.render())
    return False


def _report(reporter: Reporter, outcome: Outcome, msg: MessageLike) -> bool:
    if outcome.passed:
        return True
    return fail(reporter, outcome.message or "Check failed", msg)


def _type_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}" if cls.__module__ != "builtins" else cls.__qualname__


# Types and equality


def implements(reporter: Reporter, protocol: type, obj: Any, msg: MessageLike = None) -> bool:
    """Assert that ``obj`` is an instance of ``protocol`` (an ABC or runtime-checkable Protocol).

        implements(reporter, Sized, [1, 2])
    """
    if not isinstance(obj, protocol):
        return fail(reporter, f"Object must implement {_type_name(protocol)}", msg)
    return True


def is_type(reporter: Reporter, expected_type: Any, obj: Any, msg: MessageLike = None) -> bool:
    """Assert that ``obj`` has exactly the given type.

    ``expected_type`` is a class, or an example instance whose type is used.
    Subclasses do not match.
    """
    target = expected_type if isinstance(expected_type, type) else type(expected_type)
    if type(obj) is not target:
        return fail(
            reporter,
            f"Object expected to be of type {_type_name(target)}, but was {_type_name(type(obj))}",
            msg,
        )
    return True


def equal(reporter: Reporter, expected: Any, actual: Any, msg: MessageLike = None) -> bool:
    """Assert that two objects are structurally equal.

        equal(reporter, 123, 123, msg="123 and 123 should be equal")
    """
    if not objects_are_equal(expected, actual):
        return fail(
            reporter,
            f"Not equal: {render_value(expected)} (expected)\n"
            f"        != {render_value(actual)} (actual)",
            msg,
        )
    return True


def equivalent(reporter: Reporter, expected: Any, actual: Any, msg: MessageLike = None) -> bool:
    """Assert that two objects are equal, or equal once ``actual`` is converted to the type of ``expected``.

        equivalent(reporter, numpy.uint32(123), numpy.int32(123))
    """
    if not objects_are_equivalent(expected, actual):
        return fail(
            reporter,
            f"Not equal: {render_value(expected)} (expected)\n"
            f"        != {render_value(actual)} (actual)",
            msg,
        )
    return True


def exactly(reporter: Reporter, expected: Any, actual: Any, msg: MessageLike = None) -> bool:
    """Assert that two objects are equal in value and type.

        exactly(reporter, numpy.int32(123), numpy.int64(123))  # fails
    """
    if type(expected) is not type(actual):
        return fail(
            reporter,
            f"Types expected to match exactly\n{_type_name(type(expected))} != {_type_name(type(actual))}",
            msg,
        )
    return equal(reporter, expected, actual, msg)


def not_equal(reporter: Reporter, expected: Any, actual: Any, msg: MessageLike = None) -> bool:
    """Assert that two objects are not structurally equal."""
    if objects_are_equal(expected, actual):
        return fail(reporter, f"Should not be equal: {render_value(actual)}", msg)
    return True


# None, emptiness and length


def is_not_none(reporter: Reporter, obj: Any, msg: MessageLike = None) -> bool:
    """Assert that ``obj`` is not None (nor a dead reference)."""
    if is_nil(obj):
        return fail(reporter, "Expected value not to be None.", msg)
    return True


def is_none(reporter: Reporter, obj: Any, msg: MessageLike = None) -> bool:
    """Assert that ``obj`` is None (or a dead reference)."""
    if not is_nil(obj):
        return fail(reporter, f"Expected None, but got: {render_value(obj)}", msg)
    return True


def empty(reporter: Reporter, obj: Any, msg: MessageLike = None) -> bool:
    """Assert that ``obj`` is empty: None, ``""``, ``False``, zero or a zero-length container."""
    if not is_empty(obj):
        return fail(reporter, f"Should be empty, but was {render_value(obj)}", msg)
    return True


def not_empty(reporter: Reporter, obj: Any, msg: MessageLike = None) -> bool:
    """Assert that ``obj`` is not empty.

        if not_empty(reporter, obj):
            equal(reporter, "two", obj[1])
    """
    if is_empty(obj):
        return fail(reporter, f"Should NOT be empty, but was {render_value(obj)}", msg)
    return True


def length(reporter: Reporter, obj: Any, expected_length: int, msg: MessageLike = None) -> bool:
    """Assert that ``obj`` has ``expected_length`` items.

    Fails as well when ``obj`` has no length at all (``None``, numbers, ...).
    """
    ok, n = get_len(obj)
    if not ok:
        return fail(reporter, f'"{render_value(obj)}" could not be applied builtin len()', msg)
    if n != expected_length:
        return fail(
            reporter,
            f'"{render_value(obj)}" should have {expected_length} item(s), but has {n}',
            msg,
        )
    return True


# Booleans and conditions


def _truth(value: Any) -> bool | None:
    try:
        return bool(value)
    except ValueError:
        # numpy arrays with more than one element have no single truth value
        return None


def is_true(reporter: Reporter, value: Any, msg: MessageLike = None) -> bool:
    """Assert that ``value`` is truthy."""
    truth = _truth(value)
    if truth is None:
        return fail(reporter, f"Truth value of {_type_name(type(value))} is ambiguous", msg)
    if not truth:
        return fail(reporter, "Should be true", msg)
    return True


def is_false(reporter: Reporter, value: Any, msg: MessageLike = None) -> bool:
    """Assert that ``value`` is falsy."""
    truth = _truth(value)
    if truth is None:
        return fail(reporter, f"Truth value of {_type_name(type(value))} is ambiguous", msg)
    if truth:
        return fail(reporter, "Should be false", msg)
    return True


def condition(reporter: Reporter, comp: Comparison, msg: MessageLike = None) -> bool:
    """Assert that a zero-argument comparison returns True."""
    if not comp():
        return fail(reporter, "Condition failed!", msg)
    return True


# Containment and patterns


def contains(reporter: Reporter, container: Any, element: Any, msg: MessageLike = None) -> bool:
    """Assert that a string contains a substring, or a collection contains an element.

        contains(reporter, "Hello World", "World")
        contains(reporter, ["Hello", "World"], "World")
    """
    ok, found = includes_element(container, element)
    if not ok:
        return fail(reporter, f'"{render_value(container)}" could not be applied builtin len()', msg)
    if not found:
        return fail(
            reporter, f'"{render_value(container)}" does not contain "{render_value(element)}"', msg
        )
    return True


def not_contains(reporter: Reporter, container: Any, element: Any, msg: MessageLike = None) -> bool:
    """Assert that a string or collection does NOT contain the given substring or element."""
    ok, found = includes_element(container, element)
    if not ok:
        return fail(reporter, f'"{render_value(container)}" could not be applied builtin len()', msg)
    if found:
        return fail(
            reporter, f'"{render_value(container)}" should not contain "{render_value(element)}"', msg
        )
    return True


def _pattern_text(pattern: str | re.Pattern[str]) -> str:
    return pattern.pattern if isinstance(pattern, re.Pattern) else pattern


def regexp(reporter: Reporter, pattern: str | re.Pattern[str], text: Any, msg: MessageLike = None) -> bool:
    """Assert that ``pattern`` matches somewhere in ``text``.

        regexp(reporter, re.compile("start"), "it's starting")
        regexp(reporter, "start...$", "it's not starting")  # fails
    """
    if not match_regexp(pattern, text):
        return fail(reporter, f'Expect "{text}" to match "{_pattern_text(pattern)}"', msg)
    return True


def not_regexp(reporter: Reporter, pattern: str | re.Pattern[str], text: Any, msg: MessageLike = None) -> bool:
    """Assert that ``pattern`` does not match anywhere in ``text``."""
    if match_regexp(pattern, text):
        return fail(reporter, f'Expect "{text}" to NOT match "{_pattern_text(pattern)}"', msg)
    return True


# Exceptions


def raises(reporter: Reporter, fn: Callable[[], Any], msg: MessageLike = None) -> bool:
    """Assert that calling ``fn`` raises an exception.

        raises(reporter, lambda: int("x"), msg="parsing garbage should raise")
    """
    signal = did_raise(fn)
    if not signal.raised:
        return fail(reporter, "func should raise", msg)
    return True


def not_raises(reporter: Reporter, fn: Callable[[], Any], msg: MessageLike = None) -> bool:
    """Assert that calling ``fn`` does NOT raise."""
    signal = did_raise(fn)
    if signal.raised:
        return fail(reporter, f"func should not raise\n\tRaised value:\t{signal.value!r}", msg)
    return True


# Numbers and time


def within_duration(
    reporter: Reporter,
    expected: datetime.datetime,
    actual: datetime.datetime,
    delta: datetime.timedelta,
    msg: MessageLike = None,
) -> bool:
    """Assert that two datetimes are within ``delta`` of each other.

        within_duration(reporter, now, now, timedelta(seconds=10))
    """
    if not isinstance(expected, datetime.datetime) or not isinstance(actual, datetime.datetime):
        return fail(reporter, "Parameters must be datetime values", msg)
    try:
        dt = expected - actual
    except TypeError:
        return fail(reporter, "Cannot compare naive and timezone-aware datetimes", msg)
    if dt < -delta or dt > delta:
        return fail(
            reporter,
            f"Max difference between {expected} and {actual} allowed is {delta}, but difference was {dt}",
            msg,
        )
    return True


def in_delta(reporter: Reporter, expected: Any, actual: Any, delta: float, msg: MessageLike = None) -> bool:
    """Assert that two numbers are within ``delta`` of each other.

        in_delta(reporter, math.pi, 22 / 7.0, 0.01)
    """
    return _report(reporter, check_in_delta(expected, actual, delta), msg)


def in_delta_slice(reporter: Reporter, expected: Any, actual: Any, delta: float, msg: MessageLike = None) -> bool:
    """Like :func:`in_delta`, applied element by element to two sequences."""
    return _report(reporter, check_in_delta_slice(expected, actual, delta), msg)


def in_epsilon(reporter: Reporter, expected: Any, actual: Any, epsilon: float, msg: MessageLike = None) -> bool:
    """Assert that ``actual`` is within a relative error of ``epsilon`` from ``expected``."""
    return _report(reporter, check_in_epsilon(expected, actual, epsilon), msg)


def in_epsilon_slice(
    reporter: Reporter, expected: Any, actual: Any, epsilon: float, msg: MessageLike = None
) -> bool:
    """Like :func:`in_epsilon`, applied element by element to two sequences."""
    return _report(reporter, check_in_epsilon_slice(expected, actual, epsilon), msg)
