"""Fluent assertions bound to an ``actual`` value.

    >>> check = wrap(reporter)
    >>> check("Hello World").contains("World")
    True
    >>> check(response.status).must.equal(200)  # aborts the test on failure
"""

from __future__ import annotations

import datetime
import re
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

from affirm import assertions
from affirm.messages import MessageLike
from affirm.outcomes import AbortTest
from affirm.reporters import Reporter


@dataclass(frozen=True, slots=True)
class Wrapped:
    """Assertion methods against a bound ``actual`` value.

    Every method forwards to the function of the same name in
    :mod:`affirm.assertions`, supplying ``actual`` in the operand position
    that function expects. The binding is immutable; :attr:`must` returns a
    copy that stops the test after the first failure.

    Attributes
    ----------
    actual : Any
        The value under test.
    reporter : Reporter
        Receives failure diagnostics.
    is_must : bool
        Whether a failure aborts the test.
    """

    actual: Any
    reporter: Reporter
    is_must: bool = False

    @property
    def must(self) -> Wrapped:
        """The same binding, but every failing assertion aborts the test."""
        return replace(self, is_must=True)

    def _finish(self, passed: bool) -> bool:
        if passed or not self.is_must:
            return passed
        abort_now = getattr(self.reporter, "abort_now", None)
        if callable(abort_now):
            abort_now()
        # abort_now is missing or returned normally; the test must still stop.
        raise AbortTest("must-assertion failed")

    def _shape_failure(self, method: str, kind: str) -> bool:
        return self._finish(assertions.fail(self.reporter, f"{method} called against a non-{kind}"))

    def fail(self, msg: MessageLike = None) -> bool:
        """Report a failure, using ``actual`` as the failure message.

            check("the test failed").fail()
        """
        failure_message = self.actual if isinstance(self.actual, str) else ""
        return self._finish(assertions.fail(self.reporter, failure_message, msg))

    def condition(self, msg: MessageLike = None) -> bool:
        """Evaluate ``actual`` as a zero-argument comparison.

            check(lambda: True).condition()
        """
        if not callable(self.actual):
            return self._shape_failure("condition", "callable")
        return self._finish(assertions.condition(self.reporter, self.actual, msg))

    def contains(self, element: Any, msg: MessageLike = None) -> bool:
        """Assert that ``actual`` contains ``element``.

            check("Hello World").contains("World")
        """
        return self._finish(assertions.contains(self.reporter, self.actual, element, msg))

    def not_contains(self, element: Any, msg: MessageLike = None) -> bool:
        return self._finish(assertions.not_contains(self.reporter, self.actual, element, msg))

    def empty(self, msg: MessageLike = None) -> bool:
        return self._finish(assertions.empty(self.reporter, self.actual, msg))

    def not_empty(self, msg: MessageLike = None) -> bool:
        """Assert that ``actual`` is not empty.

            if check(obj).not_empty():
                check(obj[1]).equal("two")
        """
        return self._finish(assertions.not_empty(self.reporter, self.actual, msg))

    def equal(self, expected: Any, msg: MessageLike = None) -> bool:
        """Assert that ``actual`` equals ``expected``.

            check(123).equal(123, msg="123 and 123 should be equal")
        """
        return self._finish(assertions.equal(self.reporter, expected, self.actual, msg))

    def equivalent(self, expected: Any, msg: MessageLike = None) -> bool:
        """Assert that ``actual`` equals ``expected`` once converted to its type.

            check(numpy.int32(123)).equivalent(numpy.uint32(123))
        """
        return self._finish(assertions.equivalent(self.reporter, expected, self.actual, msg))

    def exactly(self, expected: Any, msg: MessageLike = None) -> bool:
        return self._finish(assertions.exactly(self.reporter, expected, self.actual, msg))

    def not_equal(self, expected: Any, msg: MessageLike = None) -> bool:
        return self._finish(assertions.not_equal(self.reporter, expected, self.actual, msg))

    def is_false(self, msg: MessageLike = None) -> bool:
        if not isinstance(self.actual, bool):
            return self._shape_failure("is_false", "bool")
        return self._finish(assertions.is_false(self.reporter, self.actual, msg))

    def is_true(self, msg: MessageLike = None) -> bool:
        if not isinstance(self.actual, bool):
            return self._shape_failure("is_true", "bool")
        return self._finish(assertions.is_true(self.reporter, self.actual, msg))

    def implements(self, protocol: type, msg: MessageLike = None) -> bool:
        return self._finish(assertions.implements(self.reporter, protocol, self.actual, msg))

    def is_type(self, expected_type: Any, msg: MessageLike = None) -> bool:
        return self._finish(assertions.is_type(self.reporter, expected_type, self.actual, msg))

    def in_delta(self, expected: Any, delta: float, msg: MessageLike = None) -> bool:
        """Assert that ``actual`` is within ``delta`` of ``expected``.

            check(22 / 7.0).in_delta(math.pi, 0.01)
        """
        return self._finish(assertions.in_delta(self.reporter, expected, self.actual, delta, msg))

    def in_delta_slice(self, expected: Any, delta: float, msg: MessageLike = None) -> bool:
        return self._finish(assertions.in_delta_slice(self.reporter, expected, self.actual, delta, msg))

    def in_epsilon(self, expected: Any, epsilon: float, msg: MessageLike = None) -> bool:
        return self._finish(assertions.in_epsilon(self.reporter, expected, self.actual, epsilon, msg))

    def in_epsilon_slice(self, expected: Any, epsilon: float, msg: MessageLike = None) -> bool:
        return self._finish(assertions.in_epsilon_slice(self.reporter, expected, self.actual, epsilon, msg))

    def length(self, expected_length: int, msg: MessageLike = None) -> bool:
        """Assert that ``actual`` has ``expected_length`` items.

            check(items).length(3, msg="The size of the list is not 3")
        """
        return self._finish(assertions.length(self.reporter, self.actual, expected_length, msg))

    def is_none(self, msg: MessageLike = None) -> bool:
        return self._finish(assertions.is_none(self.reporter, self.actual, msg))

    def is_not_none(self, msg: MessageLike = None) -> bool:
        return self._finish(assertions.is_not_none(self.reporter, self.actual, msg))

    def raises(self, msg: MessageLike = None) -> bool:
        """Assert that calling ``actual`` raises.

            check(lambda: go_crazy()).raises(msg="go_crazy() should raise")
        """
        if not callable(self.actual):
            return self._shape_failure("raises", "callable")
        return self._finish(assertions.raises(self.reporter, self.actual, msg))

    def not_raises(self, msg: MessageLike = None) -> bool:
        if not callable(self.actual):
            return self._shape_failure("not_raises", "callable")
        return self._finish(assertions.not_raises(self.reporter, self.actual, msg))

    def regexp(self, pattern: str | re.Pattern[str], msg: MessageLike = None) -> bool:
        """Assert that ``pattern`` matches somewhere in ``actual``.

            check("it's starting").regexp(re.compile("start"))
        """
        return self._finish(assertions.regexp(self.reporter, pattern, self.actual, msg))

    def not_regexp(self, pattern: str | re.Pattern[str], msg: MessageLike = None) -> bool:
        return self._finish(assertions.not_regexp(self.reporter, pattern, self.actual, msg))

    def within_duration(
        self, expected: datetime.datetime, delta: datetime.timedelta, msg: MessageLike = None
    ) -> bool:
        """Assert that ``actual`` is within ``delta`` of ``expected``.

            check(datetime.now()).within_duration(start, timedelta(seconds=10))
        """
        if not isinstance(self.actual, datetime.datetime):
            return self._shape_failure("within_duration", "datetime")
        return self._finish(assertions.within_duration(self.reporter, expected, self.actual, delta, msg))


def wrap(reporter: Reporter) -> Callable[[Any], Wrapped]:
    """Return a function that binds values to fluent assertions reporting to ``reporter``.

    Raises
    ------
    TypeError
        If ``reporter`` has no ``record`` method.
    """
    if not isinstance(reporter, Reporter):
        raise TypeError(f"reporter must provide a record(message) method, got {type(reporter).__name__}")

    def bind(actual: Any) -> Wrapped:
        return Wrapped(actual=actual, reporter=reporter)

    return bind
