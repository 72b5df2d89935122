"""Tests for the direct-call assertion functions."""

import datetime
import re
from collections.abc import Sized
from typing import Protocol, runtime_checkable

import numpy as np
import pytest

from affirm import Message, RecordingReporter
from affirm import assertions as check


@runtime_checkable
class Greeter(Protocol):
    def greet(self) -> str: ...


class Friendly:
    def greet(self) -> str:
        return "hi"


class Grumpy:
    pass


def test_fail_records_once_and_returns_false(reporter):
    assert check.fail(reporter, "something broke") is False

    assert len(reporter.messages) == 1
    message = reporter.messages[0]
    assert "Error Trace:\ttest_assertions.py:" in message
    assert "\tError:\tsomething broke" in message
    assert "Messages" not in message


def test_custom_message_forms(reporter):
    check.fail(reporter, "broke", "plain text")
    check.fail(reporter, "broke", Message("item %d of %s", 2, "list"))

    assert "\tMessages:\tplain text" in reporter.messages[0]
    assert "\tMessages:\titem 2 of list" in reporter.messages[1]


def test_passing_assertion_does_not_touch_reporter(reporter):
    assert check.equal(reporter, 1, 1)
    assert reporter.messages == []


class TestTypes:
    def test_implements(self, reporter):
        assert check.implements(reporter, Greeter, Friendly())
        assert check.implements(reporter, Sized, [1, 2])
        assert not check.implements(reporter, Greeter, Grumpy())
        assert "Object must implement" in reporter.messages[0]
        assert "Greeter" in reporter.messages[0]

    def test_is_type(self, reporter):
        assert check.is_type(reporter, Friendly, Friendly())
        assert check.is_type(reporter, Friendly(), Friendly())
        assert not check.is_type(reporter, Friendly, Grumpy())
        assert not check.is_type(reporter, int, True)
        assert "Object expected to be of type int, but was bool" in reporter.messages[-1]


class TestEquality:
    @pytest.mark.parametrize("value", ["Hello World", 123, 123.5, b"Hello World", None, [1, {"a": 2}]])
    def test_equal_and_not_equal_on_same_value(self, reporter, value):
        assert check.equal(reporter, value, value)
        assert not check.not_equal(reporter, value, value)
        assert len(reporter.messages) == 1

    def test_equal_failure_shows_both_values(self, reporter):
        assert not check.equal(reporter, "abc", "abd")
        assert "Not equal: 'abc' (expected)\n\r\t\t        != 'abd' (actual)" in reporter.messages[0]

    @pytest.mark.parametrize(
        ("expected", "actual"),
        [
            ("Hello World!", "Hello World"),
            (1234, 123),
            (123.55, 123.5),
            (b"Hello World!", b"Hello World"),
            (object(), None),
        ],
    )
    def test_not_equal(self, reporter, expected, actual):
        assert check.not_equal(reporter, expected, actual)

    @pytest.mark.parametrize(
        ("a", "b"),
        [
            (np.int32(123), np.int64(123)),
            (np.uint32(10), np.int32(10)),
            (np.float32(1), np.float64(1)),
            (10, 10.0),
        ],
    )
    def test_equivalent_passes_and_exactly_fails_on_width(self, reporter, a, b):
        assert check.equivalent(reporter, a, b)
        assert not check.exactly(reporter, a, b)
        assert "Types expected to match exactly" in reporter.messages[0]

    def test_exactly(self, reporter):
        assert check.exactly(reporter, np.float32(1), np.float32(1))
        assert not check.exactly(reporter, np.float32(1), np.float32(2))
        assert "Not equal:" in reporter.messages[0]
        assert not check.exactly(reporter, np.float32(1), None)
        assert "numpy.float32 != NoneType" in reporter.messages[1]

    def test_equivalent_failure(self, reporter):
        assert not check.equivalent(reporter, 10, "ten")
        assert "Not equal: 10 (expected)" in reporter.messages[0]


class TestNoneEmptyLength:
    def test_is_none(self, reporter):
        assert check.is_none(reporter, None)
        assert not check.is_none(reporter, Friendly())
        assert "Expected None, but got:" in reporter.messages[0]

    def test_is_not_none(self, reporter):
        assert check.is_not_none(reporter, Friendly())
        assert check.is_not_none(reporter, [])
        assert not check.is_not_none(reporter, None)
        assert "Expected value not to be None." in reporter.messages[0]

    @pytest.mark.parametrize("value", ["", None, False, 0, [], {}])
    def test_empty(self, reporter, value):
        assert check.empty(reporter, value)
        assert not check.not_empty(reporter, value)
        assert "Should NOT be empty" in reporter.messages[0]

    @pytest.mark.parametrize("value", ["x", 1, True, ["something"], ValueError("something")])
    def test_not_empty(self, reporter, value):
        assert check.not_empty(reporter, value)
        assert not check.empty(reporter, value)
        assert "Should be empty, but was" in reporter.messages[0]

    def test_length(self, reporter):
        assert check.length(reporter, [], 0)
        assert check.length(reporter, [1, 2, 3], 3)
        assert check.length(reporter, "ABC", 3)
        assert check.length(reporter, {1: 2, 2: 4, 3: 6}, 3)

    @pytest.mark.parametrize("value", [None, 0, True, False, Grumpy()])
    def test_length_without_len(self, reporter, value):
        assert not check.length(reporter, value, 0)
        assert "could not be applied builtin len()" in reporter.messages[0]

    def test_length_mismatch(self, reporter):
        assert not check.length(reporter, [1, 2], 3)
        assert '"[1, 2]" should have 3 item(s), but has 2' in reporter.messages[0]


class TestBooleansAndConditions:
    def test_is_true_and_is_false(self, reporter):
        assert check.is_true(reporter, True)
        assert check.is_false(reporter, False)
        assert not check.is_true(reporter, False)
        assert not check.is_false(reporter, True)
        assert "Should be true" in reporter.messages[0]
        assert "Should be false" in reporter.messages[1]

    def test_ambiguous_truth_value_is_reported(self, reporter):
        assert not check.is_true(reporter, np.array([1, 2]))
        assert not check.is_false(reporter, np.array([0, 0]))
        assert len(reporter.messages) == 2
        assert "Truth value of numpy.ndarray is ambiguous" in reporter.messages[0]
        assert check.is_true(reporter, np.array([1]))

    def test_condition(self, reporter):
        assert check.condition(reporter, lambda: True)
        assert not check.condition(reporter, lambda: False)
        assert "Condition failed!" in reporter.messages[0]


class TestContainment:
    def test_contains(self, reporter):
        assert check.contains(reporter, "Hello World", "World")
        assert check.contains(reporter, ["Foo", "Bar"], "Foo")
        assert not check.contains(reporter, ["Foo", "Bar"], "Baz")
        assert "does not contain" in reporter.messages[0]

    def test_not_contains(self, reporter):
        assert check.not_contains(reporter, "Hello World", "Earth")
        assert check.not_contains(reporter, ["Foo", "Bar"], "Foo!")
        assert not check.not_contains(reporter, ["Foo", "Bar"], "Foo")
        assert "should not contain" in reporter.messages[0]

    @pytest.mark.parametrize("predicate", [check.contains, check.not_contains])
    def test_unsupported_container(self, reporter, predicate):
        assert not predicate(reporter, 42, 4)
        assert "could not be applied builtin len()" in reporter.messages[0]


class TestRegexp:
    def test_anchor_honoured(self, reporter):
        assert check.regexp(reporter, "^start", "start of the line")
        assert not check.regexp(reporter, "^start", "not the start")
        assert 'Expect "not the start" to match "^start"' in reporter.messages[0]

    def test_compiled_patterns(self, reporter):
        assert check.regexp(reporter, re.compile("start"), "it's starting")
        assert not check.not_regexp(reporter, re.compile("start"), "it's starting")
        assert 'to NOT match "start"' in reporter.messages[0]
        assert check.not_regexp(reporter, "^start", "it's not starting")


class TestRaises:
    def test_raises(self, reporter):
        assert check.raises(reporter, lambda: int("x"))
        assert not check.raises(reporter, lambda: None)
        assert "func should raise" in reporter.messages[0]

    def test_not_raises(self, reporter):
        assert check.not_raises(reporter, lambda: None)
        assert not check.not_raises(reporter, lambda: int("x"))
        assert "func should not raise" in reporter.messages[0]
        assert "Raised value:\tValueError(" in reporter.messages[0]

    @pytest.mark.parametrize("fn", [lambda: None, lambda: {}["k"], lambda: 1 / 0])
    def test_raises_and_not_raises_are_complements(self, fn):
        assert check.raises(RecordingReporter(), fn) is not check.not_raises(RecordingReporter(), fn)


class TestWithinDuration:
    def test_within_duration(self, reporter):
        a = datetime.datetime(2024, 1, 1, 12, 0, 0)
        b = a + datetime.timedelta(seconds=10)

        assert check.within_duration(reporter, a, b, datetime.timedelta(seconds=10))
        assert check.within_duration(reporter, a, a, datetime.timedelta(seconds=10))
        assert not check.within_duration(reporter, a, b, datetime.timedelta(seconds=9))
        assert not check.within_duration(reporter, b, a, datetime.timedelta(seconds=9))
        assert not check.within_duration(reporter, b, a, datetime.timedelta(seconds=-11))
        assert "Max difference between" in reporter.messages[0]

    def test_requires_datetimes(self, reporter):
        assert not check.within_duration(reporter, 1, 2, datetime.timedelta(seconds=1))
        assert "Parameters must be datetime values" in reporter.messages[0]

    def test_naive_and_aware_datetimes(self, reporter):
        naive = datetime.datetime(2024, 1, 1)
        aware = naive.replace(tzinfo=datetime.timezone.utc)
        assert not check.within_duration(reporter, naive, aware, datetime.timedelta(days=1))
        assert "naive and timezone-aware" in reporter.messages[0]


class TestNumbers:
    def test_in_delta(self, reporter):
        assert check.in_delta(reporter, 1.001, 1, 0.01)
        assert not check.in_delta(reporter, 1, 2, 0.5)
        assert not check.in_delta(reporter, "", None, 1)
        assert "Parameters must be numerical" in reporter.messages[1]

    def test_huge_and_nan_operands_are_recorded(self, reporter):
        assert not check.in_delta(reporter, 10**400, 1, 1.0)
        assert not check.in_delta(reporter, 1, 100, float("nan"))
        assert not check.in_epsilon(reporter, 1, 100, float("nan"))
        assert not check.in_delta_slice(reporter, [10**400], [1], 1.0)
        assert len(reporter.messages) == 4

    def test_in_epsilon(self, reporter):
        assert check.in_epsilon(reporter, 2.1, 2.2, 0.1)
        assert not check.in_epsilon(reporter, 2.1, 2.2, 0.001, Message("eps %s", 0.001))
        assert "\tMessages:\teps 0.001" in reporter.messages[0]

    def test_slices(self, reporter):
        assert check.in_delta_slice(reporter, [1.001, 0.999], [1, 1], 0.01)
        assert not check.in_delta_slice(reporter, [1.001, 0.999], [1, 1], 0.0001)
        assert check.in_epsilon_slice(reporter, [2.2, 2.0], [2.1, 2.0], 0.06)
        assert not check.in_epsilon_slice(reporter, [2.2, 2.0], [2.1], 0.06)
        assert "at index 0:" in reporter.messages[0]
        assert "Lengths differ" in reporter.messages[1]
