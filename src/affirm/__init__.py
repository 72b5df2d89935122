"""Affirm - assertion helpers that report failures instead of raising."""

from .assertions import (
    condition,
    contains,
    empty,
    equal,
    equivalent,
    exactly,
    fail,
    implements,
    in_delta,
    in_delta_slice,
    in_epsilon,
    in_epsilon_slice,
    is_false,
    is_none,
    is_not_none,
    is_true,
    is_type,
    length,
    not_contains,
    not_empty,
    not_equal,
    not_raises,
    not_regexp,
    raises,
    regexp,
    within_duration,
)
from .config import AffirmSettings, get_settings
from .messages import Failure, Message
from .outcomes import AbortTest, abort
from .reporters import AbortingReporter, ConsoleReporter, RecordingReporter, Reporter
from .wrapped import Wrapped, wrap


__version__ = "0.1.0"

__all__ = [
    # Reporters
    "Reporter",
    "AbortingReporter",
    "RecordingReporter",
    "ConsoleReporter",
    "AbortTest",
    "abort",
    # Messages and configuration
    "Message",
    "Failure",
    "AffirmSettings",
    "get_settings",
    # Fluent assertions
    "wrap",
    "Wrapped",
    # Direct-call assertions
    "fail",
    "implements",
    "is_type",
    "equal",
    "equivalent",
    "exactly",
    "not_equal",
    "is_none",
    "is_not_none",
    "empty",
    "not_empty",
    "length",
    "is_true",
    "is_false",
    "condition",
    "contains",
    "not_contains",
    "regexp",
    "not_regexp",
    "raises",
    "not_raises",
    "within_duration",
    "in_delta",
    "in_delta_slice",
    "in_epsilon",
    "in_epsilon_slice",
]
