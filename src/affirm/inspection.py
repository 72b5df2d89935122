"""Value inspection helpers shared by the assertion engines."""

import asyncio
import queue
import weakref
from collections.abc import Sized
from decimal import Decimal
from fractions import Fraction
from typing import Any

import numpy as np

_ZERO_TYPES = (bool, int, float, complex, Decimal, Fraction, np.number, np.bool_)


def is_nil(value: Any) -> bool:
    """Return True for ``None`` or for a reference whose target is gone."""
    if value is None:
        return True
    if isinstance(value, (weakref.ref, weakref.WeakMethod)):
        return value() is None
    return False


def get_len(value: Any) -> tuple[bool, int]:
    """Return ``(ok, length)``.

    ``ok`` is False when ``value`` has no well-defined length, e.g. ``None``,
    numbers or plain objects. Queues report their current occupancy.
    """
    if isinstance(value, (queue.Queue, asyncio.Queue)):
        return True, value.qsize()
    if isinstance(value, np.ndarray) and value.ndim == 0:
        return False, 0
    if isinstance(value, Sized):
        try:
            return True, len(value)
        except TypeError:
            return False, 0
    return False, 0


def is_empty(value: Any) -> bool:
    """Return True when ``value`` is nil, a zero value or a zero-length container.

    Zero values are ``""``, ``b""``, ``False`` and numeric zero of any type.
    """
    if is_nil(value):
        return True
    if isinstance(value, _ZERO_TYPES):
        return not value
    ok, length = get_len(value)
    if ok:
        return length == 0
    return False
