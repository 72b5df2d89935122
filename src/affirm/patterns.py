"""Containment and regular-expression matching."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

import numpy as np

from affirm.equality import objects_are_equal


def includes_element(container: Any, element: Any) -> tuple[bool, bool]:
    """Return ``(ok, found)``.

    Strings and byte strings use substring search, mappings search their
    keys, other iterables are scanned with :func:`objects_are_equal`. ``ok``
    is False when ``container`` supports neither mode. One-shot iterators are
    rejected so that the check never consumes the caller's data.
    """
    if isinstance(container, str):
        return True, isinstance(element, str) and element in container

    if isinstance(container, (bytes, bytearray)):
        return True, isinstance(element, (bytes, bytearray)) and element in container

    if isinstance(container, Mapping):
        return True, any(objects_are_equal(key, element) for key in container)

    if isinstance(container, np.ndarray):
        if container.ndim == 0:
            return False, False
        return True, any(objects_are_equal(item, element) for item in container.tolist())

    if isinstance(container, Iterable) and not isinstance(container, Iterator):
        return True, any(objects_are_equal(item, element) for item in container)

    return False, False


def match_regexp(pattern: str | re.Pattern[str], text: Any) -> bool:
    """Return True if ``pattern`` matches anywhere in ``text``.

    ``pattern`` may be compiled or a string compiled on demand. Anchors in the
    pattern (``^``, ``$``) are honoured; otherwise any substring may match.
    """
    rx = pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)
    if not isinstance(text, str):
        text = str(text)
    return rx.search(text) is not None
