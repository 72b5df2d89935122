"""Equality engine.

Values are sorted into a small closed set of shapes, each with its own
equality rule. Containers and records recurse; everything else relies on the
object's own ``__eq__``.
"""

from __future__ import annotations

import dataclasses
import datetime
import logging
import numbers
from collections.abc import Mapping, Sequence, Set
from enum import Enum
from typing import Any

import numpy as np
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class Shape(str, Enum):
    """Comparison-relevant shape of a value."""

    NONE = "none"
    BYTES = "bytes"
    SCALAR = "scalar"
    ARRAY = "array"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    SET = "set"
    RECORD = "record"
    OPAQUE = "opaque"


_BYTES_TYPES = (bytes, bytearray, memoryview)
_SCALAR_TYPES = (
    str,
    numbers.Number,
    np.generic,
    datetime.date,
    datetime.time,
    datetime.timedelta,
)


def shape_of(value: Any) -> Shape:
    """Classify ``value`` into a :class:`Shape`."""
    if value is None:
        return Shape.NONE
    if isinstance(value, _BYTES_TYPES):
        return Shape.BYTES
    if isinstance(value, _SCALAR_TYPES):
        return Shape.SCALAR
    if isinstance(value, np.ndarray):
        return Shape.ARRAY
    if isinstance(value, BaseModel):
        return Shape.RECORD
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return Shape.RECORD
    if isinstance(value, Mapping):
        return Shape.MAPPING
    if isinstance(value, Set):
        return Shape.SET
    if isinstance(value, Sequence):
        return Shape.SEQUENCE
    return Shape.OPAQUE


def _is_bool(value: Any) -> bool:
    return isinstance(value, (bool, np.bool_))


def _scalars_equal(expected: Any, actual: Any) -> bool:
    if _is_bool(expected) != _is_bool(actual):
        return False
    return bool(expected == actual)


def _sequences_equal(expected: Sequence, actual: Sequence, memo: set[tuple[int, int]]) -> bool:
    if type(expected) is not type(actual) or len(expected) != len(actual):
        return False
    return all(_equal(e, a, memo) for e, a in zip(expected, actual))


def _key_set(mapping: Mapping) -> set[tuple[bool, Any]]:
    # Tag keys so that True and 1 stay distinct, as they do for scalars.
    return {(_is_bool(key), key) for key in mapping.keys()}


def _mappings_equal(expected: Mapping, actual: Mapping, memo: set[tuple[int, int]]) -> bool:
    if _key_set(expected) != _key_set(actual):
        return False
    return all(_equal(expected[key], actual[key], memo) for key in expected)


def _record_fields(record: Any) -> dict[str, Any]:
    if isinstance(record, BaseModel):
        return {name: getattr(record, name) for name in type(record).model_fields}
    return {f.name: getattr(record, f.name) for f in dataclasses.fields(record) if f.compare}


def _records_equal(expected: Any, actual: Any, memo: set[tuple[int, int]]) -> bool:
    if type(expected) is not type(actual):
        return False
    return _mappings_equal(_record_fields(expected), _record_fields(actual), memo)


def _opaque_equal(expected: Any, actual: Any) -> bool:
    if expected is actual:
        return True
    result = expected == actual
    if result is NotImplemented:
        return False
    try:
        return bool(result)
    except (TypeError, ValueError):
        # e.g. element-wise results from array-like objects
        logger.debug("Ambiguous equality between %r and %r", type(expected), type(actual))
        return False


_RECURSIVE_SHAPES = (Shape.SEQUENCE, Shape.MAPPING, Shape.RECORD)


def objects_are_equal(expected: Any, actual: Any) -> bool:
    """Structural deep equality.

    Byte buffers compare by content, containers element by element, records
    (dataclasses and pydantic models) field by field. A ``bool`` never equals
    a non-bool number, including when used as a mapping key. Self-referencing
    containers are supported.
    """
    return _equal(expected, actual, set())


def _equal(expected: Any, actual: Any, memo: set[tuple[int, int]]) -> bool:
    expected_shape = shape_of(expected)
    actual_shape = shape_of(actual)

    if expected_shape is Shape.NONE or actual_shape is Shape.NONE:
        return expected_shape is actual_shape

    if expected_shape is not actual_shape:
        return False

    if expected_shape in _RECURSIVE_SHAPES:
        if expected is actual:
            return True
        pair = (id(expected), id(actual))
        if pair in memo:
            # Already being compared further up; a cycle is equal unless
            # something else along it differs.
            return True
        memo.add(pair)

    if expected_shape is Shape.BYTES:
        return bytes(expected) == bytes(actual)
    if expected_shape is Shape.SCALAR:
        return _scalars_equal(expected, actual)
    if expected_shape is Shape.ARRAY:
        return expected.shape == actual.shape and bool(np.array_equal(expected, actual))
    if expected_shape is Shape.SEQUENCE:
        return _sequences_equal(expected, actual, memo)
    if expected_shape is Shape.MAPPING:
        if type(expected) is not type(actual):
            return False
        return _mappings_equal(expected, actual, memo)
    if expected_shape is Shape.SET:
        return expected == actual
    if expected_shape is Shape.RECORD:
        return _records_equal(expected, actual, memo)
    return _opaque_equal(expected, actual)


def _convert(value: Any, target: type) -> tuple[Any, bool]:
    try:
        return target(value), True
    except (TypeError, ValueError, ArithmeticError):
        return None, False


def objects_are_equivalent(expected: Any, actual: Any) -> bool:
    """Equality after converting ``actual`` to the type of ``expected``.

    Succeeds when the values are already equal, or when ``actual`` converts
    to ``type(expected)`` and the converted value is equal, e.g.
    ``numpy.int32(10)`` and ``numpy.uint64(10)``, or ``10`` and ``10.0``.
    """
    if objects_are_equal(expected, actual):
        return True
    convertible = (Shape.SCALAR, Shape.BYTES)
    if shape_of(expected) not in convertible or shape_of(actual) not in convertible:
        return False

    target = type(expected)
    converted, ok = _convert(actual, target)
    if not ok:
        return False
    # Lossy conversions (10.5 -> 10) must round-trip to count as equivalent.
    back, ok = _convert(converted, type(actual))
    if not ok or not objects_are_equal(back, actual):
        return False
    return objects_are_equal(expected, converted)


def objects_are_exactly(expected: Any, actual: Any) -> bool:
    """Equality where the dynamic types must also be identical."""
    return type(expected) is type(actual) and objects_are_equal(expected, actual)
