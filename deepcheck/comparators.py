"""Equality functions for arbitrarily shaped values."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import numpy

from .models import Shape
from .shapes import BOOL_TYPES, BYTES_TYPES, fields_of, shape_of
from .utils import (
    build_path,
    check_depth,
    field_signature,
    is_complex_type,
    is_dataclass_type,
    is_numeric_type,
    numeric_size,
    underlying_type,
)

DEFAULT_MAX_DEPTH = 100

# Failures a conversion can raise; all of them mean "not equal"
_CONVERSION_ERRORS = (TypeError, ValueError, OverflowError)


def equal(expected: Any, actual: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> bool:
    """
    Determine whether two values are equal.

    Nil only equals nil. A raw byte sequence on the expected side is
    compared byte-for-byte and only ever equals another byte sequence;
    everything else goes through deep structural equality.

    Args:
        expected: The expected value
        actual: The actual value
        max_depth: Maximum nesting depth to walk

    Returns:
        True if the values are equal
    """
    if expected is None or actual is None:
        return expected is None and actual is None

    if isinstance(expected, BYTES_TYPES):
        if not isinstance(actual, BYTES_TYPES):
            return False
        return bytes(expected) == bytes(actual)

    return deep_equal(expected, actual, max_depth)


def deep_equal(
    a: Any,
    b: Any,
    max_depth: int = DEFAULT_MAX_DEPTH,
    path: str = "$",
    depth: int = 0
) -> bool:
    """
    Structural equality: same exact type and recursively equal contents.

    No type coercion is performed.
    """
    check_depth(depth, max_depth, path)

    if a is None or b is None:
        return a is None and b is None
    if type(a) is not type(b):
        return False

    shape = shape_of(a)

    if shape is Shape.COMPOSITE:
        for descriptor in fields_of(a):
            if not deep_equal(
                descriptor.value_of(a),
                descriptor.value_of(b),
                max_depth,
                build_path(path, descriptor.name),
                depth + 1
            ):
                return False
        return True

    if shape is Shape.SEQUENCE:
        if isinstance(a, numpy.ndarray):
            if a.shape != b.shape or a.dtype != b.dtype:
                return False
        elif len(a) != len(b):
            return False
        for i, (item_a, item_b) in enumerate(zip(a, b)):
            if not deep_equal(item_a, item_b, max_depth, build_path(path, i), depth + 1):
                return False
        return True

    if shape is Shape.ASSOCIATIVE:
        if not isinstance(a, Mapping):
            # Set elements are hashable keys; native equality is exact
            return a == b
        if a.keys() != b.keys():
            return False
        for key in a:
            if not deep_equal(a[key], b[key], max_depth, build_path(path, key), depth + 1):
                return False
        return True

    if shape is Shape.REFERENCE:
        if a.is_nil or b.is_nil:
            return a.is_nil and b.is_nil
        return deep_equal(a.target, b.target, max_depth, f"{path}.*", depth + 1)

    if shape in (Shape.CALLABLE, Shape.CHANNEL):
        return a is b

    return bool(a == b)


def convertible(source: type, target: type) -> bool:
    """
    Check whether values of ``source`` type can be converted to ``target``.

    Args:
        source: Type of the value to convert
        target: Desired type

    Returns:
        True if a conversion exists
    """
    if source is target:
        return True

    if is_numeric_type(source) and is_numeric_type(target):
        # complex never converts to or from the real families
        return is_complex_type(source) == is_complex_type(target)
    if is_numeric_type(source) or is_numeric_type(target):
        return False

    if issubclass(source, BOOL_TYPES) or issubclass(target, BOOL_TYPES):
        return issubclass(source, BOOL_TYPES) and issubclass(target, BOOL_TYPES)

    if is_dataclass_type(source) or is_dataclass_type(target):
        return (
            is_dataclass_type(source) and is_dataclass_type(target)
            and field_signature(source) == field_signature(target)
        )

    source_base = underlying_type(source)
    return source_base is not None and source_base is underlying_type(target)


def convert(value: Any, target: type) -> Any:
    """
    Convert a value to the target type.

    Numeric conversions into numpy types wrap on overflow the way a
    fixed-width cast does; conversions into Python types use the
    constructor. Callers must check ``convertible`` first.
    """
    if type(value) is target:
        return value

    if is_numeric_type(target) and issubclass(target, numpy.generic):
        with numpy.errstate(all="ignore"):
            return numpy.asarray(value).astype(target)[()]

    if is_dataclass_type(target):
        result = target.__new__(target)
        for descriptor in fields_of(value):
            object.__setattr__(result, descriptor.name, descriptor.value_of(value))
        return result

    if issubclass(target, tuple) and hasattr(target, "_make"):
        return target._make(value)

    return target(value)


def equal_values(expected: Any, actual: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> bool:
    """
    Check whether two values are equal, or equal after type conversion.

    When both values are numeric the narrower representation is always
    widened to the wider one before comparing, so a truncating conversion
    can never make two different numbers look equal. On a size tie the
    actual value is converted to the expected type.

    Args:
        expected: The expected value
        actual: The actual value
        max_depth: Maximum nesting depth to walk

    Returns:
        True if the values are equal
    """
    if equal(expected, actual, max_depth):
        return True

    if expected is None or actual is None:
        return False

    expected_type = type(expected)
    actual_type = type(actual)
    if not convertible(expected_type, actual_type):
        return False

    if not is_numeric_type(expected_type) or not is_numeric_type(actual_type):
        try:
            converted = convert(expected, actual_type)
        except _CONVERSION_ERRORS:
            return False
        return deep_equal(converted, actual, max_depth)

    if numeric_size(expected_type) >= numeric_size(actual_type):
        return _converted_equals(actual, expected_type, expected)
    return _converted_equals(expected, actual_type, actual)


def _converted_equals(value: Any, target: type, other: Any) -> bool:
    """Convert ``value`` to ``target`` and compare natively with ``other``."""
    try:
        converted = convert(value, target)
    except _CONVERSION_ERRORS:
        return False
    return bool(converted == other)
