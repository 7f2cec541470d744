"""Emptiness and nil classification."""

from __future__ import annotations

from typing import Any

from .comparators import DEFAULT_MAX_DEPTH, deep_equal
from .models import Ref, Shape
from .shapes import length_of, shape_of, zero_instance, zero_value
from .utils import check_depth

# Shapes whose emptiness is their element count. Tuples and arrays count too,
# so (0, 0) is not empty even though it is the zero value of a 2-tuple.
_COUNTED_SHAPES = (Shape.SEQUENCE, Shape.ASSOCIATIVE, Shape.CHANNEL, Shape.RAW_BYTES)


def is_empty(value: Any, max_depth: int = DEFAULT_MAX_DEPTH, depth: int = 0) -> bool:
    """
    Check whether a value is empty.

    Collections are empty when they hold no element, references when they
    are nil or point to an empty value, and everything else when it equals
    the zero value of its exact type.

    Args:
        value: The value to check
        max_depth: Maximum reference chain to follow

    Returns:
        True if the value is empty
    """
    if value is None:
        return True

    shape = shape_of(value)

    if shape in _COUNTED_SHAPES:
        return length_of(value) == 0

    if shape is Shape.REFERENCE:
        if value.is_nil:
            return True
        check_depth(depth + 1, max_depth, "$.*")
        return is_empty(value.target, max_depth, depth + 1)

    if shape is Shape.COMPOSITE:
        return deep_equal(value, zero_instance(type(value), value), max_depth)

    return deep_equal(value, zero_value(type(value)), max_depth)


def is_nil(value: Any) -> bool:
    """
    Check whether a value is nil, without raising.

    Only the outer reference state is looked at: a reference to a value
    that is itself nil-containing is not nil. Values that cannot be nil
    at all report False.
    """
    if value is None:
        return True
    if isinstance(value, Ref):
        return value.is_nil
    return False
