"""Utility functions for the deepcheck engine."""

from __future__ import annotations

import re
import dataclasses
from collections import deque
from typing import Any, Optional

import numpy

from .exceptions import MaxDepthExceededError
from .shapes import BOOL_TYPES, NUMERIC_TYPES, fields_of


# Builtins that a user-defined subclass can be converted to and from
UNDERLYING_TYPES = (
    int, float, complex, str, bytes, bytearray,
    list, tuple, dict, set, frozenset, deque,
)


def build_path(parent_path: str, key: Any) -> str:
    """Build a JSONPath-like path from parent path and key."""
    if isinstance(key, int) and not isinstance(key, bool):
        return f"{parent_path}[{key}]"
    else:
        # Handle special characters in key names
        if re.match(r'^[a-zA-Z_][a-zA-Z0-9_]*$', str(key)):
            return f"{parent_path}.{key}"
        else:
            return f"{parent_path}[{key!r}]"


def check_depth(depth: int, max_depth: int, path: str):
    """Raise when a recursive walk goes deeper than allowed."""
    if depth > max_depth:
        raise MaxDepthExceededError(max_depth, path)


def get_type_name(value: Any) -> str:
    """Get a friendly type name for a value."""
    if value is None:
        return "nil"
    if isinstance(value, numpy.ndarray):
        return f"ndarray[{value.dtype}]"
    return type(value).__name__


def is_numeric_type(tp: type) -> bool:
    """Integer, floating and complex families; booleans are not numeric."""
    return issubclass(tp, NUMERIC_TYPES) and not issubclass(tp, BOOL_TYPES)


def is_complex_type(tp: type) -> bool:
    return issubclass(tp, (complex, numpy.complexfloating))


def numeric_size(tp: type) -> int:
    """Size in bytes of a numeric representation."""
    if issubclass(tp, numpy.generic):
        return numpy.dtype(tp).itemsize
    if is_complex_type(tp):
        return 16
    return 8


def underlying_type(tp: type) -> Optional[type]:
    """The builtin a type derives from, e.g. ``str`` for ``class UserId(str)``."""
    for base in tp.__mro__:
        if base in UNDERLYING_TYPES:
            return base
    return None


def field_signature(cls: type) -> tuple:
    """(name, annotation) pairs of a dataclass, in declaration order."""
    return tuple((d.name, d.type) for d in fields_of(cls))


def is_dataclass_type(tp: Any) -> bool:
    return isinstance(tp, type) and dataclasses.is_dataclass(tp)
