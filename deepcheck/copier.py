"""Exported-field copying: deep copies that drop non-exported fields."""

from __future__ import annotations

import copy
from collections import deque
from collections.abc import MutableMapping, Mapping
from typing import Any

import numpy

from .classifiers import is_nil
from .comparators import DEFAULT_MAX_DEPTH
from .models import Shape
from .shapes import fields_of, shape_of, zero_instance, zero_value
from .utils import build_path, check_depth


class ExportedCopier:
    """
    Walks nested data and rebuilds it keeping only exported composite fields.

    Composites are re-allocated at their zero value and only exported,
    non-nil fields are copied over. Sequences keep their length and index
    alignment, mappings keep their keys. The input is never mutated.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        self.max_depth = max_depth

    def copy(self, value: Any, path: str = "$", depth: int = 0) -> Any:
        if is_nil(value):
            return value

        check_depth(depth, self.max_depth, path)
        shape = shape_of(value)

        if shape is Shape.COMPOSITE:
            return self._copy_composite(value, path, depth)
        if shape is Shape.REFERENCE:
            return type(value)(self.copy(value.target, f"{path}.*", depth + 1))
        if shape is Shape.SEQUENCE:
            return self._copy_sequence(value, path, depth)
        if shape is Shape.ASSOCIATIVE:
            return self._copy_associative(value, path, depth)
        return value

    def _copy_composite(self, value: Any, path: str, depth: int) -> Any:
        result = zero_instance(type(value), value)
        for descriptor in fields_of(value):
            if not descriptor.exported:
                continue
            field_value = descriptor.value_of(value)
            if is_nil(field_value):
                continue
            object.__setattr__(
                result,
                descriptor.name,
                self.copy(field_value, build_path(path, descriptor.name), depth + 1)
            )
        return result

    def _copy_item(self, item: Any, path: str, depth: int) -> Any:
        """Copy a collection element; a nil element becomes a fresh nil of its type."""
        if is_nil(item):
            return zero_value(type(item))
        return self.copy(item, path, depth + 1)

    def _copy_sequence(self, value: Any, path: str, depth: int) -> Any:
        if isinstance(value, numpy.ndarray):
            return self._copy_array(value, path, depth)

        items = [
            self._copy_item(item, build_path(path, i), depth)
            for i, item in enumerate(value)
        ]

        if type(value) is list:
            return items
        if isinstance(value, deque):
            return type(value)(items, value.maxlen)
        if isinstance(value, tuple):
            if hasattr(value, "_make"):
                return value._make(items)
            return type(value)(items)

        # list subclass: keep its type and instance attributes
        result = copy.copy(value)
        result[:] = items
        return result

    def _copy_array(self, value: numpy.ndarray, path: str, depth: int) -> numpy.ndarray:
        if value.dtype != object:
            return value.copy()

        result = numpy.empty_like(value)
        for index in numpy.ndindex(value.shape):
            result[index] = self._copy_item(value[index], f"{path}{list(index)}", depth)
        return result

    def _copy_associative(self, value: Any, path: str, depth: int) -> Any:
        if isinstance(value, MutableMapping):
            result = copy.copy(value)
            result.clear()
            for key, item in value.items():
                result[key] = self._copy_item(item, build_path(path, key), depth)
            return result
        if isinstance(value, Mapping):
            return {
                key: self._copy_item(item, build_path(path, key), depth)
                for key, item in value.items()
            }
        # Set elements are keys and are never filtered
        return copy.copy(value)


def copy_exported(value: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> Any:
    """
    Copy a value keeping only exported composite fields.

    Args:
        value: The value to copy
        max_depth: Maximum nesting depth to walk

    Returns:
        A new value with the same shape, or the input itself when it is nil
        or has no field-visibility concept
    """
    return ExportedCopier(max_depth).copy(value)
