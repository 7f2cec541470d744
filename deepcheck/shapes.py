"""Runtime introspection: shapes, composite fields and zero values."""

from __future__ import annotations

import asyncio
import dataclasses
import queue
import sys
import types
import typing
from collections import deque
from collections.abc import Mapping, Set
from typing import Any, Union

import numpy

from .models import FieldDescriptor, Ref, Shape


BOOL_TYPES = (bool, numpy.bool_)
NUMERIC_TYPES = (int, float, complex, numpy.number)
BYTES_TYPES = (bytes, bytearray, memoryview)
SEQUENCE_TYPES = (list, tuple, deque, numpy.ndarray)
CHANNEL_TYPES = (queue.Queue, queue.SimpleQueue, asyncio.Queue)

# Builtins whose no-argument constructor yields the zero value
_ZERO_CONSTRUCTIBLE = (
    bool, int, float, complex, str, bytes, bytearray,
    list, tuple, dict, set, frozenset, deque, numpy.generic,
)


def shape_of(value: Any) -> Shape:
    """Classify a value into its Shape."""
    if value is None:
        return Shape.NIL
    if isinstance(value, BOOL_TYPES):
        return Shape.BOOL
    if isinstance(value, NUMERIC_TYPES):
        return Shape.NUMERIC
    if isinstance(value, str):
        return Shape.TEXT
    if isinstance(value, BYTES_TYPES):
        return Shape.RAW_BYTES
    if isinstance(value, Ref):
        return Shape.REFERENCE
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return Shape.COMPOSITE
    if isinstance(value, SEQUENCE_TYPES):
        # 0-d arrays have no length
        if isinstance(value, numpy.ndarray) and value.ndim == 0:
            return Shape.OPAQUE
        return Shape.SEQUENCE
    if isinstance(value, (Mapping, Set)):
        return Shape.ASSOCIATIVE
    if isinstance(value, CHANNEL_TYPES):
        return Shape.CHANNEL
    if callable(value):
        return Shape.CALLABLE
    return Shape.OPAQUE


def is_list(value: Any) -> bool:
    """True iff the value is an array or ordered list."""
    return shape_of(value) is Shape.SEQUENCE


def length_of(value: Any) -> int:
    """Element count of a sequence, associative, byte or channel value."""
    if isinstance(value, numpy.ndarray):
        return value.size
    if isinstance(value, CHANNEL_TYPES):
        return value.qsize()
    return len(value)


def unexported(**kwargs) -> Any:
    """Declare a dataclass field that is left out of exported-only copies."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata["exported"] = False
    return dataclasses.field(metadata=metadata, **kwargs)


def fields_of(composite: Any) -> list[FieldDescriptor]:
    """
    List the fields of a dataclass type or instance in declaration order.

    A field is exported unless its name starts with an underscore or it
    was declared with ``unexported()``. Annotations are resolved one field
    at a time; one that cannot be resolved (e.g. a postponed annotation
    naming a class local to a function) stays a string.
    """
    cls = composite if isinstance(composite, type) else type(composite)
    try:
        hints = typing.get_type_hints(cls)
    except (NameError, TypeError):
        hints = {}

    descriptors = []
    for f in dataclasses.fields(cls):
        exported = not f.name.startswith("_") and f.metadata.get("exported", True)
        descriptors.append(FieldDescriptor(
            name=f.name,
            exported=bool(exported),
            type=hints[f.name] if f.name in hints else _resolve_annotation(cls, f.type),
        ))
    return descriptors


def _resolve_annotation(cls: type, annotation: Any) -> Any:
    """Evaluate a string annotation in the module that defines ``cls``."""
    if not isinstance(annotation, str):
        return annotation
    module = sys.modules.get(cls.__module__)
    namespace = dict(vars(module)) if module is not None else {}
    namespace.setdefault(cls.__name__, cls)
    try:
        return eval(annotation, namespace)
    except (NameError, AttributeError, TypeError, SyntaxError):
        return annotation


def zero_value(tp: Any) -> Any:
    """
    Zero value for a type or annotation.

    Optional/union annotations and anything unrecognised are nil (None).
    """
    if tp is None or tp is Any or tp is type(None):
        return None

    origin = typing.get_origin(tp)
    if origin is Union or origin is types.UnionType:
        return None
    if origin is not None:
        tp = origin

    if tp is Ref:
        return Ref()
    if not isinstance(tp, type):
        return None
    if dataclasses.is_dataclass(tp):
        return zero_instance(tp)
    if issubclass(tp, _ZERO_CONSTRUCTIBLE):
        try:
            return tp()
        except TypeError:
            return None
    return None


def zero_instance(cls: type, template: Any = None) -> Any:
    """
    Allocate an instance of a dataclass with every field at its zero value.

    Args:
        cls: Dataclass type
        template: Optional instance of ``cls``; its field values give the
            type of fields whose annotation could not be resolved

    Returns:
        New instance, built without running ``__init__``
    """
    instance = cls.__new__(cls)
    for f, descriptor in zip(dataclasses.fields(cls), fields_of(cls)):
        if isinstance(descriptor.type, str):
            zero = _unresolved_zero(f, template)
        else:
            zero = zero_value(descriptor.type)
        object.__setattr__(instance, descriptor.name, zero)
    return instance


def _unresolved_zero(f: dataclasses.Field, template: Any) -> Any:
    """Zero value for a field with a string annotation, taken from a sample value."""
    if f.default is not dataclasses.MISSING:
        sample = f.default
    elif f.default_factory is not dataclasses.MISSING:
        sample = f.default_factory()
    elif template is not None:
        sample = getattr(template, f.name)
    else:
        return None
    return zero_value(type(sample))
