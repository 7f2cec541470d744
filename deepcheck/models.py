"""Data models for the deepcheck engine."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Generic, NamedTuple, Optional, TypeVar

from .exceptions import ConfigError

T = TypeVar("T")


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class Shape(Enum):
    """Runtime category of a value, used to select comparison/copy behavior."""
    NIL = "nil"
    BOOL = "bool"
    NUMERIC = "numeric"
    TEXT = "text"
    RAW_BYTES = "raw_bytes"
    SEQUENCE = "sequence"
    ASSOCIATIVE = "associative"
    REFERENCE = "reference"
    COMPOSITE = "composite"
    CALLABLE = "callable"
    CHANNEL = "channel"
    OPAQUE = "opaque"


class CheckType(Enum):
    EQUAL = "equal"
    NOT_EQUAL = "not_equal"
    EXACTLY = "exactly"
    EQUAL_VALUES = "equal_values"
    EQUAL_EXPORTED_VALUES = "equal_exported_values"
    ELEMENTS_MATCH = "elements_match"
    EMPTY = "empty"
    NOT_EMPTY = "not_empty"
    NIL = "nil"
    NOT_NIL = "not_nil"
    TRUE = "true"
    FALSE = "false"
    LEN = "len"
    CONTAINS = "contains"
    GREATER = "greater"
    GREATER_OR_EQUAL = "greater_or_equal"
    IS_TYPE = "is_type"
    CONDITION = "condition"
    RAISES = "raises"
    ERROR = "error"
    NO_ERROR = "no_error"
    EQUAL_ERROR = "equal_error"
    ERROR_CONTAINS = "error_contains"
    ERROR_IS = "error_is"
    FILE_EXISTS = "file_exists"
    NO_FILE_EXISTS = "no_file_exists"
    DIR_EXISTS = "dir_exists"
    NO_DIR_EXISTS = "no_dir_exists"


@dataclass
class Ref(Generic[T]):
    """
    A pointer-like reference to another value.

    ``Ref()`` is a reference that exists but points to nothing, which is
    distinct from the reference itself being absent (``None``).
    """
    target: Optional[T] = None

    @property
    def is_nil(self) -> bool:
        return self.target is None


@dataclass
class EngineConfig:
    """Global configuration for the comparison engine."""
    max_depth: int = 100
    log_level: LogLevel = LogLevel.INFO
    trace_operations: bool = False

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "EngineConfig":
        """
        Build a configuration from a plain mapping (e.g. a YAML section).

        Args:
            data: Mapping of field names to values; None gives the defaults

        Returns:
            EngineConfig instance
        """
        if not data:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError("config must be a mapping", reason=type(data).__name__)

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

        values = dict(data)
        if "log_level" in values:
            try:
                values["log_level"] = LogLevel(str(values["log_level"]).upper())
            except ValueError:
                raise ConfigError(f"Invalid log_level: {values['log_level']}")
        if "max_depth" in values:
            if not isinstance(values["max_depth"], int) or values["max_depth"] < 1:
                raise ConfigError(f"max_depth must be a positive integer, got {values['max_depth']!r}")
        return cls(**values)

    def to_dict(self) -> dict:
        return {
            "max_depth": self.max_depth,
            "log_level": self.log_level.value,
            "trace_operations": self.trace_operations,
        }


@dataclass
class FieldDescriptor:
    """Describes one field of a composite value."""
    name: str
    exported: bool
    type: Any = None

    def value_of(self, obj: Any) -> Any:
        return getattr(obj, self.name)


class DiffResult(NamedTuple):
    """Elements left over after matching two lists as multisets."""
    extra_in_first: list
    extra_in_second: list

    @property
    def is_match(self) -> bool:
        return not self.extra_in_first and not self.extra_in_second

    def to_dict(self) -> dict:
        return {
            "extra_in_first": list(self.extra_in_first),
            "extra_in_second": list(self.extra_in_second),
        }


@dataclass
class Verdict:
    """Pass/fail outcome of a single check."""
    passed: bool
    check: CheckType
    message: str = ""
    details: dict = field(default_factory=dict)

    def __bool__(self) -> bool:
        return self.passed

    def to_dict(self) -> dict:
        result = {
            "passed": self.passed,
            "check": self.check.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


@dataclass
class TraceEntry:
    """Trace entry for an engine call (when trace_operations=true)."""
    operation: str
    shape: Shape
    result: Any
    details: Optional[dict] = None

    def to_dict(self) -> dict:
        result = {
            "operation": self.operation,
            "shape": self.shape.value,
            "result": self.result,
        }
        if self.details:
            result["details"] = self.details
        return result
