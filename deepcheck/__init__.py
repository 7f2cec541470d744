"""
deepcheck - Structural Comparison Engine for Test Assertions

Decides equality, numeric-aware equality, emptiness, nil-ness,
exported-field-only copies and multiset list differences over arbitrarily
shaped Python values, and turns them into pass/fail verdicts.
"""

from .engine import DeepCheckEngine, check, configure_logging
from .classifiers import is_empty, is_nil
from .comparators import equal, equal_values, convertible, convert
from .copier import copy_exported
from .differ import diff_lists
from .shapes import is_list, shape_of, fields_of, unexported, zero_value
from .models import (
    EngineConfig,
    LogLevel,
    Shape,
    CheckType,
    Ref,
    FieldDescriptor,
    DiffResult,
    Verdict,
    TraceEntry,
)
from .exceptions import (
    DeepCheckError,
    ValidationError,
    UnsupportedTypeError,
    ConfigError,
    MaxDepthExceededError,
)
from .runner import (
    CaseRunner,
    CaseResult,
    RunReport,
    run_cases,
)

__version__ = "1.0.0"
__all__ = [
    # Engine
    "DeepCheckEngine",
    "EngineConfig",
    "LogLevel",
    "check",
    "configure_logging",
    # Core operations
    "is_empty",
    "is_nil",
    "is_list",
    "equal",
    "equal_values",
    "copy_exported",
    "diff_lists",
    # Introspection
    "shape_of",
    "fields_of",
    "unexported",
    "zero_value",
    "convertible",
    "convert",
    # Models
    "Shape",
    "CheckType",
    "Ref",
    "FieldDescriptor",
    "DiffResult",
    "Verdict",
    "TraceEntry",
    # Errors
    "DeepCheckError",
    "ValidationError",
    "UnsupportedTypeError",
    "ConfigError",
    "MaxDepthExceededError",
    # Runner
    "CaseRunner",
    "CaseResult",
    "RunReport",
    "run_cases",
]
