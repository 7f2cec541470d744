"""Main comparison engine for deepcheck."""

from __future__ import annotations

import logging
from typing import Any, Optional

from .checks import Checker
from .classifiers import is_empty, is_nil
from .comparators import equal, equal_values
from .copier import copy_exported
from .differ import ListDiffer
from .models import (
    CheckType,
    DiffResult,
    EngineConfig,
    LogLevel,
    TraceEntry,
    Verdict,
)
from .shapes import is_list, shape_of

logger = logging.getLogger("deepcheck")

_LOG_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


class DeepCheckEngine:
    """
    Structural comparison engine bound to one configuration.

    Operations:
    - is_empty / is_nil / is_list: shape classification
    - equal / equal_values: structural and numeric-aware equality
    - copy_exported: copies that keep only exported fields
    - diff_lists: multiset difference of two lists
    - check: pass/fail verdicts built on the above
    """

    VERSION = "1.0.0"

    def __init__(self, config: Optional[EngineConfig] = None):
        """
        Initialize the engine.

        Args:
            config: Engine configuration (uses defaults if not provided)
        """
        self.config = config or EngineConfig()
        self.checker = Checker(self.config.max_depth)
        self.traces: list[TraceEntry] = []
        # Per-engine threshold; the shared logger level is left to configure_logging
        self.log_level = _LOG_LEVELS[self.config.log_level]

    def is_empty(self, value: Any) -> bool:
        result = is_empty(value, self.config.max_depth)
        self._add_trace("is_empty", value, result)
        return result

    def is_nil(self, value: Any) -> bool:
        result = is_nil(value)
        self._add_trace("is_nil", value, result)
        return result

    def is_list(self, value: Any) -> bool:
        result = is_list(value)
        self._add_trace("is_list", value, result)
        return result

    def equal(self, expected: Any, actual: Any) -> bool:
        result = equal(expected, actual, self.config.max_depth)
        self._add_trace("equal", expected, result, {"actual_shape": shape_of(actual).value})
        return result

    def equal_values(self, expected: Any, actual: Any) -> bool:
        result = equal_values(expected, actual, self.config.max_depth)
        self._add_trace("equal_values", expected, result, {"actual_shape": shape_of(actual).value})
        return result

    def copy_exported(self, value: Any) -> Any:
        result = copy_exported(value, self.config.max_depth)
        self._add_trace("copy_exported", value, type(result).__name__)
        return result

    def diff_lists(self, list_a: Any, list_b: Any) -> DiffResult:
        differ = ListDiffer(self.config.max_depth)
        result = differ.diff(list_a, list_b)
        self._add_trace("diff_lists", list_a, result.is_match, {
            "extra_in_first": len(result.extra_in_first),
            "extra_in_second": len(result.extra_in_second),
            "comparisons": differ.comparisons,
        })
        return result

    def check(self, check_type: CheckType | str, *args, **kwargs) -> Verdict:
        """
        Run a named check.

        Args:
            check_type: CheckType or its string value (e.g. "elements_match")
            *args: Positional arguments of the check

        Returns:
            Verdict of the check
        """
        check_type = CheckType(check_type)
        verdict = self.checker.run(check_type, *args, **kwargs)
        self._add_trace(
            f"check:{check_type.value}",
            args[0] if args else None,
            verdict.passed,
            {"message": verdict.message} if verdict.message else None
        )
        return verdict

    def clear_traces(self):
        self.traces = []

    def _add_trace(self, operation: str, value: Any, result: Any, details: dict = None):
        """Add a trace entry if tracing is enabled."""
        if not self.config.trace_operations:
            return
        entry = TraceEntry(
            operation=operation,
            shape=shape_of(value),
            result=result,
            details=details
        )
        self.traces.append(entry)
        if self.log_level <= logging.DEBUG:
            logger.debug("%s(%s) -> %r", operation, entry.shape.value, result)


def check(
    check_type: CheckType | str,
    *args,
    config: Optional[EngineConfig] = None,
    **kwargs
) -> Verdict:
    """
    Convenience function to run a single check.

    Args:
        check_type: CheckType or its string value
        *args: Positional arguments of the check
        config: Optional engine configuration

    Returns:
        Verdict of the check
    """
    engine = DeepCheckEngine(config)
    return engine.check(check_type, *args, **kwargs)


def configure_logging(log_level: LogLevel | str = LogLevel.INFO) -> logging.Logger:
    """
    Set the level of the package logger.

    Engines never touch the shared logger; call this once from the
    application or CLI that owns logging.

    Args:
        log_level: LogLevel or its name (e.g. "debug")

    Returns:
        The "deepcheck" logger
    """
    if not isinstance(log_level, LogLevel):
        log_level = LogLevel(str(log_level).upper())
    logger.setLevel(_LOG_LEVELS[log_level])
    return logger
