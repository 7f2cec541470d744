"""Pass/fail checks built on the comparison engine."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable, Optional

from .classifiers import is_empty, is_nil
from .comparators import DEFAULT_MAX_DEPTH, equal, equal_values
from .copier import copy_exported
from .differ import diff_lists
from .models import CheckType, Ref, Shape, Verdict
from .shapes import BOOL_TYPES, is_list, length_of, shape_of
from .utils import get_type_name


class Checker:
    """
    Turns engine results into verdicts.

    Each check returns a Verdict instead of failing a test; the caller
    decides what a failed verdict means.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        self.max_depth = max_depth
        self._handlers: dict[CheckType, Callable[..., Verdict]] = {
            CheckType.EQUAL: self.equal,
            CheckType.NOT_EQUAL: self.not_equal,
            CheckType.EXACTLY: self.exactly,
            CheckType.EQUAL_VALUES: self.equal_values,
            CheckType.EQUAL_EXPORTED_VALUES: self.equal_exported_values,
            CheckType.ELEMENTS_MATCH: self.elements_match,
            CheckType.EMPTY: self.empty,
            CheckType.NOT_EMPTY: self.not_empty,
            CheckType.NIL: self.nil,
            CheckType.NOT_NIL: self.not_nil,
            CheckType.TRUE: self.true,
            CheckType.FALSE: self.false,
            CheckType.LEN: self.len,
            CheckType.CONTAINS: self.contains,
            CheckType.GREATER: self.greater,
            CheckType.GREATER_OR_EQUAL: self.greater_or_equal,
            CheckType.IS_TYPE: self.is_type,
            CheckType.CONDITION: self.condition,
            CheckType.RAISES: self.raises,
            CheckType.ERROR: self.error,
            CheckType.NO_ERROR: self.no_error,
            CheckType.EQUAL_ERROR: self.equal_error,
            CheckType.ERROR_CONTAINS: self.error_contains,
            CheckType.ERROR_IS: self.error_is,
            CheckType.FILE_EXISTS: self.file_exists,
            CheckType.NO_FILE_EXISTS: self.no_file_exists,
            CheckType.DIR_EXISTS: self.dir_exists,
            CheckType.NO_DIR_EXISTS: self.no_dir_exists,
        }

    def run(self, check_type: CheckType, *args, **kwargs) -> Verdict:
        """Dispatch to the check named by ``check_type``."""
        return self._handlers[check_type](*args, **kwargs)

    # Equality

    def equal(self, expected: Any, actual: Any) -> Verdict:
        if equal(expected, actual, self.max_depth):
            return _pass(CheckType.EQUAL)
        return _fail(
            CheckType.EQUAL,
            f"Not equal: expected {expected!r}, actual {actual!r}"
        )

    def not_equal(self, expected: Any, actual: Any) -> Verdict:
        if not equal(expected, actual, self.max_depth):
            return _pass(CheckType.NOT_EQUAL)
        return _fail(CheckType.NOT_EQUAL, f"Should not be: {actual!r}")

    def exactly(self, expected: Any, actual: Any) -> Verdict:
        if type(expected) is not type(actual):
            return _fail(
                CheckType.EXACTLY,
                f"Types expected to match exactly: {get_type_name(expected)} != {get_type_name(actual)}"
            )
        if equal(expected, actual, self.max_depth):
            return _pass(CheckType.EXACTLY)
        return _fail(
            CheckType.EXACTLY,
            f"Not equal: expected {expected!r}, actual {actual!r}"
        )

    def equal_values(self, expected: Any, actual: Any) -> Verdict:
        if equal_values(expected, actual, self.max_depth):
            return _pass(CheckType.EQUAL_VALUES)
        return _fail(
            CheckType.EQUAL_VALUES,
            f"Not equal: expected {expected!r} ({get_type_name(expected)}), "
            f"actual {actual!r} ({get_type_name(actual)})"
        )

    def equal_exported_values(self, expected: Any, actual: Any) -> Verdict:
        check = CheckType.EQUAL_EXPORTED_VALUES

        if type(expected) is not type(actual):
            return _fail(
                check,
                f"Types expected to match exactly: {get_type_name(expected)} != {get_type_name(actual)}"
            )

        for value in (expected, actual):
            # A nil reference still has a reference type; its copy is itself
            if isinstance(value, Ref) and value.is_nil:
                continue
            target = value.target if isinstance(value, Ref) else value
            if shape_of(target) is not Shape.COMPOSITE:
                return _fail(
                    check,
                    f"Types expected to both be composite or reference to composite, "
                    f"got {get_type_name(target)}"
                )

        expected = copy_exported(expected, self.max_depth)
        actual = copy_exported(actual, self.max_depth)

        if equal_values(expected, actual, self.max_depth):
            return _pass(check)
        return _fail(
            check,
            f"Not equal (comparing only exported fields): expected {expected!r}, actual {actual!r}"
        )

    def elements_match(self, list_a: Any, list_b: Any) -> Verdict:
        check = CheckType.ELEMENTS_MATCH

        if is_empty(list_a, self.max_depth) and is_empty(list_b, self.max_depth):
            return _pass(check)
        for value in (list_a, list_b):
            if not is_list(value):
                return _fail(
                    check,
                    f"{value!r} has an unsupported type {get_type_name(value)}, expecting array or list"
                )

        result = diff_lists(list_a, list_b, self.max_depth)
        if result.is_match:
            return _pass(check)
        return _fail(
            check,
            f"lists are not equal, {len(result.extra_in_first)} extra in first, "
            f"{len(result.extra_in_second)} extra in second",
            result.to_dict()
        )

    # Emptiness and nil

    def empty(self, value: Any) -> Verdict:
        if is_empty(value, self.max_depth):
            return _pass(CheckType.EMPTY)
        return _fail(CheckType.EMPTY, f"Should be empty, but was {value!r}")

    def not_empty(self, value: Any) -> Verdict:
        if not is_empty(value, self.max_depth):
            return _pass(CheckType.NOT_EMPTY)
        return _fail(CheckType.NOT_EMPTY, f"Should NOT be empty, but was {value!r}")

    def nil(self, value: Any) -> Verdict:
        if is_nil(value):
            return _pass(CheckType.NIL)
        return _fail(CheckType.NIL, f"Expected nil, but got: {value!r}")

    def not_nil(self, value: Any) -> Verdict:
        if not is_nil(value):
            return _pass(CheckType.NOT_NIL)
        return _fail(CheckType.NOT_NIL, "Expected value not to be nil")

    # Booleans, sizes and ordering

    def true(self, value: Any) -> Verdict:
        if isinstance(value, BOOL_TYPES) and bool(value):
            return _pass(CheckType.TRUE)
        return _fail(CheckType.TRUE, f"Should be true, but was {value!r}")

    def false(self, value: Any) -> Verdict:
        if isinstance(value, BOOL_TYPES) and not bool(value):
            return _pass(CheckType.FALSE)
        return _fail(CheckType.FALSE, f"Should be false, but was {value!r}")

    def len(self, value: Any, length: int) -> Verdict:
        if shape_of(value) not in (
            Shape.SEQUENCE, Shape.ASSOCIATIVE, Shape.TEXT, Shape.RAW_BYTES, Shape.CHANNEL
        ):
            return _fail(CheckType.LEN, f"Could not get length of {value!r}")
        actual = length_of(value)
        if actual == length:
            return _pass(CheckType.LEN)
        return _fail(
            CheckType.LEN,
            f"{value!r} should have {length} item(s), but has {actual}",
            {"length": actual}
        )

    def contains(self, container: Any, element: Any) -> Verdict:
        shape = shape_of(container)
        if shape is Shape.TEXT and isinstance(element, str):
            found = element in container
        elif shape is Shape.RAW_BYTES and isinstance(element, (bytes, bytearray)):
            found = bytes(element) in bytes(container)
        elif isinstance(container, Mapping):
            found = any(equal(key, element, self.max_depth) for key in container)
        elif shape in (Shape.SEQUENCE, Shape.ASSOCIATIVE):
            found = any(equal(item, element, self.max_depth) for item in container)
        else:
            return _fail(CheckType.CONTAINS, f"{container!r} does not support membership checks")

        if found:
            return _pass(CheckType.CONTAINS)
        return _fail(CheckType.CONTAINS, f"{container!r} does not contain {element!r}")

    def greater(self, e1: Any, e2: Any) -> Verdict:
        if e1 > e2:
            return _pass(CheckType.GREATER)
        return _fail(CheckType.GREATER, f'"{e1}" is not greater than "{e2}"')

    def greater_or_equal(self, e1: Any, e2: Any) -> Verdict:
        if e1 >= e2:
            return _pass(CheckType.GREATER_OR_EQUAL)
        return _fail(CheckType.GREATER_OR_EQUAL, f'"{e1}" is not greater than or equal to "{e2}"')

    def is_type(self, expected_type: type, value: Any) -> Verdict:
        if type(value) is expected_type:
            return _pass(CheckType.IS_TYPE)
        return _fail(
            CheckType.IS_TYPE,
            f"Object expected to be of type {expected_type.__name__}, but was {get_type_name(value)}"
        )

    # Callables and errors

    def condition(self, comp: Callable[[], bool]) -> Verdict:
        if comp():
            return _pass(CheckType.CONDITION)
        return _fail(CheckType.CONDITION, "Condition failed!")

    def raises(self, func: Callable[[], Any], expected: type = BaseException) -> Verdict:
        try:
            func()
        except expected as e:
            return _pass(CheckType.RAISES, {"raised": get_type_name(e), "message": str(e)})
        return _fail(CheckType.RAISES, f"func {func!r} should raise {expected.__name__}")

    def error(self, err: Optional[BaseException]) -> Verdict:
        if isinstance(err, BaseException):
            return _pass(CheckType.ERROR)
        return _fail(CheckType.ERROR, "An error is expected but got nil.")

    def no_error(self, err: Optional[BaseException]) -> Verdict:
        if err is None:
            return _pass(CheckType.NO_ERROR)
        return _fail(CheckType.NO_ERROR, f"Received unexpected error: {err}")

    def equal_error(self, err: Optional[BaseException], message: str) -> Verdict:
        if err is None:
            return _fail(CheckType.EQUAL_ERROR, f"An error is expected but got nil. Expected: {message!r}")
        if str(err) == message:
            return _pass(CheckType.EQUAL_ERROR)
        return _fail(
            CheckType.EQUAL_ERROR,
            f"Error message not equal: expected {message!r}, actual {str(err)!r}"
        )

    def error_contains(self, err: Optional[BaseException], contains: str) -> Verdict:
        if err is None:
            return _fail(CheckType.ERROR_CONTAINS, f"An error is expected but got nil. Expected to contain: {contains!r}")
        if contains in str(err):
            return _pass(CheckType.ERROR_CONTAINS)
        return _fail(CheckType.ERROR_CONTAINS, f"Error {str(err)!r} does not contain {contains!r}")

    def error_is(self, err: Optional[BaseException], target: Any) -> Verdict:
        for link in _error_chain(err):
            if link is target or (isinstance(target, type) and isinstance(link, target)):
                return _pass(CheckType.ERROR_IS)
        return _fail(CheckType.ERROR_IS, f"Target error {target!r} is not in the chain of {err!r}")

    # Filesystem

    def file_exists(self, path: str | os.PathLike) -> Verdict:
        p = Path(path)
        if not os.path.lexists(p):
            return _fail(CheckType.FILE_EXISTS, f"unable to find file {str(p)!r}")
        if p.is_dir() and not p.is_symlink():
            return _fail(CheckType.FILE_EXISTS, f"{str(p)!r} is a directory")
        return _pass(CheckType.FILE_EXISTS)

    def no_file_exists(self, path: str | os.PathLike) -> Verdict:
        p = Path(path)
        if not os.path.lexists(p) or (p.is_dir() and not p.is_symlink()):
            return _pass(CheckType.NO_FILE_EXISTS)
        return _fail(CheckType.NO_FILE_EXISTS, f"file {str(p)!r} exists")

    def dir_exists(self, path: str | os.PathLike) -> Verdict:
        p = Path(path)
        if not os.path.lexists(p):
            return _fail(CheckType.DIR_EXISTS, f"unable to find file {str(p)!r}")
        if not p.is_dir() or p.is_symlink():
            return _fail(CheckType.DIR_EXISTS, f"{str(p)!r} is a file")
        return _pass(CheckType.DIR_EXISTS)

    def no_dir_exists(self, path: str | os.PathLike) -> Verdict:
        p = Path(path)
        if p.is_dir() and not p.is_symlink():
            return _fail(CheckType.NO_DIR_EXISTS, f"directory {str(p)!r} exists")
        return _pass(CheckType.NO_DIR_EXISTS)


def _pass(check: CheckType, details: Optional[dict] = None) -> Verdict:
    return Verdict(passed=True, check=check, details=details or {})


def _fail(check: CheckType, message: str, details: Optional[dict] = None) -> Verdict:
    return Verdict(passed=False, check=check, message=message, details=details or {})


def _error_chain(err: Optional[BaseException]):
    """Yield an exception and everything it was raised from, once each."""
    seen = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        yield err
        err = err.__cause__ or err.__context__
