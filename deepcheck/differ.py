"""Multiset difference of two lists."""

from __future__ import annotations

from typing import Any

from .comparators import DEFAULT_MAX_DEPTH, equal
from .exceptions import UnsupportedTypeError
from .models import DiffResult
from .shapes import is_list
from .utils import get_type_name


class ListDiffer:
    """
    Compares two lists as multisets (order ignored, duplicates matter).

    Every element of the first list consumes the first not-yet-used equal
    element of the second list. Whatever is left on either side is extra.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        self.max_depth = max_depth
        self.comparisons = 0

    def diff(self, list_a: Any, list_b: Any) -> DiffResult:
        """
        Compute the elements only in ``list_a`` and only in ``list_b``.

        Args:
            list_a: First array or ordered list
            list_b: Second array or ordered list

        Returns:
            DiffResult with the extras of each side in original order
        """
        self._validate(list_a, "list_a")
        self._validate(list_b, "list_b")

        items_a = list(list_a)
        items_b = list(list_b)

        # Mark indexes in items_b that we already used
        visited = [False] * len(items_b)
        extra_a = []

        for element in items_a:
            for j, candidate in enumerate(items_b):
                if visited[j]:
                    continue
                self.comparisons += 1
                if equal(candidate, element, self.max_depth):
                    visited[j] = True
                    break
            else:
                extra_a.append(element)

        extra_b = [item for item, used in zip(items_b, visited) if not used]
        return DiffResult(extra_in_first=extra_a, extra_in_second=extra_b)

    def _validate(self, value: Any, name: str):
        if not is_list(value):
            raise UnsupportedTypeError(name, get_type_name(value))


def diff_lists(list_a: Any, list_b: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> DiffResult:
    """Convenience function to diff two lists as multisets."""
    return ListDiffer(max_depth).diff(list_a, list_b)
