"""Tests for composites whose string annotations cannot all be resolved."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from deepcheck import copy_exported, fields_of, is_empty, zero_value


class TestLocalComposites:
    """Dataclasses declared inside a function refer to names module globals lack."""

    def setup_method(self):
        @dataclass
        class Inner:
            a: int = 0

        @dataclass
        class Outer:
            count: int = 0
            _secret: int = 0
            inner: Inner = field(default_factory=Inner)
            labels: list[str] = field(default_factory=list)

        self.Inner = Inner
        self.Outer = Outer

    def test_resolvable_fields_keep_their_type(self):
        types = {d.name: d.type for d in fields_of(self.Outer)}
        assert types["count"] is int
        assert types["_secret"] is int
        assert types["labels"] == list[str]
        assert types["inner"] == "Inner"

    def test_zero_instance_uses_defaults(self):
        assert zero_value(self.Outer) == self.Outer()

    def test_zero_composite_is_empty(self):
        assert is_empty(self.Outer()) is True
        assert is_empty(self.Outer(count=1)) is False
        assert is_empty(self.Outer(inner=self.Inner(a=1))) is False

    def test_copy_zeroes_unexported_field(self):
        result = copy_exported(self.Outer(count=1, _secret=2, labels=["x"]))
        assert result._secret == 0
        assert result == self.Outer(count=1, labels=["x"])

    def test_field_without_default_uses_live_value(self):
        @dataclass
        class Point:
            x: int = 0

        @dataclass
        class Holder:
            _origin: Point
            name: str = ""

        assert copy_exported(Holder(Point(5), "h")) == Holder(Point(0), "h")
        assert is_empty(Holder(Point(0))) is True
        assert is_empty(Holder(Point(3))) is False


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
