"""Tests for pass/fail checks."""

import os
from dataclasses import dataclass

import numpy
import pytest

from deepcheck import CheckType, DeepCheckEngine, EngineConfig, Ref, Verdict, check
from deepcheck.checks import Checker


@dataclass
class Record:
    id: int
    label: str
    _loaded_at: str = ""


@dataclass
class Other:
    id: int
    label: str


class TestEqualityChecks:
    """Test equality verdicts."""

    def setup_method(self):
        self.checker = Checker()

    def test_equal(self):
        assert self.checker.equal([1, 2], [1, 2]).passed is True

        verdict = self.checker.equal([1, 2], [2, 1])
        assert verdict.passed is False
        assert verdict.check is CheckType.EQUAL
        assert "Not equal" in verdict.message

    def test_not_equal(self):
        assert self.checker.not_equal(1, 2).passed is True
        assert self.checker.not_equal(1, 1).passed is False

    def test_exactly(self):
        assert self.checker.exactly(numpy.int8(1), numpy.int8(1)).passed is True

        verdict = self.checker.exactly(numpy.int8(1), numpy.int16(1))
        assert verdict.passed is False
        assert "Types expected to match exactly" in verdict.message

    def test_equal_values(self):
        assert self.checker.equal_values(numpy.int32(7), 7).passed is True
        verdict = self.checker.equal_values("7", 7)
        assert verdict.passed is False
        assert "(str)" in verdict.message

    def test_verdict_is_truthy(self):
        assert self.checker.equal(1, 1)
        assert not self.checker.equal(1, 2)


class TestEqualExportedValues:
    """Test comparisons that ignore non-exported fields."""

    def setup_method(self):
        self.checker = Checker()

    def test_ignores_private_fields(self):
        verdict = self.checker.equal_exported_values(
            Record(1, "a", "2025-01-01"), Record(1, "a", "2025-02-02")
        )
        assert verdict.passed is True

    def test_detects_exported_difference(self):
        verdict = self.checker.equal_exported_values(Record(1, "a"), Record(2, "a"))
        assert verdict.passed is False
        assert "comparing only exported fields" in verdict.message

    def test_references_to_composites(self):
        verdict = self.checker.equal_exported_values(
            Ref(Record(1, "a", "x")), Ref(Record(1, "a", "y"))
        )
        assert verdict.passed is True

    def test_type_mismatch(self):
        verdict = self.checker.equal_exported_values(Record(1, "a"), Other(1, "a"))
        assert verdict.passed is False
        assert "Types expected to match exactly" in verdict.message

    def test_nil_references(self):
        assert self.checker.equal_exported_values(Ref(), Ref()).passed is True

        verdict = self.checker.equal_exported_values(Ref(), Ref(Record(1, "a")))
        assert verdict.passed is False
        assert "comparing only exported fields" in verdict.message

    def test_non_composite(self):
        verdict = self.checker.equal_exported_values(1, 1)
        assert verdict.passed is False
        assert "composite" in verdict.message


class TestElementsMatch:
    """Test order-insensitive list comparison."""

    def setup_method(self):
        self.checker = Checker()

    def test_same_elements_any_order(self):
        assert self.checker.elements_match([1, 3, 2, 3], [3, 3, 1, 2]).passed is True

    def test_both_empty(self):
        assert self.checker.elements_match([], []).passed is True
        assert self.checker.elements_match([], {}).passed is True

    def test_mismatch_reports_extras(self):
        verdict = self.checker.elements_match([1, 2, 2, 3], [2, 3, 3, 4])
        assert verdict.passed is False
        assert verdict.message == "lists are not equal, 2 extra in first, 2 extra in second"
        assert verdict.details == {"extra_in_first": [1, 2], "extra_in_second": [3, 4]}

    def test_unsupported_type(self):
        verdict = self.checker.elements_match("ab", [1])
        assert verdict.passed is False
        assert "expecting array or list" in verdict.message


class TestValueChecks:
    """Test emptiness, nil, boolean, length and ordering checks."""

    def setup_method(self):
        self.checker = Checker()

    def test_empty(self):
        assert self.checker.empty(0).passed is True
        assert self.checker.empty(Ref("")).passed is True
        assert self.checker.empty([0]).passed is False
        assert self.checker.not_empty([0]).passed is True
        assert self.checker.not_empty("").passed is False

    def test_nil(self):
        assert self.checker.nil(None).passed is True
        assert self.checker.nil(Ref()).passed is True
        assert self.checker.nil(0).passed is False
        assert self.checker.not_nil(Ref(None)).passed is False
        assert self.checker.not_nil([]).passed is True

    def test_true_false_require_booleans(self):
        assert self.checker.true(True).passed is True
        assert self.checker.true(numpy.bool_(True)).passed is True
        assert self.checker.true(1).passed is False
        assert self.checker.false(False).passed is True
        assert self.checker.false(0).passed is False

    def test_len(self):
        assert self.checker.len([1, 2], 2).passed is True
        assert self.checker.len("abc", 3).passed is True
        assert self.checker.len({"a": 1}, 1).passed is True

        verdict = self.checker.len([1, 2], 3)
        assert verdict.passed is False
        assert verdict.details == {"length": 2}

        assert "Could not get length" in self.checker.len(5, 1).message

    def test_contains(self):
        assert self.checker.contains("hello", "ell").passed is True
        assert self.checker.contains(b"\x01\x02\x03", b"\x02\x03").passed is True
        assert self.checker.contains([1, Record(2, "b")], Record(2, "b")).passed is True
        assert self.checker.contains({"a": 1}, "a").passed is True
        assert self.checker.contains({1, 2}, 2).passed is True
        assert self.checker.contains([1, 2], 1.0).passed is False

        verdict = self.checker.contains(5, 1)
        assert verdict.passed is False
        assert "does not support membership checks" in verdict.message

    def test_ordering(self):
        assert self.checker.greater(2, 1).passed is True
        assert self.checker.greater(1, 1).passed is False
        assert self.checker.greater_or_equal(1, 1).passed is True
        assert self.checker.greater_or_equal("a", "b").passed is False

    def test_is_type(self):
        assert self.checker.is_type(Record, Record(1, "a")).passed is True
        assert self.checker.is_type(int, True).passed is False

    def test_condition(self):
        assert self.checker.condition(lambda: True).passed is True
        assert self.checker.condition(lambda: False).message == "Condition failed!"


class TestErrorChecks:
    """Test checks on callables and exceptions."""

    def setup_method(self):
        self.checker = Checker()

    def test_raises(self):
        verdict = self.checker.raises(lambda: 1 / 0, ZeroDivisionError)
        assert verdict.passed is True
        assert verdict.details["raised"] == "ZeroDivisionError"

        assert self.checker.raises(lambda: None).passed is False

    def test_raises_propagates_unexpected_exception(self):
        def boom():
            raise KeyError("k")

        with pytest.raises(KeyError):
            self.checker.raises(boom, ValueError)

    def test_error_and_no_error(self):
        assert self.checker.error(ValueError("bad")).passed is True
        assert self.checker.error(None).passed is False
        assert self.checker.no_error(None).passed is True
        assert self.checker.no_error(ValueError("bad")).message == "Received unexpected error: bad"

    def test_error_messages(self):
        err = ValueError("connection refused")
        assert self.checker.equal_error(err, "connection refused").passed is True
        assert self.checker.equal_error(err, "timeout").passed is False
        assert self.checker.equal_error(None, "timeout").passed is False
        assert self.checker.error_contains(err, "refused").passed is True
        assert self.checker.error_contains(err, "timeout").passed is False

    def test_error_is_walks_chain(self):
        root = KeyError("k")
        try:
            try:
                raise root
            except KeyError as e:
                raise ValueError("wrapped") from e
        except ValueError as err:
            captured = err

        assert self.checker.error_is(captured, KeyError).passed is True
        assert self.checker.error_is(captured, root).passed is True
        assert self.checker.error_is(captured, OSError).passed is False
        assert self.checker.error_is(None, KeyError).passed is False


class TestFilesystemChecks:
    """Test file and directory existence checks."""

    def setup_method(self):
        self.checker = Checker()

    def test_file_checks(self, tmp_path):
        file_path = tmp_path / "data.txt"
        file_path.write_text("x")

        assert self.checker.file_exists(file_path).passed is True
        assert self.checker.file_exists(tmp_path / "missing").passed is False
        assert "is a directory" in self.checker.file_exists(tmp_path).message

        assert self.checker.no_file_exists(tmp_path / "missing").passed is True
        assert self.checker.no_file_exists(tmp_path).passed is True
        assert self.checker.no_file_exists(str(file_path)).passed is False

    def test_dir_checks(self, tmp_path):
        file_path = tmp_path / "data.txt"
        file_path.write_text("x")

        assert self.checker.dir_exists(tmp_path).passed is True
        assert "is a file" in self.checker.dir_exists(file_path).message
        assert self.checker.dir_exists(tmp_path / "missing").passed is False

        assert self.checker.no_dir_exists(file_path).passed is True
        assert self.checker.no_dir_exists(tmp_path / "missing").passed is True
        assert self.checker.no_dir_exists(str(tmp_path)).passed is False

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
    def test_symlink_to_directory_counts_as_file(self, tmp_path):
        target = tmp_path / "real"
        target.mkdir()
        link = tmp_path / "link"
        os.symlink(target, link)

        assert self.checker.file_exists(link).passed is True
        assert self.checker.dir_exists(link).passed is False


class TestCheckDispatch:
    """Test running checks by name through the engine."""

    def test_engine_check_by_name(self):
        engine = DeepCheckEngine()
        verdict = engine.check("elements_match", [1, 2], [2, 1])
        assert isinstance(verdict, Verdict)
        assert verdict.passed is True
        assert verdict.check is CheckType.ELEMENTS_MATCH

    def test_unknown_check_name(self):
        with pytest.raises(ValueError):
            DeepCheckEngine().check("no_such_check", 1)

    def test_every_check_type_has_a_handler(self):
        checker = Checker()
        assert set(checker._handlers) == set(CheckType)

    def test_module_level_check(self):
        assert check(CheckType.EQUAL_VALUES, numpy.uint16(3), 3).passed is True
        assert check("empty", [], config=EngineConfig(max_depth=5)).passed is True

    def test_check_traced(self):
        engine = DeepCheckEngine(EngineConfig(trace_operations=True))
        engine.check("true", False)
        assert engine.traces[-1].operation == "check:true"
        assert engine.traces[-1].result is False
        assert engine.traces[-1].details == {"message": "Should be true, but was False"}

    def test_verdict_to_dict(self):
        verdict = Checker().elements_match([1], [2])
        assert verdict.to_dict() == {
            "passed": False,
            "check": "elements_match",
            "message": "lists are not equal, 1 extra in first, 1 extra in second",
            "details": {"extra_in_first": [1], "extra_in_second": [2]},
        }


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
