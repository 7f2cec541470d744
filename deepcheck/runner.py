"""Runner for YAML case files."""

from __future__ import annotations

import yaml
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from .engine import DeepCheckEngine
from .exceptions import ConfigError, DeepCheckError, ValidationError
from .models import CheckType, EngineConfig


@dataclass
class CaseResult:
    """Result of a single case."""
    name: str
    check: str
    passed: bool
    expected_outcome: str = "pass"
    message: str = ""
    details: Optional[dict] = None
    error: Optional[str] = None

    def to_dict(self) -> dict:
        result = {
            "name": self.name,
            "check": self.check,
            "passed": self.passed,
            "expected_outcome": self.expected_outcome,
        }
        if self.message:
            result["message"] = self.message
        if self.details:
            result["details"] = self.details
        if self.error:
            result["error"] = self.error
        return result


@dataclass
class RunReport:
    """Report across all cases of one or more case files."""
    total: int = 0
    passed: int = 0
    failed: int = 0
    cases: list[CaseResult] = field(default_factory=list)
    timestamp: str = ""

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')

    def add(self, result: CaseResult):
        self.cases.append(result)
        self.total += 1
        if result.passed:
            self.passed += 1
        else:
            self.failed += 1

    def to_dict(self) -> dict:
        pass_rate = f"{(self.passed / self.total * 100):.1f}%" if self.total > 0 else "0.0%"
        return {
            "timestamp": self.timestamp,
            "summary": {
                "total_cases": self.total,
                "passed": self.passed,
                "failed": self.failed,
                "pass_rate": pass_rate
            },
            "cases": [c.to_dict() for c in self.cases]
        }

    def print_summary(self):
        pass_rate = f"{(self.passed / self.total * 100):.1f}%" if self.total > 0 else "0.0%"
        print(f"\nCase Results: {self.passed}/{self.total} passed ({pass_rate})")
        if self.failed > 0:
            print(f"  Failed: {self.failed}")
            for case in self.cases:
                if not case.passed:
                    reason = case.error or case.message or f"expected {case.expected_outcome}"
                    print(f"    {case.name}: {reason}")


def load_case_file(path: str | Path) -> dict:
    """
    Load and validate a YAML case file.

    Args:
        path: Path to a YAML (or JSON) case file

    Returns:
        Mapping with "config" and "cases" keys
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Case file not found: {path}")

    with open(path, 'r') as f:
        content = f.read()

    # JSON is valid YAML, so both formats load here
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse case file: {e}", source=str(path), reason=str(e))

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Case file must contain a mapping", source=str(path))

    cases = data.get("cases") or []
    if not isinstance(cases, list):
        raise ConfigError("'cases' must be a list", source=str(path))

    return {"config": data.get("config") or {}, "cases": cases}


class CaseRunner:
    """
    Runs checks described in YAML case files.

    Case file layout:

        config:
          max_depth: 50
        cases:
          - name: widened ints
            check: equal_values
            args: [5, 5.0]
          - name: order matters for equal
            check: equal
            args: [[1, 2], [2, 1]]
            expect: fail
    """

    def __init__(self, engine_config: Optional[EngineConfig] = None):
        self.engine_config = engine_config

    def run_case(self, engine: DeepCheckEngine, case: Any, index: int) -> CaseResult:
        """Run a single case."""
        if not isinstance(case, dict):
            return CaseResult(
                name=f"case-{index}",
                check="",
                passed=False,
                error=f"Case must be a mapping, got {type(case).__name__}"
            )

        name = str(case.get("name", f"case-{index}"))
        check_name = str(case.get("check", ""))
        expected_outcome = str(case.get("expect", "pass")).lower()

        try:
            self._validate_case(case, expected_outcome)
            args = case.get("args") or []
            kwargs = case.get("kwargs") or {}
            verdict = engine.check(CheckType(check_name), *args, **kwargs)
        except (DeepCheckError, TypeError, ValueError) as e:
            return CaseResult(
                name=name,
                check=check_name,
                passed=False,
                expected_outcome=expected_outcome,
                error=str(e)
            )

        return CaseResult(
            name=name,
            check=check_name,
            passed=verdict.passed == (expected_outcome == "pass"),
            expected_outcome=expected_outcome,
            message=verdict.message,
            details=verdict.details or None
        )

    def run_file(
        self,
        path: str | Path,
        report: Optional[RunReport] = None,
        print_report: bool = False
    ) -> RunReport:
        """Run every case of one file."""
        data = load_case_file(path)
        config = self.engine_config or EngineConfig.from_dict(data["config"])
        engine = DeepCheckEngine(config)

        report = report if report is not None else RunReport()
        for index, case in enumerate(data["cases"]):
            result = self.run_case(engine, case, index)
            report.add(result)
            if print_report:
                print(f"{'PASS' if result.passed else 'FAIL'}: {result.name}")

        return report

    def run_folder(self, folder: str | Path, print_report: bool = True) -> RunReport:
        """Run all case files in a folder."""
        folder = Path(folder)
        if not folder.exists():
            raise FileNotFoundError(f"Case folder not found: {folder}")

        report = RunReport()
        files = sorted(list(folder.glob("*.yaml")) + list(folder.glob("*.yml")))
        for case_file in files:
            self.run_file(case_file, report, print_report)

        if print_report:
            report.print_summary()

        return report

    def _validate_case(self, case: dict, expected_outcome: str):
        if expected_outcome not in ("pass", "fail"):
            raise ValidationError(
                f"expect must be 'pass' or 'fail', got {expected_outcome!r}",
                {"expect": expected_outcome}
            )
        if not isinstance(case.get("args") or [], list):
            raise ValidationError("args must be a list")
        if not isinstance(case.get("kwargs") or {}, dict):
            raise ValidationError("kwargs must be a mapping")


def run_cases(
    path: str,
    print_report: bool = True,
    engine_config: Optional[EngineConfig] = None
) -> RunReport:
    """
    Run cases from a YAML file or a folder of YAML files.

    This is the simplest way to run cases:

        from deepcheck.runner import run_cases
        report = run_cases("cases/")

    Args:
        path: Case file or folder
        print_report: Whether to print the summary report
        engine_config: Overrides the config section of every case file

    Returns:
        RunReport with all results
    """
    runner = CaseRunner(engine_config)
    if Path(path).is_dir():
        return runner.run_folder(path, print_report)
    report = runner.run_file(path, print_report=print_report)
    if print_report:
        report.print_summary()
    return report
