#!/usr/bin/env python
"""Run deepcheck case files from command line."""

import argparse
import json
import logging
import sys
from pathlib import Path

from deepcheck import configure_logging, run_cases
from deepcheck.exceptions import ConfigError


def main():
    parser = argparse.ArgumentParser(
        description="Run deepcheck YAML case files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_cases.py cases.yaml report.json
  python run_cases.py -c cases/ -r report.json
  python run_cases.py --cases cases/ --report report.json --quiet
        """
    )

    parser.add_argument(
        "cases",
        nargs="?",
        help="Path to a YAML case file or a folder of case files"
    )
    parser.add_argument(
        "report",
        nargs="?",
        help="Path to output JSON report file"
    )

    # Also support named arguments
    parser.add_argument("-c", "--cases", dest="cases_named", help="Path to case file or folder")
    parser.add_argument("-r", "--report", dest="report_named", help="Path to output report")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress console output")
    parser.add_argument(
        "--log-level",
        default="WARN",
        choices=["DEBUG", "INFO", "WARN", "ERROR"],
        type=str.upper,
        help="Level of the deepcheck logger (default: WARN)"
    )

    args = parser.parse_args()

    # Use named args if positional not provided
    cases_path = args.cases or args.cases_named
    report_path = args.report or args.report_named

    if not cases_path:
        parser.error("Cases path is required")
    if not report_path:
        parser.error("Report path is required")

    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    configure_logging(args.log_level)

    if not Path(cases_path).exists():
        print(f"Error: Cases not found: {cases_path}", file=sys.stderr)
        return 1

    if not args.quiet:
        print(f"Cases: {cases_path}")
        print(f"Report: {report_path}\n")

    try:
        report = run_cases(cases_path, print_report=not args.quiet)
    except ConfigError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    # Save report; case arguments may hold values JSON cannot encode
    with open(report_path, 'w') as f:
        json.dump(report.to_dict(), indent=2, fp=f, default=repr)

    if not args.quiet:
        print(f"\nReport saved to: {report_path}")

    return 0 if report.failed == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
