# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Self-validation harness driving the full program against a synthetic input."""

import logging
import platform
import tempfile
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

from sarifmark.context import Context, ProgramRunner
from sarifmark.testresults import (
    TestResult,
    TestResults,
    UnsupportedFormatError,
    write_results_file,
)

logger = logging.getLogger(__name__)

SUITE_NAME = "SarifMark Self-Validation"
CLASS_NAME = "Validation"
CODE_BASE = "SarifMark"
ENFORCEMENT_ERROR = "Error: Issues found in SARIF file"

MOCK_SARIF = """{
  "version": "2.1.0",
  "$schema": "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/master/Schemata/sarif-schema-2.1.0.json",
  "runs": [
    {
      "tool": {
        "driver": {
          "name": "MockTool",
          "version": "1.0.0"
        }
      },
      "results": [
        {
          "ruleId": "TEST001",
          "level": "warning",
          "message": {
            "text": "Test issue 1"
          },
          "locations": [
            {
              "physicalLocation": {
                "artifactLocation": {
                  "uri": "src/Program.cs"
                },
                "region": {
                  "startLine": 42
                }
              }
            }
          ]
        },
        {
          "ruleId": "TEST002",
          "level": "error",
          "message": {
            "text": "Test issue 2"
          },
          "locations": [
            {
              "physicalLocation": {
                "artifactLocation": {
                  "uri": "src/Helper.cs"
                },
                "region": {
                  "startLine": 15
                }
              }
            }
          ]
        }
      ]
    }
  ]
}
"""


@dataclass(frozen=True)
class Invocation:
    """Represent what one check observed after running the program.

    Attributes:
        exit_code: Program exit code.
        log_text: Content of the program log file.
        report_text: Content of the report file; ``None`` when none was written.
    """

    exit_code: int
    log_text: str
    report_text: str | None = None


@dataclass(frozen=True)
class CheckFailure:
    """Represent why a check failed.

    Attributes:
        reason: Message recorded in the results file.
        summary: Shorter console text; ``reason`` is shown when unset.
    """

    reason: str
    summary: str | None = None

    @property
    def console_text(self) -> str:
        return self.summary if self.summary is not None else self.reason


CheckBody = Callable[[Path], CheckFailure | None]


class ValidationHarness:
    """Run the built-in checks and report their outcomes."""

    def __init__(self, runner: ProgramRunner, context: Context, version: str) -> None:
        """Initialize the harness.

        Args:
            runner: In-process program entry point taking CLI arguments.
            context: Output context of the validating invocation.
            version: Program version shown in the header.
        """
        self._runner = runner
        self._context = context
        self._version = version

    def run(self, results_file: str | None = None) -> TestResults:
        """Run every check, print a summary and optionally write a results file.

        Args:
            results_file: Destination for serialized outcomes (``.trx`` or ``.xml``).

        Returns:
            Collected outcomes.
        """
        self._print_header()

        results = TestResults(name=SUITE_NAME)
        results = results.with_result(
            self._run_check(
                name="SarifMark_SarifReading",
                display_name="SARIF File Reading Test",
                body=self._check_sarif_reading,
            )
        )
        results = results.with_result(
            self._run_check(
                name="SarifMark_MarkdownReportGeneration",
                display_name="Markdown Report Generation Test",
                body=self._check_report_generation,
            )
        )
        results = results.with_result(
            self._run_check(
                name="SarifMark_Enforcement",
                display_name="Enforcement Test",
                body=self._check_enforcement,
            )
        )

        self._context.write_line("")
        self._context.write_line(f"Total Tests: {results.total}")
        self._context.write_line(f"Passed: {results.passed}")
        if results.failed:
            self._context.write_error(f"Failed: {results.failed}")
        else:
            self._context.write_line(f"Failed: {results.failed}")

        if results_file:
            self._write_results(results=results, results_file=results_file)
        return results

    def _print_header(self) -> None:
        timestamp = datetime.now(tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        rows = [
            ("SarifMark Version", self._version),
            ("Machine Name", platform.node()),
            ("OS Version", platform.platform()),
            (
                "Python Runtime",
                f"{platform.python_implementation()} {platform.python_version()}",
            ),
            ("Time Stamp", f"{timestamp} UTC"),
        ]
        self._context.write_line("# SarifMark Self-Validation")
        self._context.write_line("")
        self._context.write_line(f"| {'Information':<19} | {'Value':<50} |")
        self._context.write_line(f"| :{'-' * 18} | :{'-' * 49} |")
        for label, value in rows:
            self._context.write_line(f"| {label:<19} | {value:<50} |")
        self._context.write_line("")

    def _run_check(self, name: str, display_name: str, body: CheckBody) -> TestResult:
        """Run one check in a fresh scratch directory and record its outcome.

        Any exception raised by ``body`` fails the check instead of propagating.
        """
        started = time.monotonic()
        try:
            with tempfile.TemporaryDirectory(prefix="sarifmark_validation_") as scratch:
                failure = body(Path(scratch))
        except Exception as exc:  # noqa: BLE001
            logger.debug(f"Validation check raised (name={name} error={exc})")
            error_message = f"Exception: {exc}"
            self._context.write_error(f"✗ {display_name} - FAILED: {exc}")
        else:
            if failure is None:
                error_message = None
                self._context.write_line(f"✓ {display_name} - PASSED")
            else:
                error_message = failure.reason
                self._context.write_error(
                    f"✗ {display_name} - FAILED: {failure.console_text}"
                )

        return TestResult(
            name=name,
            class_name=CLASS_NAME,
            code_base=CODE_BASE,
            duration_seconds=time.monotonic() - started,
            outcome="Passed" if error_message is None else "Failed",
            error_message=error_message,
        )

    def _check_sarif_reading(self, scratch: Path) -> CheckFailure | None:
        invocation = self._invoke(
            scratch=scratch, log_name="SarifMark_SarifReading.log"
        )
        if invocation.exit_code != 0:
            return _exit_code_failure(invocation.exit_code)
        log_text = invocation.log_text
        if "Tool: MockTool 1.0.0" in log_text and "Results: 2" in log_text:
            return None
        return CheckFailure("Expected tool information not found in log")

    def _check_report_generation(self, scratch: Path) -> CheckFailure | None:
        invocation = self._invoke(
            scratch=scratch,
            log_name="SarifMark_MarkdownReportGeneration.log",
            report_name="sarif-report.md",
        )
        if invocation.exit_code != 0:
            return _exit_code_failure(invocation.exit_code)
        if invocation.report_text is None:
            return CheckFailure("Report file not created")
        if (
            "MockTool Analysis" in invocation.report_text
            and "Found 2 results" in invocation.report_text
        ):
            return None
        return CheckFailure("Report file missing expected content")

    def _check_enforcement(self, scratch: Path) -> CheckFailure | None:
        invocation = self._invoke(
            scratch=scratch, log_name="enforcement.log", enforce=True
        )
        if invocation.exit_code == 0:
            return CheckFailure("Program should have exited with non-zero code")
        if ENFORCEMENT_ERROR not in invocation.log_text:
            return CheckFailure("Expected error message not found")
        return None

    def _invoke(
        self,
        scratch: Path,
        log_name: str,
        report_name: str | None = None,
        enforce: bool = False,
    ) -> Invocation:
        """Write the synthetic SARIF file and run the program silently against it."""
        sarif_path = scratch / "test.sarif"
        log_path = scratch / log_name
        sarif_path.write_text(MOCK_SARIF, encoding="utf-8")

        argv = ["--silent", "--log", str(log_path), "--sarif", str(sarif_path)]
        report_path = scratch / report_name if report_name else None
        if report_path is not None:
            argv.extend(["--report", str(report_path)])
        if enforce:
            argv.append("--enforce")

        result = self._runner(argv)
        log_text = log_path.read_text(encoding="utf-8") if log_path.exists() else ""
        report_text = (
            report_path.read_text(encoding="utf-8")
            if report_path is not None and report_path.exists()
            else None
        )
        return Invocation(
            exit_code=result.exit_code, log_text=log_text, report_text=report_text
        )

    def _write_results(self, results: TestResults, results_file: str) -> None:
        try:
            write_results_file(results=results, output_path=results_file)
        except UnsupportedFormatError as exc:
            self._context.write_error(f"Error: {exc}")
            return
        except OSError as exc:
            logger.debug(
                f"Failed to write results file (path={results_file} error={exc})"
            )
            self._context.write_error(f"Error: Failed to write results file: {exc}")
            return
        self._context.write_line(f"Results written to {results_file}")


def _exit_code_failure(exit_code: int) -> CheckFailure:
    return CheckFailure(
        reason=f"Program exited with code {exit_code}",
        summary=f"Exit code {exit_code}",
    )
