# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for the self-validation harness."""

import io
import json
from pathlib import Path

from cli.sarifmark_cli import run_program
from sarifmark.context import Context, Options, ProgramResult
from sarifmark.results import ResultSet
from sarifmark.validation import MOCK_SARIF, ValidationHarness


def _context(options: Options | None = None) -> Context:
    return Context(
        options=options or Options(silent=True),
        stdout=io.StringIO(),
        stderr=io.StringIO(),
    )


def test_val_001_mock_sarif_is_the_documented_fixture(tmp_path: Path) -> None:
    path = tmp_path / "mock.sarif"
    path.write_text(MOCK_SARIF, encoding="utf-8")

    result_set = ResultSet.parse(path)

    assert json.loads(MOCK_SARIF)["version"] == "2.1.0"
    assert (result_set.tool_name, result_set.tool_version) == ("MockTool", "1.0.0")
    assert [(r.rule_id, r.level, r.uri, r.start_line) for r in result_set.results] == [
        ("TEST001", "warning", "src/Program.cs", 42),
        ("TEST002", "error", "src/Helper.cs", 15),
    ]


def test_val_002_all_checks_pass_against_the_real_program() -> None:
    context = _context()

    results = ValidationHarness(
        runner=run_program, context=context, version="1.2.3"
    ).run()

    assert [result.name for result in results.results] == [
        "SarifMark_SarifReading",
        "SarifMark_MarkdownReportGeneration",
        "SarifMark_Enforcement",
    ]
    assert results.passed == 3
    assert results.failed == 0
    assert context.exit_code == 0
    output = context.output
    assert "| SarifMark Version   | 1.2.3" in output
    assert "✓ SARIF File Reading Test - PASSED" in output
    assert "✓ Markdown Report Generation Test - PASSED" in output
    assert "✓ Enforcement Test - PASSED" in output
    assert "Total Tests: 3" in output
    assert "Passed: 3" in output
    assert "Failed: 0" in output


def test_val_003_scratch_directories_are_removed(monkeypatch, tmp_path: Path) -> None:
    seen: list[Path] = []

    def _runner(argv: list[str]) -> ProgramResult:
        sarif_path = Path(argv[argv.index("--sarif") + 1])
        seen.append(sarif_path.parent)
        return run_program(argv)

    monkeypatch.setattr("tempfile.tempdir", str(tmp_path))
    ValidationHarness(runner=_runner, context=_context(), version="0").run()

    assert len(seen) == 3
    assert len(set(seen)) == 3
    for scratch in seen:
        assert scratch.name.startswith("sarifmark_validation_")
        assert not scratch.exists()


def test_val_004_exception_fails_only_that_check() -> None:
    calls: list[list[str]] = []

    def _runner(argv: list[str]) -> ProgramResult:
        calls.append(argv)
        if len(calls) == 1:
            raise RuntimeError("runner exploded")
        return run_program(argv)

    context = _context()
    results = ValidationHarness(runner=_runner, context=context, version="0").run()

    assert len(calls) == 3
    first = results.results[0]
    assert first.outcome == "Failed"
    assert first.error_message == "Exception: runner exploded"
    assert results.passed == 2
    assert results.failed == 1
    assert context.exit_code == 1
    assert "✗ SARIF File Reading Test - FAILED: runner exploded" in context.output
    assert "Failed: 1" in context.output


def test_val_005_enforcement_check_requires_failure_and_reason() -> None:
    def _runner(argv: list[str]) -> ProgramResult:
        return ProgramResult(exit_code=0, output="")

    results = ValidationHarness(runner=_runner, context=_context(), version="0").run()

    by_name = {result.name: result for result in results.results}
    enforcement = by_name["SarifMark_Enforcement"]
    assert enforcement.outcome == "Failed"
    assert enforcement.error_message == "Program should have exited with non-zero code"
    assert by_name["SarifMark_SarifReading"].error_message == (
        "Expected tool information not found in log"
    )
    assert by_name["SarifMark_MarkdownReportGeneration"].error_message == (
        "Report file not created"
    )


def test_val_006_non_zero_exit_fails_success_checks() -> None:
    def _runner(argv: list[str]) -> ProgramResult:
        log_path = Path(argv[argv.index("--log") + 1])
        log_path.write_text("something else\n", encoding="utf-8")
        return ProgramResult(exit_code=1, output="")

    context = _context()
    results = ValidationHarness(runner=_runner, context=context, version="0").run()

    by_name = {result.name: result for result in results.results}
    assert by_name["SarifMark_SarifReading"].error_message == (
        "Program exited with code 1"
    )
    assert by_name["SarifMark_Enforcement"].error_message == (
        "Expected error message not found"
    )
    assert "✗ SARIF File Reading Test - FAILED: Exit code 1" in context.output
    assert "✗ Markdown Report Generation Test - FAILED: Exit code 1" in (
        context.output
    )
    assert "Program exited with code" not in context.output


def test_val_007_results_file_is_written(tmp_path: Path) -> None:
    context = _context()
    results_path = tmp_path / "validation.trx"

    ValidationHarness(runner=run_program, context=context, version="0").run(
        results_file=str(results_path)
    )

    assert results_path.exists()
    assert "SarifMark_Enforcement" in results_path.read_text(encoding="utf-8")
    assert f"Results written to {results_path}" in context.output
    assert context.exit_code == 0


def test_val_008_unsupported_results_format_is_an_error(tmp_path: Path) -> None:
    context = _context()
    results_path = tmp_path / "validation.json"

    ValidationHarness(runner=run_program, context=context, version="0").run(
        results_file=str(results_path)
    )

    assert not results_path.exists()
    assert context.exit_code == 1
    assert "Error: Unsupported results file format '.json'" in context.output


def test_val_009_unwritable_results_file_is_an_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    context = _context()

    results = ValidationHarness(runner=run_program, context=context, version="0").run(
        results_file=str(blocker / "validation.xml")
    )

    assert results.passed == 3
    assert context.exit_code == 1
    assert "Error: Failed to write results file:" in context.output
    assert "Results written to" not in context.output
