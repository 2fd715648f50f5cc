# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""SarifMark command-line entry point."""

import argparse
import io
import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import TextIO

from rich.logging import RichHandler

from sarifmark.context import Context, Options, ProgramResult
from sarifmark.results import ResultSet, SarifFormatError
from sarifmark.validation import ENFORCEMENT_ERROR, ValidationHarness

logger = logging.getLogger(__name__)

HELP_LINES: tuple[str, ...] = (
    "Usage: sarifmark [options]",
    "",
    "Options:",
    "  -v, --version              Display version information",
    "  -?, -h, --help             Display this help message",
    "  --silent                   Suppress console output",
    "  --validate                 Run self-validation",
    "  --results <file>           Write validation results to file (.trx or .xml)",
    "  --enforce                  Return non-zero exit code if issues found",
    "  --log <file>               Write output to log file",
    "  --sarif <file>             SARIF file to process",
    "  --report <file>            Export analysis results to markdown file",
    "  --report-depth <depth>     Markdown header depth for report (default: 1)",
    "  --heading <text>           Custom heading for report (default: [ToolName] Analysis)",
)


class _QuietArgumentParser(argparse.ArgumentParser):
    """Argument parser that raises instead of printing usage and exiting."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise argparse.ArgumentError(None, message)


def program_version() -> str:
    """Return the installed package version, ``0.0.0`` when not installed."""
    try:
        return version("sarifmark")
    except PackageNotFoundError:
        return "0.0.0"


def configure_logging(level: int = logging.WARNING) -> None:
    """Configure application logging with Rich handler.

    Args:
        level: Logging severity threshold.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser.

    Returns:
        Configured argument parser instance.
    """
    parser = _QuietArgumentParser(
        prog="sarifmark", add_help=False, allow_abbrev=False
    )
    parser.add_argument("-v", "--version", action="store_true")
    parser.add_argument("-?", "-h", "--help", action="store_true", dest="help")
    parser.add_argument("--silent", action="store_true")
    parser.add_argument("--validate", action="store_true")
    parser.add_argument("--results", dest="results_file")
    parser.add_argument("--enforce", action="store_true")
    parser.add_argument("--log", dest="log_file")
    parser.add_argument("--sarif", dest="sarif_file")
    parser.add_argument("--report", dest="report_file")
    parser.add_argument("--report-depth", dest="report_depth", type=int, default=1)
    parser.add_argument("--heading")
    return parser


def parse_options(argv: list[str]) -> Options:
    """Parse CLI arguments into invocation options.

    Args:
        argv: CLI arguments.

    Returns:
        Parsed options.

    Raises:
        argparse.ArgumentError: If an argument is unknown or malformed.
    """
    args = build_parser().parse_args(argv)
    return Options(
        version=args.version,
        help=args.help,
        silent=args.silent,
        validate=args.validate,
        enforce=args.enforce,
        results_file=args.results_file,
        log_file=args.log_file,
        sarif_file=args.sarif_file,
        report_file=args.report_file,
        report_depth=args.report_depth,
        heading=args.heading,
    )


def run(argv: list[str], stdout: TextIO, stderr: TextIO) -> int:
    """Run the CLI.

    Args:
        argv: CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code.
    """
    return _execute(argv=argv, stdout=stdout, stderr=stderr).exit_code


def run_program(argv: list[str]) -> ProgramResult:
    """Run the CLI in-process with in-memory streams.

    Args:
        argv: CLI arguments.

    Returns:
        Exit code and every line the invocation wrote.
    """
    return _execute(argv=argv, stdout=io.StringIO(), stderr=io.StringIO())


def _execute(argv: list[str], stdout: TextIO, stderr: TextIO) -> ProgramResult:
    try:
        options = parse_options(argv)
    except argparse.ArgumentError as exc:
        logger.debug(f"Argument parsing failed (argv={argv} error={exc})")
        message = f"Error: Unsupported argument: {exc}"
        stderr.write(f"{message}\n")
        return ProgramResult(exit_code=1, output=f"{message}\n")

    try:
        context = Context(options=options, stdout=stdout, stderr=stderr)
    except OSError as exc:
        logger.debug(
            f"Failed to open log file (log_file={options.log_file} error={exc})"
        )
        message = f"Error: Failed to open log file: {exc}"
        stderr.write(f"{message}\n")
        return ProgramResult(exit_code=1, output=f"{message}\n")

    with context:
        dispatch(context)
        return ProgramResult(exit_code=context.exit_code, output=context.output)


def dispatch(context: Context) -> None:
    """Run the action selected by the context options.

    Priority is version, then help, then validation, then SARIF analysis.

    Args:
        context: Output context carrying the parsed options.
    """
    options = context.options
    if options.version:
        context.write_line(program_version())
        return

    _print_banner(context)

    if options.help:
        for line in HELP_LINES:
            context.write_line(line)
        return

    if options.validate:
        ValidationHarness(
            runner=run_program, context=context, version=program_version()
        ).run(results_file=options.results_file)
        return

    _process_sarif(context)


def _print_banner(context: Context) -> None:
    context.write_line(f"SarifMark version {program_version()}")
    context.write_line("Copyright (c) Zsolt Kulcsar and Contributors")
    context.write_line("")


def _process_sarif(context: Context) -> None:
    """Read the SARIF file, enforce and write the markdown report as requested.

    Args:
        context: Output context carrying the parsed options.
    """
    options = context.options
    if not options.sarif_file or not options.sarif_file.strip():
        context.write_error("Error: --sarif parameter is required")
        return

    context.write_line(f"SARIF File: {options.sarif_file}")
    context.write_line("Reading SARIF file...")
    try:
        result_set = ResultSet.parse(options.sarif_file)
    except FileNotFoundError as exc:
        logger.debug(f"SARIF file not found (path={options.sarif_file})")
        context.write_error(f"Error: {exc}")
        return
    except SarifFormatError as exc:
        logger.debug(
            f"SARIF file rejected (path={options.sarif_file} error={exc})"
        )
        context.write_error(f"Error: Failed to read SARIF file: {exc}")
        return
    context.write_line(f"Tool: {result_set.tool_name} {result_set.tool_version}")
    context.write_line(f"Results: {result_set.result_count}")

    if options.enforce and result_set.result_count > 0:
        context.write_error(ENFORCEMENT_ERROR)

    if options.report_file is None:
        return

    context.write_line(f"Writing report to {options.report_file}...")
    try:
        markdown = result_set.to_markdown(
            depth=options.report_depth, heading=options.heading
        )
        with open(options.report_file, "w", encoding="utf-8") as handle:
            handle.write(markdown)
    except (ValueError, OSError) as exc:
        logger.debug(
            f"Failed to write report (report_file={options.report_file} error={exc})"
        )
        context.write_error(f"Error: Failed to write report: {exc}")
        return
    context.write_line("Report generated successfully.")


def main() -> None:
    """Run the CLI application and exit."""
    configure_logging()
    try:
        exit_code = run(sys.argv[1:], stdout=sys.stdout, stderr=sys.stderr)
    except Exception as exc:
        sys.stdout.write(f"Unexpected error: {exc}\n")
        raise
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
