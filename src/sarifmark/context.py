# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Program options and output routing shared by the CLI and validation."""

import logging
from dataclasses import dataclass
from types import TracebackType
from typing import Callable, TextIO

from rich.console import Console

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Options:
    """Describe one program invocation.

    Attributes:
        version: Print only the version string.
        help: Print usage information.
        silent: Suppress console output.
        validate: Run self-validation instead of analysis.
        enforce: Fail when the SARIF file contains findings.
        results_file: Validation results destination (``.trx`` or ``.xml``).
        log_file: File receiving a copy of every output line.
        sarif_file: SARIF file to process.
        report_file: Markdown report destination.
        report_depth: Heading depth of the markdown report.
        heading: Custom markdown report title.
    """

    version: bool = False
    help: bool = False
    silent: bool = False
    validate: bool = False
    enforce: bool = False
    results_file: str | None = None
    log_file: str | None = None
    sarif_file: str | None = None
    report_file: str | None = None
    report_depth: int = 1
    heading: str | None = None


@dataclass(frozen=True)
class ProgramResult:
    """Represent the observable outcome of one in-process invocation."""

    exit_code: int
    output: str


ProgramRunner = Callable[[list[str]], ProgramResult]


class Context:
    """Route program output to the console, the log file and a capture buffer.

    Any line written through :meth:`write_error` marks the invocation as failed.
    """

    def __init__(self, options: Options, stdout: TextIO, stderr: TextIO) -> None:
        """Initialize output routing.

        Args:
            options: Parsed invocation options.
            stdout: Standard output stream.
            stderr: Standard error stream.

        Raises:
            OSError: If the log file cannot be opened.
        """
        self.options = options
        self._stdout = Console(
            file=stdout, force_terminal=False, color_system="truecolor"
        )
        self._stderr = Console(
            file=stderr, force_terminal=False, color_system="truecolor"
        )
        self._captured: list[str] = []
        self._has_errors = False
        self._log = (
            open(options.log_file, "w", encoding="utf-8")  # noqa: SIM115
            if options.log_file
            else None
        )

    def __enter__(self) -> "Context":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def exit_code(self) -> int:
        """Return 1 when any error was reported, else 0."""
        return 1 if self._has_errors else 0

    @property
    def output(self) -> str:
        """Return every line written so far."""
        return "".join(f"{line}\n" for line in self._captured)

    def write_line(self, message: str) -> None:
        """Write one informational line."""
        self._emit(console=self._stdout, message=message)

    def write_error(self, message: str) -> None:
        """Write one error line and mark the invocation as failed."""
        self._has_errors = True
        self._emit(console=self._stderr, message=message)

    def close(self) -> None:
        if self._log is not None:
            self._log.close()
            self._log = None

    def _emit(self, console: Console, message: str) -> None:
        self._captured.append(message)
        if not self.options.silent:
            console.print(
                message, markup=False, emoji=False, highlight=False, soft_wrap=True
            )
        if self._log is not None:
            self._log.write(f"{message}\n")
            self._log.flush()
