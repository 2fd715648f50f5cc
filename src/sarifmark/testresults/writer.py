# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Results-file format selection by file extension."""

import logging
from pathlib import Path

from sarifmark.testresults.junit import write_junit
from sarifmark.testresults.model import TestResults
from sarifmark.testresults.trx import serialize_trx

logger = logging.getLogger(__name__)


class UnsupportedFormatError(RuntimeError):
    """Represent a results file extension with no serializer."""


def write_results_file(results: TestResults, output_path: str | Path) -> None:
    """Serialize validation results to ``.trx`` or JUnit ``.xml``.

    Args:
        results: Collected validation outcomes.
        output_path: Target file path; its extension selects the format.

    Raises:
        UnsupportedFormatError: If the extension is neither ``.trx`` nor ``.xml``.
        OSError: If directory creation or file writing fails.
    """
    path = Path(output_path)
    extension = path.suffix.lower()
    if extension not in {".trx", ".xml"}:
        logger.debug(f"Unsupported results file format (path={path})")
        raise UnsupportedFormatError(
            f"Unsupported results file format '{extension}'. "
            "Use .trx or .xml extension."
        )

    path.parent.mkdir(parents=True, exist_ok=True)
    if extension == ".trx":
        path.write_text(serialize_trx(results), encoding="utf-8")
    else:
        write_junit(results, path)
