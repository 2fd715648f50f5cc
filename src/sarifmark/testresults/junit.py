# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""JUnit XML serialization of validation results."""

import logging
from pathlib import Path

from junitparser import Failure, JUnitXml, TestCase, TestSuite

from sarifmark.testresults.model import TestResults

logger = logging.getLogger(__name__)


def build_junit(results: TestResults) -> JUnitXml:
    """Build a JUnit document with one suite holding every validation check.

    Args:
        results: Collected validation outcomes.

    Returns:
        JUnit XML document.
    """
    suite = TestSuite(results.name)
    for result in results.results:
        case = TestCase(
            name=result.name,
            classname=result.class_name,
            time=result.duration_seconds,
        )
        if result.outcome == "Failed":
            case.result = [Failure(result.error_message or "Test failed")]
        suite.add_testcase(case)
    suite.update_statistics()

    document = JUnitXml(results.name)
    document.add_testsuite(suite)
    document.update_statistics()
    return document


def write_junit(results: TestResults, output_path: Path) -> None:
    """Write validation results as JUnit XML.

    Args:
        results: Collected validation outcomes.
        output_path: Target file path.

    Raises:
        OSError: If the file cannot be written.
    """
    document = build_junit(results)
    document.write(str(output_path), pretty=True)
    logger.debug(f"JUnit results written (path={output_path} tests={results.total})")
