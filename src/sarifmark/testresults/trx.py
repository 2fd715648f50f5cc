# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Visual Studio TRX serialization of validation results."""

import logging
import platform
import uuid
import xml.etree.ElementTree as ET
from datetime import datetime, timedelta, timezone

from sarifmark.testresults.model import TestResult, TestResults

logger = logging.getLogger(__name__)

TRX_NAMESPACE = "http://microsoft.com/schemas/VisualStudio/TeamTest/2010"
UNIT_TEST_TYPE = "13cdc9d9-ddb5-4fa4-a97d-d965ccfc6d4b"
RESULTS_NOT_IN_A_LIST_ID = "8c84fa94-04c1-424b-9868-57a2d4851a1d"
ALL_LOADED_RESULTS_ID = "19431567-8539-422a-85d7-44ee4e166bda"


def serialize_trx(results: TestResults, finished_at: datetime | None = None) -> str:
    """Serialize validation results to a TRX document.

    Args:
        results: Collected validation outcomes.
        finished_at: Run end timestamp; defaults to now (UTC).

    Returns:
        TRX XML text including the XML declaration.
    """
    ET.register_namespace("", TRX_NAMESPACE)
    finished = finished_at or datetime.now(tz=timezone.utc)
    total_seconds = sum(result.duration_seconds for result in results.results)
    started = finished - timedelta(seconds=total_seconds)
    computer_name = platform.node()

    run = _element("TestRun", id=str(uuid.uuid4()), name=results.name)
    times = _sub(run, "Times")
    times.set("creation", started.isoformat())
    times.set("start", started.isoformat())
    times.set("finish", finished.isoformat())

    results_node = _sub(run, "Results")
    definitions_node = _sub(run, "TestDefinitions")
    entries_node = _sub(run, "TestEntries")

    cursor = started
    for result in results.results:
        test_id = str(uuid.uuid4())
        execution_id = str(uuid.uuid4())
        end = cursor + timedelta(seconds=result.duration_seconds)
        _add_result(
            parent=results_node,
            result=result,
            test_id=test_id,
            execution_id=execution_id,
            computer_name=computer_name,
            start=cursor,
            end=end,
        )
        _add_definition(
            parent=definitions_node,
            result=result,
            test_id=test_id,
            execution_id=execution_id,
        )
        _sub(
            entries_node,
            "TestEntry",
            testId=test_id,
            executionId=execution_id,
            testListId=RESULTS_NOT_IN_A_LIST_ID,
        )
        cursor = end

    lists_node = _sub(run, "TestLists")
    _sub(
        lists_node,
        "TestList",
        name="Results Not in a List",
        id=RESULTS_NOT_IN_A_LIST_ID,
    )
    _sub(lists_node, "TestList", name="All Loaded Results", id=ALL_LOADED_RESULTS_ID)

    summary = _sub(
        run, "ResultSummary", outcome="Failed" if results.failed else "Completed"
    )
    _sub(
        summary,
        "Counters",
        total=str(results.total),
        executed=str(results.total),
        passed=str(results.passed),
        failed=str(results.failed),
    )

    ET.indent(run)
    logger.debug(f"TRX document built (tests={results.total})")
    return ET.tostring(run, encoding="unicode", xml_declaration=True)


def format_duration(seconds: float) -> str:
    """Format a duration as TRX ``hh:mm:ss.fffffff``."""
    ticks = int(round(seconds * 10_000_000))
    whole_seconds, fraction = divmod(ticks, 10_000_000)
    hours, remainder = divmod(whole_seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{fraction:07d}"


def _add_result(
    parent: ET.Element,
    result: TestResult,
    test_id: str,
    execution_id: str,
    computer_name: str,
    start: datetime,
    end: datetime,
) -> None:
    node = _sub(
        parent,
        "UnitTestResult",
        executionId=execution_id,
        testId=test_id,
        testName=result.name,
        computerName=computer_name,
        duration=format_duration(result.duration_seconds),
        startTime=start.isoformat(),
        endTime=end.isoformat(),
        testType=UNIT_TEST_TYPE,
        outcome=result.outcome,
        testListId=RESULTS_NOT_IN_A_LIST_ID,
    )
    if result.error_message:
        error_info = _sub(_sub(node, "Output"), "ErrorInfo")
        _sub(error_info, "Message").text = result.error_message


def _add_definition(
    parent: ET.Element, result: TestResult, test_id: str, execution_id: str
) -> None:
    node = _sub(
        parent, "UnitTest", name=result.name, storage=result.code_base, id=test_id
    )
    _sub(node, "Execution", id=execution_id)
    _sub(
        node,
        "TestMethod",
        codeBase=result.code_base,
        className=result.class_name,
        name=result.name,
    )


def _element(tag: str, **attributes: str) -> ET.Element:
    return ET.Element(f"{{{TRX_NAMESPACE}}}{tag}", attributes)


def _sub(parent: ET.Element, tag: str, **attributes: str) -> ET.Element:
    return ET.SubElement(parent, f"{{{TRX_NAMESPACE}}}{tag}", attributes)
