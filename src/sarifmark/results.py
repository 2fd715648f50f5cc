# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""SARIF ingestion and markdown rendering."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from sarifmark.document import (
    JsonNode,
    first_item,
    get_array,
    get_int,
    get_node,
    get_string,
    has_member,
)
from sarifmark.model import ResultRecord

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"
DEFAULT_LEVEL = "warning"
MIN_DEPTH = 1
MAX_DEPTH = 6


class SarifFormatError(RuntimeError):
    """Represent a malformed or structurally invalid SARIF document."""


@dataclass(frozen=True)
class ResultSet:
    """Represent the findings of the first run of a SARIF file.

    Attributes:
        tool_name: Analysis tool name, ``Unknown`` when not reported.
        tool_version: Analysis tool version, ``Unknown`` when not reported.
        results: Unsuppressed findings in document order.
    """

    tool_name: str
    tool_version: str
    results: tuple[ResultRecord, ...] = ()

    @property
    def result_count(self) -> int:
        """Return the number of retained findings."""
        return len(self.results)

    @classmethod
    def parse(cls, file_path: str | Path | None) -> "ResultSet":
        """Read a SARIF file and extract its findings.

        Args:
            file_path: Path of the SARIF file.

        Returns:
            Parsed result set.

        Raises:
            ValueError: If ``file_path`` is empty or blank.
            FileNotFoundError: If the file does not exist.
            SarifFormatError: If the file is not valid JSON or lacks a
                required SARIF member.
        """
        if file_path is None or not str(file_path).strip():
            raise ValueError("File path cannot be null or empty.")

        path = Path(file_path)
        if not path.is_file():
            raise FileNotFoundError(f"SARIF file not found: {file_path}")

        try:
            root = json.loads(path.read_text(encoding="utf-8-sig"))
        except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
            logger.debug(f"SARIF file is not valid JSON (path={path} error={exc})")
            raise SarifFormatError(f"Invalid JSON in SARIF file: {exc}") from exc

        return cls.from_document(root)

    @classmethod
    def from_document(cls, root: JsonNode) -> "ResultSet":
        """Build a result set from an already decoded SARIF document.

        Args:
            root: Decoded top-level SARIF value.

        Returns:
            Parsed result set.

        Raises:
            SarifFormatError: If a required SARIF member is missing.
        """
        if not has_member(root, "version"):
            raise SarifFormatError("Invalid SARIF file: missing 'version' property.")

        runs = get_array(root, "runs")
        if runs is None:
            raise SarifFormatError(
                "Invalid SARIF file: missing or invalid 'runs' array."
            )
        if not runs:
            raise SarifFormatError("Invalid SARIF file: 'runs' array is empty.")

        run = runs[0]
        if not has_member(run, "tool"):
            raise SarifFormatError(
                "Invalid SARIF file: missing 'tool' property in run."
            )
        if not has_member(run["tool"], "driver"):
            raise SarifFormatError(
                "Invalid SARIF file: missing 'driver' property in tool."
            )
        driver = run["tool"]["driver"]

        tool_name = _or_default(get_string(driver, "name"), UNKNOWN)
        tool_version = _or_default(get_string(driver, "version"), UNKNOWN)

        records: list[ResultRecord] = []
        suppressed = 0
        for entry in get_array(run, "results") or []:
            if _is_suppressed(entry):
                suppressed += 1
                continue
            records.append(_build_record(entry))

        logger.debug(
            f"SARIF parsed (tool={tool_name} version={tool_version} "
            f"results={len(records)} suppressed={suppressed})"
        )
        return cls(
            tool_name=tool_name, tool_version=tool_version, results=tuple(records)
        )

    def to_markdown(self, depth: int = 1, heading: str | None = None) -> str:
        """Render the findings as a markdown report.

        Args:
            depth: Heading level of the report title, 1 through 6.
            heading: Report title; defaults to ``"{tool_name} Analysis"``.

        Returns:
            Markdown text.

        Raises:
            ValueError: If ``depth`` is outside 1 through 6.
        """
        if depth < MIN_DEPTH or depth > MAX_DEPTH:
            raise ValueError(
                f"Depth must be between {MIN_DEPTH} and {MAX_DEPTH} (depth={depth})"
            )

        title = heading if heading is not None else f"{self.tool_name} Analysis"
        sub_depth = min(depth + 1, MAX_DEPTH)
        lines = [
            f"{'#' * depth} {title}\n",
            "\n",
            f"**Tool:** {self.tool_name} {self.tool_version}\n",
            "\n",
            f"{'#' * sub_depth} Results\n",
            "\n",
            f"{_summary_line(self.result_count)}\n",
        ]
        if self.results:
            lines.append("\n")
            for record in self.results:
                lines.append(
                    f"{format_location(record)}: {record.level} "
                    f"[{record.rule_id}] {record.message}  \n"
                )
            lines.append("\n")
        return "".join(lines)


def format_location(record: ResultRecord) -> str:
    """Format the location prefix of one report line.

    Args:
        record: Finding to format.

    Returns:
        ``(no location)``, the bare URI, or ``uri(line)``.
    """
    if record.uri is None:
        return "(no location)"
    if record.start_line is None:
        return record.uri
    return f"{record.uri}({record.start_line})"


def _summary_line(count: int) -> str:
    if count == 0:
        return "Found no results"
    if count == 1:
        return "Found 1 result"
    return f"Found {count} results"


def _is_suppressed(entry: JsonNode) -> bool:
    """Treat a result with at least one suppression entry as suppressed."""
    return bool(get_array(entry, "suppressions"))


def _build_record(entry: JsonNode) -> ResultRecord:
    """Build one record from a SARIF result object with per-field defaults."""
    physical = get_node(first_item(get_array(entry, "locations")), "physicalLocation")
    return ResultRecord(
        rule_id=_or_default(get_string(entry, "ruleId"), ""),
        level=_or_default(get_string(entry, "level"), DEFAULT_LEVEL),
        message=_or_default(get_string(entry, "message", "text"), ""),
        uri=get_string(physical, "artifactLocation", "uri"),
        start_line=get_int(physical, "region", "startLine"),
    )


def _or_default(value: str | None, default: str) -> str:
    return default if value is None else value
