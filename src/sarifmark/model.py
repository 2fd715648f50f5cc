# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Domain models for analysis findings."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ResultRecord:
    """Represent one finding reported by an analysis tool.

    Attributes:
        rule_id: Identifier of the violated rule; empty when not reported.
        level: Severity token such as ``error``, ``warning`` or ``note``.
        message: Human-readable description; empty when not reported.
        uri: File path of the finding; ``None`` when no location is reported.
        start_line: Line number (1-based); ``None`` when no region is reported.
    """

    rule_id: str
    level: str
    message: str
    uri: str | None = None
    start_line: int | None = None
