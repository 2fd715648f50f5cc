# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""SARIF ingestion and markdown reporting."""

from sarifmark.model import ResultRecord
from sarifmark.results import ResultSet, SarifFormatError

__all__ = ["ResultRecord", "ResultSet", "SarifFormatError"]
