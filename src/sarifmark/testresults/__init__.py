# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Validation test records and their file serializers."""

from sarifmark.testresults.model import TestOutcome, TestResult, TestResults
from sarifmark.testresults.writer import UnsupportedFormatError, write_results_file

__all__ = [
    "TestOutcome",
    "TestResult",
    "TestResults",
    "UnsupportedFormatError",
    "write_results_file",
]
