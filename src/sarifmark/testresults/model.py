# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Validation test result records."""

from dataclasses import dataclass
from typing import Literal

TestOutcome = Literal["Passed", "Failed"]


@dataclass(frozen=True)
class TestResult:
    """Represent the finished outcome of one validation check.

    Attributes:
        name: Stable test identifier.
        class_name: Category label the test is grouped under.
        code_base: Code-base label of the tested program.
        duration_seconds: Wall-clock duration of the check.
        outcome: ``Passed`` or ``Failed``.
        error_message: Failure reason; ``None`` for passed checks.
    """

    __test__ = False

    name: str
    class_name: str
    code_base: str
    duration_seconds: float
    outcome: TestOutcome
    error_message: str | None = None


@dataclass(frozen=True)
class TestResults:
    """Represent the collected outcomes of one validation run."""

    __test__ = False

    name: str
    results: tuple[TestResult, ...] = ()

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def passed(self) -> int:
        return sum(1 for result in self.results if result.outcome == "Passed")

    @property
    def failed(self) -> int:
        return sum(1 for result in self.results if result.outcome == "Failed")

    def with_result(self, result: TestResult) -> "TestResults":
        """Return a copy with ``result`` appended."""
        return TestResults(name=self.name, results=(*self.results, result))
