"""Result records produced by the suite runner."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional


@dataclass(frozen=True)
class TestResult:
    """Outcome of one test method.

    Attributes:
        name: Test method name
        passed: Whether the test passed
        elapsed: Wall time of the test body in seconds
        failure: What went wrong, None when passed
    """

    __test__ = False  # not a pytest test class

    name: str
    passed: bool
    elapsed: float
    failure: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        result: dict[str, Any] = {
            "name": self.name,
            "passed": self.passed,
            "elapsed": self.elapsed,
        }
        if self.failure:
            result["failure"] = self.failure
        return result


def summarize(results: Iterable[TestResult]) -> dict[str, Any]:
    """Totals over a run."""
    results = list(results)
    passed = sum(1 for r in results if r.passed)
    return {
        "total": len(results),
        "passed": passed,
        "failed": len(results) - passed,
        "elapsed": sum(r.elapsed for r in results),
    }
