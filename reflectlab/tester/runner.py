"""
Suite runner.

Discovers the marked methods of a suite object and runs every test
with the fixed lifecycle:

    setup* -> test -> teardown*

Discovery walks the suite's class hierarchy base class first, each
class's methods in definition order. A method redefined in a subclass
keeps its original position but the subclass definition (and only its
markers) is used.

Outcome rules:
    - no exception, no expectation        -> passed
    - no exception, expectation declared  -> failed
    - exception, no expectation           -> failed
    - exception of exactly the expected type -> passed
    - exception of any other type         -> failed

Invariants:
    - One TestResult per test method, in discovery order
    - Teardown runs after every test, whatever the outcome
    - Setup or teardown failure aborts the whole run
    - Test failures never propagate out of run()
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Optional

from ..errors import SetupError, TeardownError
from .markers import MethodMarks, Phase, get_marks
from .results import TestResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Outcome:
    """What a test invocation produced.

    Attributes:
        raised: Type of the exception raised, None if the test returned
        detail: repr of the exception
    """

    raised: Optional[type[BaseException]] = None
    detail: Optional[str] = None

    def judge(self, expected: Optional[type[BaseException]]) -> tuple[bool, Optional[str]]:
        """Compare against the declared expectation.

        Returns:
            Tuple of (passed, failure description)
        """
        if self.raised is None:
            if expected is None:
                return True, None
            return False, f"expected {expected.__name__} but nothing was raised"
        if expected is None:
            return False, self.detail
        if self.raised is expected:
            return True, None
        return False, f"expected {expected.__name__} but got {self.detail}"


@dataclass(frozen=True)
class SuiteMethod:
    """A discovered suite method."""

    name: str
    marks: MethodMarks


@dataclass(frozen=True)
class SuitePlan:
    """Discovered methods of a suite class, each list in discovery order."""

    setups: tuple[SuiteMethod, ...]
    tests: tuple[SuiteMethod, ...]
    teardowns: tuple[SuiteMethod, ...]


def discover(suite_type: type) -> SuitePlan:
    """Find the marked methods of a suite class and its bases."""
    resolved: dict[str, Any] = {}
    for klass in reversed(suite_type.__mro__):
        for name, value in vars(klass).items():
            resolved[name] = value

    setups, tests, teardowns = [], [], []
    for name, value in resolved.items():
        marks = get_marks(value)
        if marks is None:
            continue
        method = SuiteMethod(name=name, marks=marks)
        if marks.has(Phase.SETUP):
            setups.append(method)
        if marks.has(Phase.TEST):
            tests.append(method)
        if marks.has(Phase.TEARDOWN):
            teardowns.append(method)

    return SuitePlan(setups=tuple(setups), tests=tuple(tests), teardowns=tuple(teardowns))


class SuiteRunner:
    """Runs the marked methods of a suite object.

    Example:
        >>> results = SuiteRunner().run(MathSuite())
        >>> [(r.name, r.passed) for r in results]
        [('testOnePlusOneIsTwo', True), ('successIsEightLetters', False)]
    """

    def run(self, suite: Any) -> list[TestResult]:
        """Run every test of a suite.

        Args:
            suite: Object whose class defines marked methods

        Returns:
            One TestResult per test, in discovery order

        Raises:
            SetupError: If a setup method raised
            TeardownError: If a teardown method raised
        """
        plan = discover(type(suite))
        logger.info(
            f"Running {len(plan.tests)} tests from {type(suite).__name__} "
            f"({len(plan.setups)} setups, {len(plan.teardowns)} teardowns)"
        )

        results: list[TestResult] = []
        for test in plan.tests:
            for method in plan.setups:
                try:
                    getattr(suite, method.name)()
                except Exception as e:
                    logger.error(f"Setup {method.name} failed before {test.name}: {e!r}")
                    raise SetupError(method.name, test.name, e) from e

            start = time.perf_counter()
            outcome = self._invoke(suite, test.name)
            elapsed = time.perf_counter() - start
            passed, failure = outcome.judge(test.marks.expected)

            for method in plan.teardowns:
                try:
                    getattr(suite, method.name)()
                except Exception as e:
                    logger.error(f"Teardown {method.name} failed after {test.name}: {e!r}")
                    raise TeardownError(method.name, test.name, e) from e

            logger.debug(f"{test.name}: {'passed' if passed else 'failed'} in {elapsed:.6f}s")
            results.append(TestResult(test.name, passed, elapsed, failure))

        logger.info(
            f"Finished {type(suite).__name__}: "
            f"{sum(1 for r in results if r.passed)}/{len(results)} passed"
        )
        return results

    def _invoke(self, suite: Any, name: str) -> Outcome:
        try:
            getattr(suite, name)()
        except Exception as e:
            return Outcome(raised=type(e), detail=repr(e))
        return Outcome()


def run_suite(suite: Any) -> list[TestResult]:
    """Run a suite with a default runner."""
    return SuiteRunner().run(suite)
