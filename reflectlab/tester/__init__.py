"""
Suite runner for reflectlab.

Import the package rather than the decorators so test collectors don't
pick up `test` itself:

    >>> from reflectlab import tester
    >>> class Suite:
    ...     @tester.test
    ...     def one_plus_one(self):
    ...         assert 1 + 1 == 2
    >>> tester.run_suite(Suite())
"""

from .markers import MethodMarks, Phase, expect, get_marks, setup, teardown, test
from .results import TestResult, summarize
from .runner import Outcome, SuitePlan, SuiteRunner, discover, run_suite

__all__ = [
    # Markers
    "setup",
    "test",
    "teardown",
    "expect",
    "Phase",
    "MethodMarks",
    "get_marks",
    # Runner
    "SuiteRunner",
    "SuitePlan",
    "Outcome",
    "discover",
    "run_suite",
    # Results
    "TestResult",
    "summarize",
]
