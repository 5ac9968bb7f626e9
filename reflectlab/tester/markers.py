"""
Lifecycle markers for suite methods.

Decorators that tag methods of a suite class:
- setup: runs before every test
- test: a test case
- teardown: runs after every test, whatever the test outcome
- expect(exc_type): the test passes only if it raises exactly exc_type

Decorators stack in any order and return the same function with a
MethodMarks record attached.

Example:
    >>> from reflectlab import tester
    >>> class MathSuite:
    ...     @tester.setup
    ...     def prepare(self):
    ...         self.values = [1, 2]
    ...
    ...     @tester.test
    ...     @tester.expect(ZeroDivisionError)
    ...     def divide_by_zero(self):
    ...         1 / 0
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, TypeVar

F = TypeVar("F", bound=Callable[..., Any])

MARKS_ATTR = "__reflectlab_marks__"


class Phase(Enum):
    """Lifecycle phase of a suite method."""

    SETUP = "setup"
    TEST = "test"
    TEARDOWN = "teardown"


@dataclass
class MethodMarks:
    """Markers attached to one function.

    Attributes:
        phases: Phases the method takes part in
        expected: Exception type the test must raise, if any
    """

    phases: set[Phase]
    expected: Optional[type[BaseException]] = None

    def has(self, phase: Phase) -> bool:
        return phase in self.phases


def get_marks(obj: Any) -> MethodMarks | None:
    """Markers of a function, unwrapping staticmethod/classmethod."""
    func = getattr(obj, "__func__", obj)
    return getattr(func, MARKS_ATTR, None)


def _marks_for(func: Any) -> MethodMarks:
    target = getattr(func, "__func__", func)
    marks = getattr(target, MARKS_ATTR, None)
    if marks is None:
        marks = MethodMarks(phases=set())
        setattr(target, MARKS_ATTR, marks)
    return marks


def _phase(phase: Phase) -> Callable[[F], F]:
    def decorator(func: F) -> F:
        if not callable(getattr(func, "__func__", func)):
            raise TypeError(f"@{phase.value} can only decorate functions, got {func!r}")
        _marks_for(func).phases.add(phase)
        return func

    decorator.__name__ = phase.value
    decorator.__doc__ = f"Mark a suite method as {phase.value}."
    return decorator


setup = _phase(Phase.SETUP)
test = _phase(Phase.TEST)
teardown = _phase(Phase.TEARDOWN)


def expect(exc_type: type[Exception]) -> Callable[[F], F]:
    """Declare the exception type a test must raise to pass.

    The raised exception must be exactly exc_type; subclasses don't match.

    Raises:
        TypeError: If exc_type is not an Exception subclass
    """
    if not isinstance(exc_type, type) or not issubclass(exc_type, Exception):
        raise TypeError(f"expect() needs an Exception subclass, got {exc_type!r}")

    def decorator(func: F) -> F:
        _marks_for(func).expected = exc_type
        return func

    return decorator
