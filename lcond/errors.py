"""
Base exceptions for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from LCUserError.

Programming errors and bugs should NOT inherit from LCUserError:
they will propagate with full tracebacks.
"""

from __future__ import annotations

from typing import Optional


class LCUserError(Exception):
    """
    Base class for all user-facing errors in lcond.

    These errors indicate problems that the template author can fix:
    malformed markup, bad comparisons, undefined variables, invalid config.
    """
    pass


class TemplateSyntaxError(LCUserError):
    """
    Malformed template markup.

    Raised at parse time only. Carries the offending markup and, when the
    template lexer knows it, the 1-based source line.
    """

    def __init__(self, message: str, markup: Optional[str] = None, line: Optional[int] = None):
        self.message = message
        self.markup = markup
        self.line = line
        super().__init__(self._format())

    def _format(self) -> str:
        text = self.message
        if self.markup is not None:
            text = f"{text} in '{self.markup}'"
        if self.line is not None:
            text = f"{text} (line {self.line})"
        return text

    def with_line(self, line: int) -> TemplateSyntaxError:
        """Fills in the source line if it is not known yet."""
        if self.line is None:
            self.line = line
            self.args = (self._format(),)
        return self


class UnsupportedComparisonError(LCUserError):
    """Comparator symbol outside the recognized set."""

    def __init__(self, operator: str):
        self.operator = operator
        super().__init__(f"Unknown operator {operator}")


class IncomparableValuesError(LCUserError):
    """Ordering comparison between values that have no common order."""

    def __init__(self, left: object, operator: str, right: object):
        self.left = left
        self.operator = operator
        self.right = right
        super().__init__(
            f"Comparison of {type(left).__name__} with {type(right).__name__} failed "
            f"({left!r} {operator} {right!r})"
        )


class UndefinedVariableError(LCUserError):
    """Variable lookup failed while strict variables are enabled."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Undefined variable '{name}'")


__all__ = [
    "LCUserError",
    "TemplateSyntaxError",
    "UnsupportedComparisonError",
    "IncomparableValuesError",
    "UndefinedVariableError",
]
