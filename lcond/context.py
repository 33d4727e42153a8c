"""
Render context: variable scopes used to resolve condition operands.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional

from .errors import UndefinedVariableError
from .expression import Expression


class RenderContext:
    """
    Stack of variable scopes for one render call.

    The innermost scope wins on lookup. In strict-variables mode a missing
    variable or key raises UndefinedVariableError instead of resolving to None.
    """

    def __init__(self, variables: Optional[Mapping[str, Any]] = None, *, strict_variables: bool = False):
        self.scopes: List[Dict[str, Any]] = [dict(variables or {})]
        self.strict_variables = strict_variables

    def push(self, variables: Optional[Mapping[str, Any]] = None) -> None:
        self.scopes.append(dict(variables or {}))

    def pop(self) -> Dict[str, Any]:
        if len(self.scopes) == 1:
            raise RuntimeError("Cannot pop the root scope")
        return self.scopes.pop()

    @contextmanager
    def new_scope(self, variables: Optional[Mapping[str, Any]] = None) -> Iterator[RenderContext]:
        """Temporary inner scope, removed even if rendering fails."""
        self.push(variables)
        try:
            yield self
        finally:
            self.pop()

    def __setitem__(self, name: str, value: Any) -> None:
        self.scopes[-1][name] = value

    def __contains__(self, name: str) -> bool:
        return any(name in scope for scope in self.scopes)

    def find_variable(self, name: str, path: Optional[str] = None) -> Any:
        """
        Looks up a root variable name in the scopes.

        Args:
            name: Root variable name
            path: Full variable path, used for the error message

        Returns:
            The variable value, or None when it is not defined
        """
        for scope in reversed(self.scopes):
            if name in scope:
                return scope[name]
        return self.missing(path or name)

    def missing(self, path: str) -> Any:
        """Result of a failed lookup: None, or an error in strict-variables mode."""
        if self.strict_variables:
            raise UndefinedVariableError(path)
        return None

    def resolve(self, expression: Expression) -> Any:
        return expression.evaluate(self)


__all__ = ["RenderContext"]
