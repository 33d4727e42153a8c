"""
Operands of branch conditions.

An operand is a literal (string, number, boolean, null), one of the method
literals ``empty`` / ``blank``, an integer range ``(a..b)`` or a variable path
such as ``user.roles[0]`` or ``page["title"].size``. Operands are immutable
after parsing and are resolved lazily against a render context.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, List, Tuple, Union

from .errors import LCUserError, TemplateSyntaxError

if TYPE_CHECKING:
    from .context import RenderContext


_STRING = re.compile(r"""\A(?:"([^"]*)"|'([^']*)')\Z""")
_INTEGER = re.compile(r"\A-?\d+\Z")
_FLOAT = re.compile(r"\A-?\d+\.\d+\Z")
_RANGE = re.compile(r"\A\(\s*(.+?)\s*\.\.\s*(.+?)\s*\)\Z", re.DOTALL)
_NAME = re.compile(r"[A-Za-z_][\w-]*\??")
_KEY = re.compile(r"[\w-]+\??")

_LITERALS = {
    "nil": None,
    "null": None,
    "true": True,
    "false": False,
}

# Lookups that act on the collection itself when no such key exists
COMMAND_METHODS = frozenset({"size", "first", "last"})


class Expression(ABC):
    """Base class for all operands."""

    @abstractmethod
    def evaluate(self, context: RenderContext) -> Any:
        """Returns the runtime value of the operand."""
        pass

    @property
    @abstractmethod
    def markup(self) -> str:
        """Source form of the operand."""
        pass

    def __str__(self) -> str:
        return self.markup


@dataclass(frozen=True)
class Literal(Expression):
    """Constant value: string, number, boolean or null."""
    value: Any
    source: str

    def evaluate(self, context: RenderContext) -> Any:
        return self.value

    @property
    def markup(self) -> str:
        return self.source


@dataclass(frozen=True)
class MethodLiteral(Expression):
    """
    Special literal ``empty`` or ``blank``.

    Evaluates to itself; the comparator recognizes it and applies
    the predicate to the other side of ``==`` / ``!=``.
    """
    name: str

    def evaluate(self, context: RenderContext) -> Any:
        return self

    @property
    def markup(self) -> str:
        return self.name

    def matches(self, value: Any) -> bool:
        if self.name == "blank":
            return is_blank(value)
        return is_empty(value)


@dataclass(frozen=True)
class RangeLookup(Expression):
    """Inclusive integer range ``(start..end)``."""
    start: Expression
    end: Expression

    def evaluate(self, context: RenderContext) -> range:
        first = _to_integer(context.resolve(self.start))
        last = _to_integer(context.resolve(self.end))
        return range(first, last + 1)

    @property
    def markup(self) -> str:
        return f"({self.start}..{self.end})"


# A lookup key is either a plain name (from ".name") or a bracketed operand
LookupKey = Union[str, Expression]


@dataclass(frozen=True)
class VariableLookup(Expression):
    """
    Variable path: a root name followed by ``.name`` and ``[operand]`` lookups.

    The root may itself be bracketed (``["odd name"].x``), in which case it is
    an operand resolved before the scope lookup.
    """
    name: LookupKey
    lookups: Tuple[LookupKey, ...] = ()

    def evaluate(self, context: RenderContext) -> Any:
        name = self.name if isinstance(self.name, str) else context.resolve(self.name)
        obj = context.find_variable(str(name), path=self.markup)

        for key in self.lookups:
            if obj is None:
                return None
            is_command = isinstance(key, str) and key in COMMAND_METHODS
            if isinstance(key, Expression):
                key = context.resolve(key)
            found, obj = _lookup(obj, key, is_command)
            if not found:
                return context.missing(self.markup)

        return obj

    @property
    def markup(self) -> str:
        if isinstance(self.name, str):
            parts = [self.name]
        else:
            parts = [f"[{self.name}]"]
        for key in self.lookups:
            if isinstance(key, str):
                parts.append(f".{key}")
            else:
                parts.append(f"[{key}]")
        return "".join(parts)


def _lookup(obj: Any, key: Any, is_command: bool) -> Tuple[bool, Any]:
    """One path step. Returns (found, value)."""
    if isinstance(obj, Mapping):
        if key in obj:
            return True, obj[key]
    elif isinstance(obj, (list, tuple)) and isinstance(key, int) and not isinstance(key, bool):
        if -len(obj) <= key < len(obj):
            return True, obj[key]
        return True, None

    if is_command:
        if key == "size" and hasattr(obj, "__len__"):
            return True, len(obj)
        if key == "first" and isinstance(obj, (list, tuple, range)):
            return True, obj[0] if len(obj) else None
        if key == "last" and isinstance(obj, (list, tuple, range)):
            return True, obj[-1] if len(obj) else None

    return False, None


def _to_integer(value: Any) -> int:
    if isinstance(value, bool):
        raise LCUserError(f"invalid integer {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise LCUserError(f"invalid integer {value!r}")


def parse_operand(text: str) -> Expression:
    """
    Parses one operand token.

    Args:
        text: Operand source without surrounding whitespace

    Returns:
        Parsed operand

    Raises:
        TemplateSyntaxError: If the text is not a valid operand
    """
    text = text.strip()
    if not text:
        raise TemplateSyntaxError("Missing operand")

    if text in _LITERALS:
        return Literal(_LITERALS[text], text)
    if text in ("empty", "blank"):
        return MethodLiteral(text)

    match = _STRING.match(text)
    if match:
        value = match.group(1) if match.group(1) is not None else match.group(2)
        return Literal(value, text)

    if _INTEGER.match(text):
        return Literal(int(text), text)
    if _FLOAT.match(text):
        return Literal(float(text), text)

    match = _RANGE.match(text)
    if match:
        return RangeLookup(parse_operand(match.group(1)), parse_operand(match.group(2)))

    return _parse_variable(text)


def _parse_variable(text: str) -> VariableLookup:
    position = 0
    root: LookupKey

    if text.startswith("["):
        position, root = _parse_bracket(text, 0)
    else:
        match = _NAME.match(text)
        if not match:
            raise TemplateSyntaxError(f"Invalid expression '{text}'")
        root = match.group(0)
        position = match.end()

    lookups: List[LookupKey] = []
    while position < len(text):
        char = text[position]
        if char == ".":
            match = _KEY.match(text, position + 1)
            if not match:
                raise TemplateSyntaxError(f"Invalid expression '{text}'")
            lookups.append(match.group(0))
            position = match.end()
        elif char == "[":
            position, key = _parse_bracket(text, position)
            lookups.append(key)
        else:
            raise TemplateSyntaxError(f"Invalid expression '{text}'")

    return VariableLookup(root, tuple(lookups))


def _parse_bracket(text: str, start: int) -> Tuple[int, Expression]:
    """Parses ``[operand]`` starting at ``start``; returns (end, operand)."""
    depth = 0
    quote = ""
    for index in range(start, len(text)):
        char = text[index]
        if quote:
            if char == quote:
                quote = ""
        elif char in "\"'":
            quote = char
        elif char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
            if depth == 0:
                inner = text[start + 1:index]
                return index + 1, parse_operand(inner)
    raise TemplateSyntaxError(f"Unterminated '[' in expression '{text}'")


def is_empty(value: Any) -> bool:
    if isinstance(value, (str, list, tuple, set, frozenset, Mapping)):
        return len(value) == 0
    return False


def is_blank(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return is_empty(value)


def truthy(value: Any) -> bool:
    """Only ``None`` and ``False`` are falsy; ``0`` and ``""`` are true."""
    return value is not None and value is not False


def resolve(operand: Expression, context: RenderContext) -> Any:
    """Resolves an operand against a render context."""
    return context.resolve(operand)


__all__ = [
    "Expression",
    "Literal",
    "MethodLiteral",
    "RangeLookup",
    "VariableLookup",
    "COMMAND_METHODS",
    "parse_operand",
    "is_empty",
    "is_blank",
    "truthy",
    "resolve",
]
