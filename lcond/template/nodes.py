"""
Template AST nodes.

Nodes are immutable; branch chains (``{% if %}``) live in branches.py and
are the only node type built incrementally.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..context import RenderContext
from ..expression import Expression


@dataclass(frozen=True)
class TemplateNode:
    """Base class for all template AST nodes."""

    @property
    def blank(self) -> bool:
        """True if the node can render nothing but whitespace."""
        return False

    def render(self, context: RenderContext) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class TextNode(TemplateNode):
    """
    Plain text between template markup.

    Rendered as is.
    """
    text: str

    @property
    def blank(self) -> bool:
        return not self.text.strip()

    def render(self, context: RenderContext) -> str:
        return self.text


@dataclass(frozen=True)
class OutputNode(TemplateNode):
    """Output of one operand: {{ expression }}."""
    expression: Expression

    def render(self, context: RenderContext) -> str:
        return to_output(context.resolve(self.expression))


def to_output(value: Any) -> str:
    """Text form of a resolved value."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return "".join(to_output(item) for item in value)
    if isinstance(value, range):
        return f"{value.start}..{value.stop - 1}"
    return str(value)


__all__ = ["TemplateNode", "TextNode", "OutputNode", "to_output"]
