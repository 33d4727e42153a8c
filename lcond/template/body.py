"""
Block body: an ordered list of nodes rendered one after another.
"""

from __future__ import annotations

from typing import Iterator, List, Protocol

from .nodes import TextNode
from ..context import RenderContext


class RenderableNode(Protocol):
    """Anything a body can hold."""

    @property
    def blank(self) -> bool:
        ...

    def render(self, context: RenderContext) -> str:
        ...


class BlockBody:
    """
    Body of a template or of one branch.

    Filled while parsing, then only rendered.
    """

    def __init__(self):
        self.nodes: List[RenderableNode] = []

    def append(self, node: RenderableNode) -> None:
        self.nodes.append(node)

    @property
    def blank(self) -> bool:
        """True if every node can render nothing but whitespace."""
        return all(node.blank for node in self.nodes)

    def remove_blank_strings(self) -> None:
        """Drops whitespace-only text nodes."""
        self.nodes = [
            node for node in self.nodes
            if not (isinstance(node, TextNode) and node.blank)
        ]

    def render(self, context: RenderContext) -> str:
        return "".join(node.render(context) for node in self.nodes)

    def __iter__(self) -> Iterator[RenderableNode]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)


__all__ = ["BlockBody", "RenderableNode"]
