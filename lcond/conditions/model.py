"""
Data model of branch conditions.

A condition is a single comparison (or a bare operand tested for truthiness)
optionally chained to the following condition with ``and`` / ``or``.
Chains are singly linked forward lists in source order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterator, Optional

from ..expression import Expression

if TYPE_CHECKING:
    from ..context import RenderContext


class BooleanOp(Enum):
    """Combinator joining a condition to the next one."""
    AND = "and"
    OR = "or"

    @classmethod
    def from_keyword(cls, keyword: str) -> Optional[BooleanOp]:
        """Returns the combinator for an exact ``and`` / ``or`` keyword, else None."""
        for op in cls:
            if op.value == keyword:
                return op
        return None


@dataclass(eq=False)
class Condition:
    """
    One link of a condition chain: ``left [operator right] [combinator next]``.

    Invariants:
    - operator and right are either both set or both absent
    - combinator and next are either both set or both absent
    """
    left: Expression
    operator: Optional[str] = None
    right: Optional[Expression] = None
    combinator: Optional[BooleanOp] = None
    next: Optional[Condition] = None

    def __post_init__(self):
        if (self.operator is None) != (self.right is None):
            raise ValueError("operator and right operand must be given together")
        if (self.combinator is None) != (self.next is None):
            raise ValueError("combinator and next condition must be given together")

    def chain(self, combinator: BooleanOp, condition: Condition) -> Condition:
        """
        Attaches the following condition. A link can be attached only once.

        Returns:
            The attached condition, so parsers can advance their tail pointer
        """
        if self.next is not None:
            raise ValueError("Condition is already chained")
        self.combinator = combinator
        self.next = condition
        return condition

    def links(self) -> Iterator[Condition]:
        """Iterates the chain from this condition forward."""
        node: Optional[Condition] = self
        while node is not None:
            yield node
            node = node.next

    def __len__(self) -> int:
        return sum(1 for _ in self.links())

    def evaluate(self, context: RenderContext) -> bool:
        """Evaluates the whole chain starting at this condition."""
        from .evaluator import ConditionEvaluator

        return ConditionEvaluator(context).evaluate(self)

    def __str__(self) -> str:
        parts = []
        for node in self.links():
            if node.operator is None:
                parts.append(str(node.left))
            else:
                parts.append(f"{node.left} {node.operator} {node.right}")
            if node.combinator is not None:
                parts.append(node.combinator.value)
        return " ".join(parts)

    def __repr__(self) -> str:
        return f"Condition({str(self)!r})"


__all__ = ["BooleanOp", "Condition"]
