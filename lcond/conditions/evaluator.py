"""
Evaluator of condition chains.

Chains are evaluated right-associatively with no precedence between
``and`` and ``or``: ``a and b or c`` means ``a and (b or c)``.
This is the only place where that rule is implemented; both parser modes
produce chains consumed here.
"""

from __future__ import annotations

from typing import Optional

from .comparator import compare
from .model import BooleanOp, Condition
from ..context import RenderContext
from ..expression import truthy


class ConditionEvaluator:
    """
    Evaluator of condition chains against a render context.

    Errors raised by operand resolution (e.g. undefined variables in
    strict-variables mode) propagate unchanged.
    """

    def __init__(self, context: RenderContext):
        """
        Args:
            context: Render context operands are resolved against
        """
        self.context = context

    def evaluate(self, condition: Condition) -> bool:
        """
        Evaluates the chain starting at ``condition``.

        Walks the chain forward. Because grouping is from the right, a link
        joined with ``or`` decides the result when it is true, a link joined
        with ``and`` decides it when it is false; otherwise the result is
        that of the rest of the chain.
        """
        node: Optional[Condition] = condition
        result = False

        while node is not None:
            result = self.evaluate_link(node)

            if node.combinator is BooleanOp.OR and result:
                break
            if node.combinator is BooleanOp.AND and not result:
                break
            node = node.next

        return result

    def evaluate_link(self, condition: Condition) -> bool:
        """Evaluates a single link, ignoring whatever is chained after it."""
        left = self.context.resolve(condition.left)

        if condition.operator is None:
            return truthy(left)

        assert condition.right is not None
        right = self.context.resolve(condition.right)
        return compare(left, condition.operator, right)


def evaluate_condition_string(markup: str, context: RenderContext, mode=None, **parse_options) -> bool:
    """
    Convenience function: parses a header and evaluates it.

    Args:
        markup: Condition markup, e.g. ``user.admin and page.size > 0``
        context: Render context
        mode: Parse mode; lax when omitted
        **parse_options: Passed to parse_condition (max_chain_length, warnings)

    Returns:
        Result of the evaluation
    """
    from . import parse_condition

    condition = parse_condition(markup, mode, **parse_options)
    return ConditionEvaluator(context).evaluate(condition)


__all__ = ["ConditionEvaluator", "evaluate_condition_string"]
