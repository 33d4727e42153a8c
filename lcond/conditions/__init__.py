"""
Branch conditions: model, comparator, both header grammars and the evaluator.

``parse_condition`` is the single entry point used by branch chains; it picks
the grammar by parse mode.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

from .comparator import ComparatorKind, compare
from .evaluator import ConditionEvaluator, evaluate_condition_string
from .lax import LaxConditionParser, lax_parse
from .lexer import ConditionLexer, Token
from .model import BooleanOp, Condition
from .parser import DEFAULT_MAX_CHAIN_LENGTH, ConditionParser, strict_parse
from ..config import ParseMode
from ..errors import TemplateSyntaxError

logger = logging.getLogger(__name__)


def parse_condition(
    markup: str,
    mode: Union[ParseMode, str, None] = None,
    *,
    max_chain_length: int = DEFAULT_MAX_CHAIN_LENGTH,
    warnings: Optional[List[TemplateSyntaxError]] = None,
) -> Condition:
    """
    Parses a branch header with the grammar selected by ``mode``.

    Args:
        markup: Header text after ``if`` / ``elsif``
        mode: lax, warn or strict; lax when omitted
        max_chain_length: Maximum number of comparisons in the chain
        warnings: Collects strict-mode errors recovered from in warn mode

    Returns:
        Head of the condition chain

    Raises:
        TemplateSyntaxError: If the header is malformed for the selected mode
    """
    mode = ParseMode.coerce(mode) if mode is not None else ParseMode.LAX

    if mode is ParseMode.STRICT:
        return strict_parse(markup, max_chain_length)
    if mode is ParseMode.LAX:
        return lax_parse(markup, max_chain_length)

    try:
        return strict_parse(markup, max_chain_length)
    except TemplateSyntaxError as e:
        logger.warning("%s; falling back to lax parsing", e)
        if warnings is not None:
            warnings.append(e)
        return lax_parse(markup, max_chain_length)


__all__ = [
    "BooleanOp",
    "Condition",
    "ComparatorKind",
    "compare",
    "ConditionEvaluator",
    "evaluate_condition_string",
    "ConditionLexer",
    "Token",
    "ConditionParser",
    "LaxConditionParser",
    "strict_parse",
    "lax_parse",
    "parse_condition",
]
