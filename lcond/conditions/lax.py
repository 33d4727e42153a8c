"""
Lenient (lax) parser of branch headers.

Tokenization rule:
- the header is split into words; a word is a run of non-space characters in
  which quoted strings, ``[...]`` lookups and ``(...)`` ranges are atomic
  (they may contain spaces);
- a word that is exactly ``and`` or ``or`` is a boundary, every other run of
  consecutive words is one expression chunk.

Each chunk is matched against ``operand [comparator operand]`` as a prefix:
text after a complete triple is tolerated and ignored. The comparator
pattern is permissive; unknown symbols are rejected only at evaluation time.
"""

from __future__ import annotations

import logging
import re
from typing import List

from .model import BooleanOp, Condition
from .parser import DEFAULT_MAX_CHAIN_LENGTH
from ..errors import TemplateSyntaxError
from ..expression import parse_operand

logger = logging.getLogger(__name__)

_QUOTED = r""""[^"]*"|'[^']*'"""
_GROUPED = r"\[[^\]]*\]|\([^)]*\)"

# Word of the header; the trailing \S catches a lone quote or bracket
_WORD = re.compile(rf"""(?:{_QUOTED}|{_GROUPED}|[^\s"'\[(])+|\S""")

# Operand fragment: stops at comparator characters so that "x==1" splits
_FRAGMENT = rf"""(?:{_QUOTED}|{_GROUPED}|[^\s,|"'=!<>\[(])+"""

_SYNTAX = re.compile(
    rf"\s*(?P<left>{_FRAGMENT})(?:\s*(?P<op>[=!<>]+|[a-z_]+)(?:\s*(?P<right>{_FRAGMENT}))?)?"
)

_BOUNDARIES = frozenset(op.value for op in BooleanOp)


class LaxConditionParser:
    """
    Lenient parser of condition chains.

    Builds the chain from the last chunk backwards, so the head is the first
    chunk in source order, exactly as the strict parser produces it.
    """

    def __init__(self, max_chain_length: int = DEFAULT_MAX_CHAIN_LENGTH):
        self.max_chain_length = max_chain_length

    def parse(self, markup: str) -> Condition:
        """
        Parses a header into a condition chain.

        Raises:
            TemplateSyntaxError: On an empty header, a dangling or doubled
                boundary keyword, or a chunk that is not an operand expression
        """
        tokens = self.split(markup)

        chunks = (len(tokens) + 1) // 2
        if chunks > self.max_chain_length:
            raise TemplateSyntaxError(
                f"Condition chain longer than {self.max_chain_length} comparisons", markup
            )

        condition = self._parse_chunk(tokens.pop(), markup)

        while tokens:
            keyword = tokens.pop()
            chunk = tokens.pop()

            op = BooleanOp.from_keyword(keyword)
            if op is None:
                raise TemplateSyntaxError(f"Unknown boolean operator '{keyword}'", markup)

            head = self._parse_chunk(chunk, markup)
            head.chain(op, condition)
            condition = head

        return condition

    def split(self, markup: str) -> List[str]:
        """
        Splits a header into ``[chunk, op, chunk, ..., chunk]``.

        Raises:
            TemplateSyntaxError: If the list would be empty, start or end
                with an operator, or contain two operators in a row
        """
        tokens: List[str] = []
        words: List[str] = []

        for word in _WORD.findall(markup):
            if word in _BOUNDARIES:
                if not words:
                    raise TemplateSyntaxError(f"Missing operand before '{word}'", markup)
                tokens.append(" ".join(words))
                tokens.append(word)
                words = []
            else:
                words.append(word)

        if not words:
            if tokens:
                raise TemplateSyntaxError(f"Missing operand after '{tokens[-1]}'", markup)
            raise TemplateSyntaxError("Empty condition", markup)

        tokens.append(" ".join(words))
        return tokens

    def _parse_chunk(self, chunk: str, markup: str) -> Condition:
        match = _SYNTAX.match(chunk)
        if not match:
            raise TemplateSyntaxError(f"Invalid expression '{chunk}'", markup)

        operator = match.group("op")
        right_text = match.group("right")

        if operator is None and chunk[match.end():].strip():
            raise TemplateSyntaxError(f"Invalid expression '{chunk}'", markup)
        if operator is not None and right_text is None:
            raise TemplateSyntaxError(f"Missing operand after '{operator}'", markup)

        if chunk[match.end():].strip():
            logger.debug("Ignoring trailing text %r in condition %r", chunk[match.end():].strip(), markup)

        try:
            left = parse_operand(match.group("left"))
            right = parse_operand(right_text) if right_text is not None else None
        except TemplateSyntaxError as e:
            raise TemplateSyntaxError(e.message, markup) from None

        return Condition(left, operator, right)


def lax_parse(markup: str, max_chain_length: int = DEFAULT_MAX_CHAIN_LENGTH) -> Condition:
    """Parses a header with the lenient grammar."""
    return LaxConditionParser(max_chain_length).parse(markup)


__all__ = ["LaxConditionParser", "lax_parse"]
