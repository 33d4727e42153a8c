"""
Strict recursive-descent parser of branch headers.

Grammar:
chain       → comparison (("and" | "or") comparison)* EOF
comparison  → operand (COMPARISON operand)?
operand     → IDENTIFIER lookups
            | "[" operand "]" lookups
            | STRING
            | NUMBER
            | "(" operand ".." operand ")"
lookups     → ("." IDENTIFIER | "[" operand "]")*

Any input left after the last comparison is an error.
"""

from __future__ import annotations

from typing import List, Optional

from .lexer import ConditionLexer, Token
from .model import BooleanOp, Condition
from ..errors import TemplateSyntaxError
from ..expression import Expression, parse_operand

DEFAULT_MAX_CHAIN_LENGTH = 50


class ConditionParser:
    """
    Strict parser of condition chains.

    Produces a forward chain in source order: the head is the first
    comparison and each link's ``next`` is the comparison that follows it.
    """

    def __init__(self, max_chain_length: int = DEFAULT_MAX_CHAIN_LENGTH):
        self.lexer = ConditionLexer()
        self.max_chain_length = max_chain_length
        self._markup = ""
        self._tokens: List[Token] = []
        self._position = 0

    def parse(self, markup: str) -> Condition:
        """
        Parses a header into a condition chain.

        Args:
            markup: Header text after ``if`` / ``elsif``

        Returns:
            Head of the chain

        Raises:
            TemplateSyntaxError: On any syntax error, including trailing input
        """
        self._markup = markup
        self._tokens = self.lexer.tokenize(markup)
        self._position = 0

        if self._current_token().type == 'EOF':
            raise TemplateSyntaxError("Empty condition", markup)

        head = self._parse_comparison()
        tail = head
        length = 1

        while True:
            op = self._match_boolean_keyword()
            if op is None:
                break
            length += 1
            if length > self.max_chain_length:
                raise TemplateSyntaxError(
                    f"Condition chain longer than {self.max_chain_length} comparisons", markup
                )
            tail = tail.chain(op, self._parse_comparison())

        if not self._is_at_end():
            current = self._current_token()
            raise TemplateSyntaxError(
                f"Unexpected trailing input '{current.value}' at position {current.position}", markup
            )

        return head

    def _parse_comparison(self) -> Condition:
        left = self._parse_operand()

        if self._check('COMPARISON'):
            operator = self._advance().value
            right = self._parse_operand()
            return Condition(left, operator, right)

        return Condition(left)

    def _parse_operand(self) -> Expression:
        """Consumes one operand and parses its source slice."""
        start = self._current_token()
        self._skip_operand()
        end = self._tokens[self._position - 1]
        source = self._markup[start.position:end.position + len(end.value)]
        try:
            return parse_operand(source)
        except TemplateSyntaxError as e:
            raise TemplateSyntaxError(e.message, self._markup) from None

    def _skip_operand(self) -> None:
        token = self._current_token()

        if token.type == 'IDENTIFIER' and BooleanOp.from_keyword(token.value) is not None:
            raise TemplateSyntaxError(f"Expected an operand but found '{token.value}'", self._markup)
        elif token.type == 'IDENTIFIER':
            self._advance()
            self._skip_lookups()
        elif token.type == 'LBRACKET':
            self._advance()
            self._skip_operand()
            self._expect('RBRACKET')
            self._skip_lookups()
        elif token.type in ('STRING', 'NUMBER'):
            self._advance()
        elif token.type == 'LPAREN':
            self._advance()
            self._skip_operand()
            self._expect('DOTDOT')
            self._skip_operand()
            self._expect('RPAREN')
        elif token.type == 'EOF':
            raise TemplateSyntaxError("Unexpected end of expression, expected an operand", self._markup)
        else:
            raise TemplateSyntaxError(f"'{token.value}' is not a valid expression", self._markup)

    def _skip_lookups(self) -> None:
        while True:
            if self._check('LBRACKET'):
                self._advance()
                self._skip_operand()
                self._expect('RBRACKET')
            elif self._check('DOT'):
                self._advance()
                self._expect('IDENTIFIER')
            else:
                break

    # Helpers

    def _match_boolean_keyword(self) -> Optional[BooleanOp]:
        token = self._current_token()
        if token.type != 'IDENTIFIER':
            return None
        op = BooleanOp.from_keyword(token.value)
        if op is not None:
            self._advance()
        return op

    def _expect(self, token_type: str) -> Token:
        token = self._current_token()
        if token.type != token_type:
            found = token.value or "end of expression"
            raise TemplateSyntaxError(f"Expected {token_type} but found '{found}'", self._markup)
        return self._advance()

    def _check(self, token_type: str) -> bool:
        return self._current_token().type == token_type

    def _advance(self) -> Token:
        token = self._current_token()
        if not self._is_at_end():
            self._position += 1
        return token

    def _current_token(self) -> Token:
        if self._position >= len(self._tokens):
            return self._tokens[-1]
        return self._tokens[self._position]

    def _is_at_end(self) -> bool:
        return self._current_token().type == 'EOF'


def strict_parse(markup: str, max_chain_length: int = DEFAULT_MAX_CHAIN_LENGTH) -> Condition:
    """Parses a header with the strict grammar."""
    return ConditionParser(max_chain_length).parse(markup)


__all__ = ["ConditionParser", "strict_parse", "DEFAULT_MAX_CHAIN_LENGTH"]
