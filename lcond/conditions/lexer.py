"""
Lexer for strict-mode condition parsing.

Splits a branch header into exact tokens:
- comparison operators (==, !=, <=, >=, <, >, contains)
- string and number literals
- identifiers (variable names and the and/or keywords)
- path punctuation (., .., [, ], (, ))
- whitespace (ignored)
Any other character is a syntax error.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List

from ..errors import TemplateSyntaxError


@dataclass
class Token:
    """
    Token of a condition header.

    Attributes:
        type: Token type (COMPARISON, STRING, NUMBER, IDENTIFIER, DOTDOT, DOT,
              LBRACKET, RBRACKET, LPAREN, RPAREN, EOF)
        value: Token text
        position: Offset in the source string
    """
    type: str
    value: str
    position: int

    def __repr__(self):
        return f"Token({self.type}, '{self.value}', pos={self.position})"


class ConditionLexer:
    """
    Lexer splitting a condition header into tokens.

    Order of TOKEN_SPECS matters: the first matching pattern wins.
    """

    # (regex_pattern, token_type, ignore_flag)
    TOKEN_SPECS = [
        (r'\s+', 'WHITESPACE', True),

        (r'==|!=|<=|>=|<|>|contains(?![\w?-])', 'COMPARISON', False),

        (r'"[^"]*"|\'[^\']*\'', 'STRING', False),
        (r'-?\d+(?:\.\d+)?(?!\w)', 'NUMBER', False),

        (r'[A-Za-z_][\w-]*\??', 'IDENTIFIER', False),

        # Before DOT
        (r'\.\.', 'DOTDOT', False),
        (r'\.', 'DOT', False),
        (r'\[', 'LBRACKET', False),
        (r'\]', 'RBRACKET', False),
        (r'\(', 'LPAREN', False),
        (r'\)', 'RPAREN', False),

        (r'.', 'UNKNOWN', False),
    ]

    def __init__(self):
        self._compiled_patterns = [
            (re.compile(pattern), token_type, ignore)
            for pattern, token_type, ignore in self.TOKEN_SPECS
        ]

    def tokenize(self, text: str) -> List[Token]:
        """
        Splits a string into tokens.

        Args:
            text: Condition header

        Returns:
            Token list ending with EOF

        Raises:
            TemplateSyntaxError: On a character no token can start with
        """
        tokens: List[Token] = []
        position = 0

        while position < len(text):
            for pattern, token_type, ignore in self._compiled_patterns:
                match = pattern.match(text, position)
                if not match:
                    continue

                value = match.group(0)
                if not ignore:
                    if token_type == 'UNKNOWN':
                        raise TemplateSyntaxError(
                            f"Unexpected character '{value}' at position {position}", text
                        )
                    tokens.append(Token(type=token_type, value=value, position=position))

                position = match.end()
                break

        tokens.append(Token(type='EOF', value='', position=position))

        return tokens


__all__ = ["ConditionLexer", "Token"]
