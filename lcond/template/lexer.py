"""
Lexer for template sources.

Splits a template into text, output ``{{ ... }}`` and tag ``{% ... %}``
tokens. Tag and output tokens carry their inner markup, stripped.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import List

from ..errors import TemplateSyntaxError


class TokenType(enum.Enum):
    """Template token types."""
    TEXT = "TEXT"
    OUTPUT = "OUTPUT"       # {{ ... }}
    TAG = "TAG"             # {% ... %}
    EOF = "EOF"


_DELIMITERS = {
    "{{": ("}}", TokenType.OUTPUT),
    "{%": ("%}", TokenType.TAG),
}


@dataclass(frozen=True)
class Token:
    """
    Token with position information for error reporting.
    """
    type: TokenType
    value: str
    position: int        # Offset in the source
    line: int            # Line number (1-based)
    column: int          # Column number (1-based)

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


class TemplateLexer:
    """
    Template lexer.

    Text runs until the next ``{{`` or ``{%``; a delimiter without its
    closing counterpart is a syntax error.
    """

    def __init__(self, text: str):
        self.text = text
        self.position = 0
        self.line = 1
        self.column = 1
        self.length = len(text)

    def tokenize(self) -> List[Token]:
        """
        Tokenizes the whole source.

        Returns:
            Token list ending with EOF
        """
        tokens: List[Token] = []

        while self.position < self.length:
            tokens.append(self.next_token())

        tokens.append(Token(TokenType.EOF, "", self.position, self.line, self.column))

        return tokens

    def next_token(self) -> Token:
        """
        Reads the next token from the input.
        """
        start_pos = self.position
        start_line = self.line
        start_column = self.column

        opener = self.text[self.position:self.position + 2]
        if opener in _DELIMITERS:
            closer, token_type = _DELIMITERS[opener]
            end = self.text.find(closer, self.position + 2)
            if end == -1:
                raise TemplateSyntaxError(
                    f"'{opener}' was not properly terminated with '{closer}'",
                    self.text[self.position:self.position + 40],
                    start_line,
                )
            inner = self.text[self.position + 2:end].strip()
            self._advance(end + len(closer) - self.position)
            return Token(token_type, inner, start_pos, start_line, start_column)

        text_end = self._find_next_delimiter()
        value = self.text[self.position:text_end]
        self._advance(len(value))
        return Token(TokenType.TEXT, value, start_pos, start_line, start_column)

    def _advance(self, count: int) -> None:
        """
        Moves the position forward, updating line and column numbers.
        """
        for _ in range(count):
            if self.position < self.length:
                if self.text[self.position] == '\n':
                    self.line += 1
                    self.column = 1
                else:
                    self.column += 1
                self.position += 1

    def _find_next_delimiter(self) -> int:
        """
        Position of the next ``{{`` or ``{%``, or the end of the text.
        """
        candidates = [
            pos for pos in (self.text.find(opener, self.position) for opener in _DELIMITERS)
            if pos != -1
        ]
        return min(candidates) if candidates else self.length


def tokenize_template(text: str) -> List[Token]:
    """
    Convenience function for tokenizing a template.

    Raises:
        TemplateSyntaxError: On an unterminated delimiter
    """
    lexer = TemplateLexer(text)
    return lexer.tokenize()


__all__ = ["TokenType", "Token", "TemplateLexer", "tokenize_template"]
