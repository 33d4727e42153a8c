"""
Template parser and tag dispatcher.

Builds a BlockBody from template tokens. Only the conditional construct is a
tag here: ``if`` opens a BranchChain, ``elsif`` / ``else`` / ``endif`` end the
body being parsed and are handed back to the enclosing chain. Any other tag
name is an error.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

from .body import BlockBody
from .branches import BranchChain, HeaderKind
from .lexer import Token, TokenType, tokenize_template
from .nodes import OutputNode, TextNode
from ..config import EngineConfig
from ..errors import TemplateSyntaxError
from ..expression import parse_operand

_TAG = re.compile(r"\A(\w+)\s*(.*)\Z", re.DOTALL)


@dataclass(frozen=True)
class TagHeader:
    """Tag name and markup of a {% ... %} token."""
    name: str
    markup: str
    line: int

    @property
    def kind(self) -> Optional[HeaderKind]:
        return HeaderKind.from_tag(self.name)


class ParsingContext:
    """
    Navigation over template tokens.
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.position = 0

    def current(self) -> Token:
        return self.tokens[min(self.position, len(self.tokens) - 1)]

    def advance(self) -> Token:
        token = self.current()
        if not self.is_at_end():
            self.position += 1
        return token

    def is_at_end(self) -> bool:
        return self.current().type == TokenType.EOF


class TemplateParser:
    """
    Recursive parser of template bodies.

    Nesting of conditional constructs is bounded by ``max_nesting_depth``.
    """

    def __init__(self, config: EngineConfig, warnings: Optional[List[TemplateSyntaxError]] = None):
        self.config = config
        self.warnings: List[TemplateSyntaxError] = warnings if warnings is not None else []
        self._depth = 0

    def parse(self, source: str) -> BlockBody:
        """
        Parses a template source.

        Raises:
            TemplateSyntaxError: On malformed markup, unknown or unbalanced tags
        """
        context = ParsingContext(tokenize_template(source))
        body = BlockBody()

        header = self.parse_body(body, context)
        if header is not None:
            raise TemplateSyntaxError(f"Unexpected '{header.name}' outside of 'if'", None, header.line)

        return body

    def parse_body(self, body: BlockBody, context: ParsingContext) -> Optional[TagHeader]:
        """
        Appends nodes to ``body`` until a branch header or the end of input.

        Returns:
            The ``elsif`` / ``else`` / ``endif`` header that ended the body,
            or None at the end of input
        """
        while not context.is_at_end():
            token = context.advance()

            if token.type == TokenType.TEXT:
                body.append(TextNode(token.value))
            elif token.type == TokenType.OUTPUT:
                body.append(self._parse_output(token))
            else:
                header = self._parse_tag_header(token)
                kind = header.kind
                if kind is HeaderKind.IF:
                    body.append(self._parse_if(header, context))
                elif kind is not None:
                    return header
                else:
                    raise TemplateSyntaxError(f"Unknown tag '{header.name}'", token.value, token.line)

        return None

    def _parse_if(self, header: TagHeader, context: ParsingContext) -> BranchChain:
        self._depth += 1
        try:
            if self._depth > self.config.max_nesting_depth:
                raise TemplateSyntaxError(
                    f"Nesting too deep (more than {self.config.max_nesting_depth} levels)",
                    header.markup, header.line,
                )

            chain = self._with_line(header, lambda: BranchChain(
                header.markup,
                self.config.error_mode,
                max_chain_length=self.config.max_chain_length,
                warnings=self.warnings,
            ))

            while True:
                next_header = self.parse_body(chain.current_body, context)
                if next_header is None:
                    raise TemplateSyntaxError("'if' tag was never closed", header.markup, header.line)

                kind = next_header.kind
                if kind is HeaderKind.END:
                    self._with_line(next_header, chain.close)
                    return chain
                if kind is HeaderKind.ELSIF:
                    self._with_line(next_header, lambda: chain.push_elsif(next_header.markup))
                elif kind is HeaderKind.ELSE:
                    self._with_line(next_header, lambda: chain.push_else(next_header.markup))
        finally:
            self._depth -= 1

    @staticmethod
    def _with_line(header: TagHeader, action):
        try:
            return action()
        except TemplateSyntaxError as e:
            raise e.with_line(header.line)

    @staticmethod
    def _parse_tag_header(token: Token) -> TagHeader:
        match = _TAG.match(token.value)
        if not match:
            raise TemplateSyntaxError("Malformed tag", token.value, token.line)
        return TagHeader(match.group(1), match.group(2).strip(), token.line)

    @staticmethod
    def _parse_output(token: Token) -> OutputNode:
        try:
            return OutputNode(parse_operand(token.value))
        except TemplateSyntaxError as e:
            raise TemplateSyntaxError(e.message, token.value, token.line) from None


__all__ = ["TagHeader", "ParsingContext", "TemplateParser"]
