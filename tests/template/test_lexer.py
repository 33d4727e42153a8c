"""
Tests for the template lexer.
"""

import pytest

from lcond.errors import TemplateSyntaxError
from lcond.template.lexer import TemplateLexer, TokenType, tokenize_template


class TestTemplateLexer:

    def test_empty_template(self):
        tokens = TemplateLexer("").tokenize()

        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF
        assert tokens[0].position == 0
        assert tokens[0].line == 1
        assert tokens[0].column == 1

    def test_plain_text(self):
        tokens = tokenize_template("Hello, world!")

        assert [t.type for t in tokens] == [TokenType.TEXT, TokenType.EOF]
        assert tokens[0].value == "Hello, world!"

    def test_tag_and_output(self):
        tokens = tokenize_template("a{% if x %}b{{ x }}{%endif%}")

        assert [t.type for t in tokens] == [
            TokenType.TEXT, TokenType.TAG, TokenType.TEXT, TokenType.OUTPUT, TokenType.TAG, TokenType.EOF
        ]
        assert tokens[1].value == "if x"
        assert tokens[3].value == "x"
        assert tokens[4].value == "endif"

    def test_positions(self):
        tokens = tokenize_template("line 1\n  {% if x %}\n{{ y }}")

        tag = tokens[1]
        assert tag.position == 9
        assert (tag.line, tag.column) == (2, 3)

        output = tokens[3]
        assert (output.line, output.column) == (3, 1)

    def test_tag_markup_may_span_lines(self):
        tokens = tokenize_template("{% if a\n   and b %}")
        assert tokens[0].value == "if a\n   and b"
        assert tokens[1].line == 2

    def test_lone_braces_are_text(self):
        tokens = tokenize_template("{ x } % }")
        assert [t.type for t in tokens] == [TokenType.TEXT, TokenType.EOF]

    @pytest.mark.parametrize("source, message", [
        ("{% if x", "'{%' was not properly terminated with '%}'"),
        ("text {{ x", "'{{' was not properly terminated with '}}'"),
        ("{{ x %}", "'{{' was not properly terminated"),
    ])
    def test_unterminated(self, source, message):
        with pytest.raises(TemplateSyntaxError, match=message):
            tokenize_template(source)

    def test_unterminated_reports_line(self):
        with pytest.raises(TemplateSyntaxError) as exc_info:
            tokenize_template("a\nb\n{% if")
        assert exc_info.value.line == 3
