"""
Tests for the strict condition parser.
"""

import pytest

from lcond.conditions.model import BooleanOp
from lcond.conditions.parser import ConditionParser
from lcond.errors import TemplateSyntaxError
from lcond.expression import Literal, RangeLookup, VariableLookup


class TestConditionParser:

    def setup_method(self):
        self.parser = ConditionParser()

    def test_empty_condition_error(self):
        with pytest.raises(TemplateSyntaxError, match="Empty condition"):
            self.parser.parse("")

        with pytest.raises(TemplateSyntaxError, match="Empty condition"):
            self.parser.parse("   ")

    def test_bare_operand(self):
        result = self.parser.parse("user.admin")

        assert isinstance(result.left, VariableLookup)
        assert result.left.name == "user"
        assert result.left.lookups == ("admin",)
        assert result.operator is None
        assert result.right is None
        assert result.next is None

    def test_comparison(self):
        result = self.parser.parse("count >= 10")

        assert result.operator == ">="
        assert isinstance(result.right, Literal)
        assert result.right.value == 10

    def test_string_and_range_operands(self):
        result = self.parser.parse("'abc' contains \"b\"")
        assert result.left.value == "abc"
        assert result.right.value == "b"

        result = self.parser.parse("(1..count) contains 2")
        assert isinstance(result.left, RangeLookup)
        assert str(result.left) == "(1..count)"

    def test_bracket_lookups(self):
        result = self.parser.parse("user['first name'] == page[key].title")

        assert str(result.left) == "user['first name']"
        assert str(result.right) == "page[key].title"

    def test_chain_in_source_order(self):
        """Head is the first comparison, each next the following one"""
        result = self.parser.parse("a and b or c == 1")

        links = list(result.links())
        assert [str(link.left) for link in links] == ["a", "b", "c"]
        assert [link.combinator for link in links] == [BooleanOp.AND, BooleanOp.OR, None]
        assert links[2].operator == "=="

    def test_str_round_trip(self):
        assert str(self.parser.parse("a  and b   ==  1 or c")) == "a and b == 1 or c"

    def test_trailing_input_rejected(self):
        with pytest.raises(TemplateSyntaxError, match="trailing input 'garbage'"):
            self.parser.parse("x == 1 garbage")

    def test_unsupported_operator_rejected(self):
        with pytest.raises(TemplateSyntaxError, match="not a valid expression"):
            self.parser.parse("x <> 1")

    def test_dangling_keyword(self):
        with pytest.raises(TemplateSyntaxError, match="expected an operand"):
            self.parser.parse("x and")

        with pytest.raises(TemplateSyntaxError, match="expected an operand"):
            self.parser.parse("x == 1 or")

    def test_missing_right_operand(self):
        with pytest.raises(TemplateSyntaxError, match="expected an operand"):
            self.parser.parse("x ==")

    def test_uppercase_keywords_are_not_boundaries(self):
        with pytest.raises(TemplateSyntaxError, match="trailing input 'AND'"):
            self.parser.parse("a AND b")

    def test_unclosed_bracket(self):
        with pytest.raises(TemplateSyntaxError, match="Expected RBRACKET"):
            self.parser.parse("a[0")

    def test_dot_requires_name(self):
        with pytest.raises(TemplateSyntaxError, match="Expected IDENTIFIER"):
            self.parser.parse("a. == 1")

    def test_chain_length_limit(self):
        parser = ConditionParser(max_chain_length=3)
        parser.parse("a or b or c")

        with pytest.raises(TemplateSyntaxError, match="longer than 3"):
            parser.parse("a or b or c or d")

    def test_error_carries_markup(self):
        with pytest.raises(TemplateSyntaxError) as exc_info:
            self.parser.parse("x == 1 garbage")
        assert exc_info.value.markup == "x == 1 garbage"

    def test_keyword_is_not_an_operand(self):
        with pytest.raises(TemplateSyntaxError, match="Expected an operand but found 'and'"):
            self.parser.parse("and")

        with pytest.raises(TemplateSyntaxError, match="found 'or'"):
            self.parser.parse("a and or b")
