"""
Tests for the comparator.
"""

import pytest

from lcond.conditions.comparator import ComparatorKind, compare
from lcond.errors import IncomparableValuesError, UnsupportedComparisonError
from lcond.expression import MethodLiteral


class TestComparator:

    @pytest.mark.parametrize("left, op, right, expected", [
        (1, "==", 1, True),
        (1, "==", 1.0, True),
        ("a", "==", "a", True),
        (1, "==", "1", False),
        (None, "==", None, True),
        (1, "!=", 2, True),
        ("a", "!=", "a", False),
        (1, "<", 2, True),
        (2, ">", 1, True),
        (2, "<=", 2, True),
        (1.5, ">=", 2, False),
        ("apple", "<", "banana", True),
    ])
    def test_relations(self, left, op, right, expected):
        assert compare(left, op, right) is expected

    def test_booleans_never_equal_numbers(self):
        assert compare(True, "==", 1) is False
        assert compare(0, "==", False) is False
        assert compare(True, "!=", 1) is True
        assert compare(True, "==", True) is True

    @pytest.mark.parametrize("left, right, expected", [
        ("hello world", "world", True),
        ("hello", "x", False),
        ("a1", 1, True),
        (["a", "b"], "b", True),
        (["a", "b"], "c", False),
        ({"k": 1}, "k", True),
        (range(1, 6), 3, True),
        (None, "x", False),
        (42, 4, False),
        ({"k": 1}, ["unhashable"], False),
        ("abc", None, False),
    ])
    def test_contains(self, left, right, expected):
        assert compare(left, "contains", right) is expected

    def test_ordering_incompatible_values(self):
        with pytest.raises(IncomparableValuesError, match="Comparison of int with str failed"):
            compare(1, "<", "2")

        with pytest.raises(IncomparableValuesError):
            compare(None, ">", 0)

        with pytest.raises(IncomparableValuesError):
            compare(True, ">", 0)

    def test_empty_and_blank_literals(self):
        empty = MethodLiteral("empty")
        blank = MethodLiteral("blank")

        assert compare("", "==", empty) is True
        assert compare([], "==", empty) is True
        assert compare({}, "==", empty) is True
        assert compare("x", "==", empty) is False
        assert compare(None, "==", empty) is False
        assert compare(empty, "==", "") is True

        assert compare("  ", "==", blank) is True
        assert compare(None, "==", blank) is True
        assert compare(False, "==", blank) is True
        assert compare("x", "!=", blank) is True

    def test_unsupported_operator(self):
        for op in ["<>", "=", "===", "=~", "in"]:
            with pytest.raises(UnsupportedComparisonError):
                compare(1, op, 1)

    def test_kind_from_symbol(self):
        assert ComparatorKind.from_symbol("contains") is ComparatorKind.CONTAINS
        assert {k.value for k in ComparatorKind} == {"==", "!=", "<", ">", "<=", ">=", "contains"}
