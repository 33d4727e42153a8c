"""
Binary relations between two resolved runtime values.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from numbers import Number
from typing import Any, Callable, Dict

from ..errors import IncomparableValuesError, UnsupportedComparisonError
from ..expression import MethodLiteral


class ComparatorKind(Enum):
    """Recognized comparison operators."""
    EQ = "=="
    NE = "!="
    LT = "<"
    GT = ">"
    LE = "<="
    GE = ">="
    CONTAINS = "contains"

    @classmethod
    def from_symbol(cls, symbol: str) -> ComparatorKind:
        """
        Raises:
            UnsupportedComparisonError: For any symbol outside the set
        """
        try:
            return cls(symbol)
        except ValueError:
            raise UnsupportedComparisonError(symbol) from None


def _equal(left: Any, right: Any) -> bool:
    if isinstance(left, MethodLiteral):
        return left.matches(right) if not isinstance(right, MethodLiteral) else left == right
    if isinstance(right, MethodLiteral):
        return right.matches(left)
    # true/false never equal numbers
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    return left == right


def _orderable(left: Any, right: Any) -> bool:
    if isinstance(left, bool) or isinstance(right, bool):
        return False
    if isinstance(left, Number) and isinstance(right, Number):
        return True
    return isinstance(left, str) and isinstance(right, str)


def _contains(left: Any, right: Any) -> bool:
    if isinstance(left, str):
        return right is not None and str(right) in left
    if isinstance(left, (list, tuple, range, set, frozenset, Mapping)):
        try:
            return right in left
        except TypeError:
            # unhashable needle in a set or mapping
            return False
    return False


def _ordering(symbol: str, relation: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    def compare(left: Any, right: Any) -> bool:
        if not _orderable(left, right):
            raise IncomparableValuesError(left, symbol, right)
        return relation(left, right)
    return compare


_RELATIONS: Dict[ComparatorKind, Callable[[Any, Any], bool]] = {
    ComparatorKind.EQ: _equal,
    ComparatorKind.NE: lambda left, right: not _equal(left, right),
    ComparatorKind.LT: _ordering("<", lambda left, right: left < right),
    ComparatorKind.GT: _ordering(">", lambda left, right: left > right),
    ComparatorKind.LE: _ordering("<=", lambda left, right: left <= right),
    ComparatorKind.GE: _ordering(">=", lambda left, right: left >= right),
    ComparatorKind.CONTAINS: _contains,
}


def compare(left: Any, operator: str, right: Any) -> bool:
    """
    Applies a comparison operator to two resolved values.

    Args:
        left: Left value
        operator: Operator symbol as written in the markup
        right: Right value

    Returns:
        Result of the comparison

    Raises:
        UnsupportedComparisonError: If the operator is not recognized
        IncomparableValuesError: If an ordering is requested between incompatible values
    """
    kind = ComparatorKind.from_symbol(operator)
    return _RELATIONS[kind](left, right)


__all__ = ["ComparatorKind", "compare"]
