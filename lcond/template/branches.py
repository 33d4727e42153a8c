"""
Branch chain of the conditional construct.

    {% if user.admin %}
      Admin user!
    {% elsif user.editor %}
      Editor
    {% else %}
      Not admin user
    {% endif %}

A chain is an ordered list of branches in source order: the ``if`` branch,
zero or more ``elsif`` branches and an optional trailing ``else``. At render
time the first branch whose guard holds is rendered and the rest are skipped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from .body import BlockBody
from ..conditions import ConditionEvaluator, parse_condition
from ..conditions.model import Condition
from ..conditions.parser import DEFAULT_MAX_CHAIN_LENGTH
from ..config import ParseMode
from ..context import RenderContext
from ..errors import TemplateSyntaxError

logger = logging.getLogger(__name__)


class HeaderKind(Enum):
    """Kind of a branch header, decided once by the tag dispatcher."""
    IF = "if"
    ELSIF = "elsif"
    ELSE = "else"
    END = "endif"

    @classmethod
    def from_tag(cls, name: str) -> Optional[HeaderKind]:
        for kind in cls:
            if kind.value == name:
                return kind
        return None


class ChainState(Enum):
    """Construction state of a branch chain."""
    AWAITING_BRANCH = "awaiting_branch"
    ELSE = "else"
    CLOSED = "closed"


@dataclass
class Branch:
    """One arm of the construct. ``guard`` is None only for ``else``."""
    guard: Optional[Condition]
    body: BlockBody = field(default_factory=BlockBody)

    @property
    def unconditional(self) -> bool:
        return self.guard is None


class BranchChain:
    """
    Conditional construct: construction state machine plus render selector.

    The parse mode is fixed at construction and used for every header.
    """

    def __init__(
        self,
        markup: str,
        mode: Union[ParseMode, str] = ParseMode.LAX,
        *,
        max_chain_length: int = DEFAULT_MAX_CHAIN_LENGTH,
        warnings: Optional[List[TemplateSyntaxError]] = None,
    ):
        """
        Creates the chain with its ``if`` branch.

        Args:
            markup: Header text after ``if``
            mode: Header grammar (lax, warn, strict)
            max_chain_length: Maximum comparisons in one header
            warnings: Collects recovered strict errors in warn mode

        Raises:
            TemplateSyntaxError: If the header is malformed
        """
        self.mode = ParseMode.coerce(mode)
        self.max_chain_length = max_chain_length
        self.warnings = warnings
        self.branches: List[Branch] = []
        self.state = ChainState.AWAITING_BRANCH

        self._push(self._parse(markup))

    @property
    def current_body(self) -> BlockBody:
        """Body of the most recently pushed branch."""
        return self.branches[-1].body

    def push_elsif(self, markup: str) -> None:
        """
        Adds an ``elsif`` branch.

        Raises:
            TemplateSyntaxError: After ``else``, after close, or on a malformed header
        """
        if self.state is ChainState.ELSE:
            raise TemplateSyntaxError("'elsif' after 'else'", markup)
        self._ensure_open("elsif")
        self._push(self._parse(markup))

    def push_else(self, markup: str = "") -> None:
        """
        Adds the unconditional ``else`` branch.

        Arguments after ``else`` are an error in strict mode and ignored otherwise.

        Raises:
            TemplateSyntaxError: On a second ``else`` or after close
        """
        if self.state is ChainState.ELSE:
            raise TemplateSyntaxError("Duplicate 'else'", markup or None)
        self._ensure_open("else")

        if markup.strip():
            if self.mode is ParseMode.STRICT:
                raise TemplateSyntaxError("'else' does not take arguments", markup)
            logger.warning("Ignoring arguments of 'else': %r", markup.strip())

        self._push(None)
        self.state = ChainState.ELSE

    def close(self) -> None:
        """
        Ends construction.

        If every branch body is blank, whitespace-only text is removed from all
        of them so a logic-only construct emits no stray whitespace.
        """
        self._ensure_open("endif")
        self.state = ChainState.CLOSED

        if self.blank:
            for branch in self.branches:
                branch.body.remove_blank_strings()

    @property
    def closed(self) -> bool:
        return self.state is ChainState.CLOSED

    @property
    def blank(self) -> bool:
        return all(branch.body.blank for branch in self.branches)

    def render(self, context: RenderContext) -> str:
        """
        Renders the first branch whose guard holds.

        Guards after the selected branch are not evaluated. No match
        renders nothing.
        """
        evaluator = ConditionEvaluator(context)

        for index, branch in enumerate(self.branches):
            if branch.guard is None or evaluator.evaluate(branch.guard):
                logger.debug("Selected branch %d of %d (%s)", index + 1, len(self.branches),
                             branch.guard if branch.guard is not None else "else")
                return branch.body.render(context)

        return ""

    def _parse(self, markup: str) -> Condition:
        condition = parse_condition(
            markup,
            self.mode,
            max_chain_length=self.max_chain_length,
            warnings=self.warnings,
        )
        logger.debug("Parsed branch header %r as %s", markup, condition)
        return condition

    def _push(self, guard: Optional[Condition]) -> None:
        self.branches.append(Branch(guard))

    def _ensure_open(self, tag: str) -> None:
        if self.state is ChainState.CLOSED:
            raise TemplateSyntaxError(f"'{tag}' after the construct was closed")

    def __repr__(self) -> str:
        return f"BranchChain({len(self.branches)} branches, {self.state.value})"


__all__ = ["HeaderKind", "ChainState", "Branch", "BranchChain"]
