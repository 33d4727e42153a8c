"""
Template layer: lexer, tag dispatcher, bodies and the conditional construct.
"""

from __future__ import annotations

from .body import BlockBody
from .branches import Branch, BranchChain, ChainState, HeaderKind
from .nodes import OutputNode, TemplateNode, TextNode
from .parser import TemplateParser
from .template import Template, render_template

__all__ = [
    "BlockBody",
    "Branch",
    "BranchChain",
    "ChainState",
    "HeaderKind",
    "OutputNode",
    "TemplateNode",
    "TextNode",
    "TemplateParser",
    "Template",
    "render_template",
]
