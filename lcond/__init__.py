"""
lcond: the conditional construct (if / elsif / else) of a Liquid-style
template language.
"""

from __future__ import annotations

from .config import EngineConfig, ParseMode, load_config
from .context import RenderContext
from .errors import (
    LCUserError,
    TemplateSyntaxError,
    UnsupportedComparisonError,
    IncomparableValuesError,
    UndefinedVariableError,
)
from .template import Template, render_template

__all__ = [
    "EngineConfig",
    "ParseMode",
    "load_config",
    "RenderContext",
    "LCUserError",
    "TemplateSyntaxError",
    "UnsupportedComparisonError",
    "IncomparableValuesError",
    "UndefinedVariableError",
    "Template",
    "render_template",
]
