"""
Template facade: parse once, render many times.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from .body import BlockBody
from .parser import TemplateParser
from ..config import EngineConfig
from ..context import RenderContext
from ..errors import TemplateSyntaxError

logger = logging.getLogger(__name__)


class Template:
    """
    Parsed template.

    Immutable after parsing; render() may be called concurrently with
    different variables.
    """

    def __init__(self, root: BlockBody, config: EngineConfig, warnings: List[TemplateSyntaxError]):
        self.root = root
        self.config = config
        self.warnings = warnings

    @classmethod
    def parse(cls, source: str, config: Optional[EngineConfig] = None) -> Template:
        """
        Parses a template source.

        Args:
            source: Template text
            config: Engine config; defaults when omitted

        Raises:
            TemplateSyntaxError: On malformed markup
        """
        config = config or EngineConfig()
        warnings: List[TemplateSyntaxError] = []
        root = TemplateParser(config, warnings).parse(source)
        if warnings:
            logger.info("Template parsed with %d warning(s)", len(warnings))
        return cls(root, config, warnings)

    def render(self, variables: Optional[Mapping[str, Any]] = None, *,
               strict_variables: Optional[bool] = None) -> str:
        """
        Renders the template.

        Args:
            variables: Root scope variables
            strict_variables: Overrides the config flag for this call
        """
        if strict_variables is None:
            strict_variables = self.config.strict_variables
        context = RenderContext(variables, strict_variables=strict_variables)
        return self.root.render(context)


def render_template(source: str, variables: Optional[Mapping[str, Any]] = None,
                    config: Optional[EngineConfig] = None) -> str:
    """Parses and renders in one call."""
    return Template.parse(source, config).render(variables)


__all__ = ["Template", "render_template"]
