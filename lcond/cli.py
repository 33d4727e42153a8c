from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .conditions import evaluate_condition_string
from .config import EngineConfig, ParseMode, load_config
from .context import RenderContext
from .errors import LCUserError
from .template import Template
from .version import tool_version

_yaml = YAML(typ="safe")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="lcond",
        description="Conditional templates (if / elsif / else)",
        add_help=True,
    )
    p.add_argument("-V", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging to stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Arguments shared by all subcommands
    def add_common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "--mode",
            choices=[m.value for m in ParseMode],
            help="header grammar (overrides config and LCOND_ERROR_MODE)",
        )
        sp.add_argument(
            "--config",
            type=Path,
            metavar="FILE",
            help="YAML engine config",
        )

    def add_vars(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "--vars",
            type=Path,
            metavar="FILE",
            help="YAML mapping of template variables",
        )
        sp.add_argument(
            "--strict-variables",
            action="store_true",
            default=None,
            help="fail on undefined variables",
        )

    sp_render = sub.add_parser("render", help="render a template to stdout")
    sp_render.add_argument("template", help="template file, or - for stdin")
    add_common(sp_render)
    add_vars(sp_render)

    sp_check = sub.add_parser("check", help="parse a template and report syntax errors")
    sp_check.add_argument("template", help="template file, or - for stdin")
    add_common(sp_check)

    sp_eval = sub.add_parser("eval", help="evaluate one condition header")
    sp_eval.add_argument("expression", help="e.g. \"user.admin and count > 0\"")
    add_common(sp_eval)
    add_vars(sp_eval)

    return p


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose or os.environ.get("LCOND_DEBUG") else logging.WARNING
    root = logging.getLogger("lcond")
    root.setLevel(level)
    if not root.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        root.addHandler(h)


def _config(ns: argparse.Namespace) -> EngineConfig:
    cfg = load_config(ns.config)
    return cfg.with_overrides(
        error_mode=getattr(ns, "mode", None),
        strict_variables=getattr(ns, "strict_variables", None),
    )


def _read_template(arg: str) -> str:
    if arg == "-":
        return sys.stdin.read()
    path = Path(arg)
    if not path.is_file():
        raise LCUserError(f"Template file not found: {path}")
    return path.read_text(encoding="utf-8")


def _load_vars(path: Optional[Path]) -> Dict[str, Any]:
    """Reads the variables file; an empty file means no variables."""
    if path is None:
        return {}
    if not path.is_file():
        raise LCUserError(f"Variables file not found: {path}")
    try:
        data = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise LCUserError(f"Failed to parse {path}: {e}") from e
    if not isinstance(data, dict):
        raise LCUserError(f"Variables file {path} must be a mapping")
    return data


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.verbose)

    try:
        cfg = _config(ns)

        if ns.cmd == "render":
            template = Template.parse(_read_template(ns.template), cfg)
            sys.stdout.write(template.render(_load_vars(ns.vars)))
            return 0

        if ns.cmd == "check":
            template = Template.parse(_read_template(ns.template), cfg)
            for warning in template.warnings:
                sys.stderr.write(f"warning: {warning}\n")
            sys.stdout.write("OK\n")
            return 0

        if ns.cmd == "eval":
            context = RenderContext(_load_vars(ns.vars), strict_variables=cfg.strict_variables)
            result = evaluate_condition_string(
                ns.expression, context, cfg.error_mode, max_chain_length=cfg.max_chain_length
            )
            sys.stdout.write("true\n" if result else "false\n")
            return 0

    except LCUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
