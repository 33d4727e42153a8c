"""
Shared test infrastructure.

Modules:
- file_utils: creating files and directories
- cli_utils: running the lcond CLI in a subprocess
- spy: operands that record their resolution
"""

from .file_utils import write
from .cli_utils import run_cli
from .spy import SpyExpression, spy_condition

__all__ = ["write", "run_cli", "SpyExpression", "spy_condition"]
