"""
Utilities for working with the CLI in tests.
"""

import os
import subprocess
import sys
from pathlib import Path
from typing import Optional

REPO_ROOT = Path(__file__).resolve().parents[2]


def run_cli(root: Path, *args: str, stdin: Optional[str] = None) -> subprocess.CompletedProcess:
    """
    Runs lcond.cli with the given arguments in the given directory.

    Args:
        root: Working directory
        *args: Command line arguments
        stdin: Text fed to standard input

    Returns:
        CompletedProcess with captured output
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(REPO_ROOT), env.get("PYTHONPATH")]))
    env.pop("LCOND_ERROR_MODE", None)
    env.pop("LCOND_DEBUG", None)
    return subprocess.run(
        [sys.executable, "-m", "lcond.cli", *args],
        cwd=root, env=env, capture_output=True, text=True, encoding="utf-8", input=stdin,
    )
