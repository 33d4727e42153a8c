"""
Utilities for creating files and directories in tests.
"""

from __future__ import annotations

from pathlib import Path


def write(p: Path, text: str) -> Path:
    """
    Writes text to a file, creating parent directories when needed.

    Returns:
        Path of the written file
    """
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p
