"""Small helpers for paths and opening things."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path


def root_path() -> Path:
    """The parent of the current working directory."""
    return Path.cwd().parent


def open_url(url: str) -> subprocess.CompletedProcess:
    """Open a link or path with the platform's default handler."""
    if sys.platform == "win32":
        command = ["cmd", "/C", "start", url]
    elif sys.platform == "darwin":
        command = ["open", url]
    else:
        command = ["xdg-open", url]
    return subprocess.run(command, capture_output=True)