"""A short throbber shown while starting up."""

from __future__ import annotations

import sys
import time
from collections.abc import Iterator
from typing import TextIO

TEXT = "Starting up..."
THROBBER_FRAMES = (
    "■□□□□",
    "□■□□□",
    "□□■□□",
    "□□□■□",
    "□□□□■",
    "□□□■□",
    "□□■□□",
    "□■□□□",
)
_WIDTH = max(len(frame.encode("utf-8")) for frame in THROBBER_FRAMES)


def frames(text: str = TEXT) -> Iterator[str]:
    """Yield what is written for each character of ``text``; the last one clears the line."""
    last = len(text) - 1
    for i, _ in enumerate(text):
        if i < last:
            yield "\r" + THROBBER_FRAMES[i % len(THROBBER_FRAMES)].ljust(_WIDTH)
        else:
            yield "\r" + " " * _WIDTH + "\r"


def animate(stream: TextIO | None = None, delay: float = 0.1) -> None:
    """Play the throbber on ``stream`` (stdout by default)."""
    out = stream if stream is not None else sys.stdout
    for frame in frames():
        out.write(frame)
        out.flush()
        time.sleep(delay)