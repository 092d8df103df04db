"""Dispatch of spoken commands."""

from __future__ import annotations

import logging
from collections.abc import Callable

log = logging.getLogger(__name__)

_MISSING = "<missing>"


def open_app(target: str) -> None:
    """Handle an ``open`` command."""
    log.info("Opening: %s", target)


def handler(text: str) -> list[tuple[str, str]]:
    """Run every command word found in ``text`` on the word that follows it.

    Returns the (command, target) pairs that were dispatched.
    """
    commands: dict[str, Callable[[str], None]] = {"open": open_app}
    tokens = text.split()
    targets = tokens[1:] + [_MISSING]
    dispatched = []
    for token, target in zip(tokens, targets):
        command = commands.get(token.lower())
        if command is None:
            continue
        log.info("CMD: '%s', Target: '%s'", token, target)
        if target != _MISSING:
            command(target)
            dispatched.append((token, target))
    return dispatched