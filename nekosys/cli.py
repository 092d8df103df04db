"""Command-line interface: banner and argument parsing."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from dataclasses import dataclass

_NAME = "NekoSys"
_VERSION = "0.1.0"
_BANNER_RGB = (132, 21, 83)


def _build_banner() -> str:
    title = " ".join(_NAME.upper())
    width = len(title) + 8
    rows = [
        "",
        "╔" + "═" * width + "╗",
        "║" + " " * width + "║",
        "║" + title.center(width) + "║",
        "║" + " " * width + "║",
        "╚" + "═" * width + "╝",
        f"♡ {_NAME} / v{_VERSION}".rjust(width + 2),
        "",
    ]
    return "\n".join(rows)


BANNER = _build_banner()


def colored_banner() -> str:
    """The banner in the application's true colour."""
    red, green, blue = _BANNER_RGB
    return f"\x1b[38;2;{red};{green};{blue}m{BANNER}\x1b[0m"


@dataclass(frozen=True)
class Cli:
    """Parsed command-line options."""

    config: str | None = None
    model: str | None = None
    web: bool = False


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog=_NAME,
        description=colored_banner(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-c", "--config", metavar="CONFIG", default=None)
    parser.add_argument("-m", "--model", metavar="MODEL", default=None)
    parser.add_argument("-w", "--web", action="store_true")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> Cli:
    """Parse ``argv`` (the process arguments by default) into a Cli."""
    namespace = build_parser().parse_args(argv)
    return Cli(config=namespace.config, model=namespace.model, web=namespace.web)