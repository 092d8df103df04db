"""Desktop assistant core: config, logging, channels, module launcher and a small web server."""

__version__ = "0.1.0"