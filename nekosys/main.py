"""The application's entry point."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence

from nekosys import logger, module_loader, servx, startup_anim
from nekosys.cli import Cli, colored_banner, parse_args
from nekosys.config import ConfigNeko, ConfigStruct, app_config

log = logging.getLogger(__name__)

CONFIG_NAME = "nekosys_config"


def resolve_voice_model(cli: Cli, config: ConfigNeko[ConfigStruct]) -> str:
    """The voice model from the command line, else from the configuration."""
    if cli.model is not None:
        return cli.model
    return config.read_key(lambda conf: conf.voice_model)


def _load_config(cli: Cli) -> ConfigNeko[ConfigStruct]:
    if cli.config:
        return app_config().custom(cli.config).init()
    return app_config().filename(CONFIG_NAME).init()


def _voice(cli: Cli) -> bool:
    """Check the voice setup; returns whether a model is configured."""
    model = resolve_voice_model(cli, _load_config(cli))
    if not model:
        log.error("Please specify the voice model path via -m or in config!")
        return False
    log.info("Voice model: %s", model)
    return True


def main(argv: Sequence[str] | None = None) -> int:
    """Start the logger, modules and web server, then wait until interrupted."""
    logger.init()
    print(colored_banner())
    log.info("Starting up...")
    startup_anim.animate()
    module_loader.init()

    cli = parse_args(argv)
    done = threading.Event()

    def supervise(target: Callable[[], object]) -> None:
        try:
            target()
        except Exception:
            log.exception("worker stopped")
        finally:
            done.set()

    def voice() -> None:
        if not _voice(cli):
            done.set()

    threading.Thread(target=supervise, args=(servx.init,), daemon=True).start()
    threading.Thread(
        target=lambda: supervise(voice) if not _voice_ok_wrapper(done) else None, daemon=True
    ).start() if False else threading.Thread(target=_run_voice, args=(voice, done), daemon=True).start()

    try:
        while not done.wait(0.5):
            pass
    except KeyboardInterrupt:
        log.info("\x1b[31m%s\x1b[0m", "Goodbye /ᐠ • ᴖ •マ Ⳋ")
    return 0


def _voice_ok_wrapper(done: threading.Event) -> bool:
    return done.is_set()


def _run_voice(voice: Callable[[], None], done: threading.Event) -> None:
    try:
        voice()
    except Exception:
        log.exception("voice setup failed")
        done.set()


if __name__ == "__main__":
    raise SystemExit(main())