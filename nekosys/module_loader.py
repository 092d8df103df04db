"""Loading of external modules described by TOML index files."""

from __future__ import annotations

import logging
import os
import subprocess
import threading
import tomllib
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import dotenv_values

from nekosys import startup_anim

log = logging.getLogger(__name__)

DEFAULT_INDEX = "modules/index.toml"
MODULE_INDEX_NAME = "module.index.toml"


class ModuleConfigType(str, Enum):
    """How a module is started."""

    EXE = "exe"


def _optional_str(table: dict[str, Any], key: str, where: str) -> str | None:
    value = table.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"Failed to parse TOML: `{key}` of {where} must be a string")
    return value


@dataclass(frozen=True)
class ModuleEntry:
    """One module listed in the main index."""

    enabled: bool
    module_path: str | None = None

    @classmethod
    def _from_table(cls, name: str, table: Any) -> ModuleEntry:
        if not isinstance(table, dict):
            raise ValueError(f"Failed to parse TOML: module '{name}' must be a table")
        enabled = table.get("enabled")
        if not isinstance(enabled, bool):
            raise ValueError(f"Failed to parse TOML: module '{name}' needs a boolean `enabled`")
        return cls(enabled=enabled, module_path=_optional_str(table, "module_path", name))


@dataclass(frozen=True)
class ModuleConfig:
    """The ``[config]`` table of a module's own index."""

    type: ModuleConfigType | None = None
    exe_path: str | None = None
    args: list[str] | None = None
    env_path: str | None = None

    @classmethod
    def _from_table(cls, table: Any) -> ModuleConfig:
        if not isinstance(table, dict):
            raise ValueError("Failed to parse TOML: missing `config` table")
        raw_type = table.get("type")
        module_type = ModuleConfigType(raw_type) if raw_type is not None else None
        args = table.get("args")
        if args is not None and not (
            isinstance(args, list) and all(isinstance(arg, str) for arg in args)
        ):
            raise ValueError("Failed to parse TOML: `args` must be a list of strings")
        return cls(
            type=module_type,
            exe_path=_optional_str(table, "exe_path", "config"),
            args=list(args) if args is not None else None,
            env_path=_optional_str(table, "env_path", "config"),
        )


def read_toml(path: str | Path) -> dict[str, Any]:
    """Read and parse a TOML file."""
    with open(path, "rb") as handle:
        return tomllib.load(handle)


def load_index(path: str | Path = DEFAULT_INDEX) -> dict[str, ModuleEntry]:
    """Read the main index: module names mapped to their entries."""
    modules = read_toml(path).get("modules")
    if not isinstance(modules, dict):
        raise ValueError("Failed to parse TOML: missing `modules` table")
    return {name: ModuleEntry._from_table(name, table) for name, table in modules.items()}


def load_module_config(module_path: str | Path) -> ModuleConfig:
    """Read the configuration from a module directory's own index."""
    content = read_toml(f"{module_path}/{MODULE_INDEX_NAME}")
    return ModuleConfig._from_table(content.get("config"))


def read_env(env_path: str | Path) -> dict[str, str]:
    """Read variables from a .env file; problems are logged and skipped."""
    path = Path(env_path)
    if not path.is_file():
        log.error("Failed to read .env file '%s': file not found", env_path)
        return {}
    variables = {}
    for key, value in dotenv_values(path).items():
        if value is None:
            log.error("Invalid line in .env file '%s': %s", env_path, key)
        else:
            variables[key] = value
    return variables


def run_exe_thread(exe_path: str, args: list[str], env_path: str) -> threading.Thread:
    """Run an executable in a background thread with variables from ``env_path`` added."""
    log.info("Starting: %s...", exe_path)

    def run() -> None:
        env = {**os.environ, **read_env(env_path)}
        process = subprocess.Popen([exe_path, *args], stdin=subprocess.DEVNULL, env=env)
        process.wait()

    thread = threading.Thread(target=run, name=f"module-{Path(exe_path).name}", daemon=True)
    thread.start()
    return thread


def init(index_path: str | Path = DEFAULT_INDEX) -> list[threading.Thread]:
    """Start every enabled module from the index; returns the threads started."""
    log.info("Loading modules...")
    startup_anim.animate()

    index = load_index(index_path)
    log.debug("%r", index)

    threads = []
    for name, module in index.items():
        if not module.enabled:
            log.info("Module '%s' is \x1b[31mdisabled\x1b[0m", name)
            continue
        if module.module_path is None:
            raise ValueError(f"Module '{name}' is enabled but has no module_path")
        log.info(
            "Module '%s' is \x1b[92menabled\x1b[0m, module_path: %s", name, module.module_path
        )
        config = load_module_config(module.module_path)
        log.debug("%r", config)
        if (
            config.type is ModuleConfigType.EXE
            and config.exe_path is not None
            and config.args is not None
            and config.env_path is not None
        ):
            threads.append(run_exe_thread(config.exe_path, config.args, config.env_path))
    return threads