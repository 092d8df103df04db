"""JSON-backed configuration files built around a dataclass model."""

from __future__ import annotations

import dataclasses
import json
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any, Generic, TypeVar

T = TypeVar("T")
R = TypeVar("R")


@dataclasses.dataclass
class ConfigStruct:
    """The application's own configuration."""

    voice_model: str = ""


def _default_location() -> Path:
    return Path(sys.argv[0]).resolve().parent


def _dump(data: Any, *, sort_keys: bool = False) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, sort_keys=sort_keys)


class ConfigNeko(Generic[T]):
    """A configuration file whose contents map onto a dataclass ``model``.

    The builder methods return the instance itself so calls can be chained.
    """

    def __init__(self, model: type[T], location: str | Path | None = None) -> None:
        if not dataclasses.is_dataclass(model):
            raise TypeError("config model must be a dataclass type")
        self._model = model
        self._filename = ""
        self._location = Path(location) if location is not None else _default_location()
        self._custom: Path | None = None

    def filename(self, filename: str) -> ConfigNeko[T]:
        """Set the file name, without the ``.json`` extension."""
        self._filename = str(filename)
        return self

    def location(self, location: str | Path) -> ConfigNeko[T]:
        """Set the directory the configuration file lives in."""
        self._location = Path(location)
        return self

    def custom(self, full_path: str | Path) -> ConfigNeko[T]:
        """Use an explicit file path; also sets location and file name from it."""
        path = Path(full_path)
        self._location = path.parent
        if path.name:
            self._filename = path.name
        self._custom = path
        return self

    def path(self) -> Path:
        """The file that is read and written."""
        if self._custom is not None and self._custom.exists():
            return self._custom
        return self._location / f"{self._filename}.json"

    def init(self) -> ConfigNeko[T]:
        """Create the file with the model's defaults if it does not exist."""
        config_path = self.path()
        if not config_path.exists():
            default = dataclasses.asdict(self._model())
            self._location.mkdir(parents=True, exist_ok=True)
            config_path.write_text(_dump(default), encoding="utf-8")
        return self

    def read(self) -> T:
        """Load the file into a model instance."""
        data = json.loads(self.path().read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("Failed to deserialize config: expected a JSON object")
        values = {}
        for field in dataclasses.fields(self._model):
            if field.name not in data:
                raise ValueError(f"Failed to deserialize config: missing field `{field.name}`")
            values[field.name] = data[field.name]
        return self._model(**values)

    def read_key(self, get_fn: Callable[[T], R]) -> R:
        """Load the file and return ``get_fn`` applied to it."""
        return get_fn(self.read())

    def write(self, data: T) -> None:
        """Replace the file's contents with ``data``."""
        self.path().write_text(_dump(dataclasses.asdict(data)), encoding="utf-8")

    def set(self, key: str, value: Any) -> None:
        """Set a single top-level key in the file."""
        path = self.path()
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("Config file is not a valid JSON object")
        data[str(key)] = value
        path.write_text(_dump(data, sort_keys=True), encoding="utf-8")


def init(model: type[T]) -> ConfigNeko[T]:
    """Start building a configuration for ``model``."""
    return ConfigNeko(model)


def app_config() -> ConfigNeko[ConfigStruct]:
    """Start building the application's configuration."""
    return init(ConfigStruct)