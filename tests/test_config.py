import dataclasses
import json
import sys
from pathlib import Path

import pytest

from nekosys.config import ConfigNeko, ConfigStruct, app_config, init


@dataclasses.dataclass
class Sample:
    name: str = "neko"
    count: int = 3


def test_init_writes_defaults(tmp_path):
    cfg = ConfigNeko(ConfigStruct, tmp_path).filename("cfg").init()
    path = tmp_path / "cfg.json"
    assert cfg.path() == path
    assert path.read_text(encoding="utf-8") == '{\n  "voice_model": ""\n}'


def test_init_creates_missing_directory(tmp_path):
    target = tmp_path / "a" / "b"
    cfg = init(Sample).location(target).filename("s").init()
    assert cfg.read() == Sample()


def test_init_keeps_existing_file(tmp_path):
    (tmp_path / "cfg.json").write_text('{"voice_model": "kept"}', encoding="utf-8")
    cfg = ConfigNeko(ConfigStruct, tmp_path).filename("cfg").init()
    assert cfg.read() == ConfigStruct(voice_model="kept")


def test_write_read_round_trip(tmp_path):
    cfg = ConfigNeko(Sample, tmp_path).filename("s").init()
    cfg.write(Sample(name="mochi", count=9))
    assert cfg.read() == Sample(name="mochi", count=9)
    assert cfg.read_key(lambda c: c.count) == 9


def test_set_updates_key(tmp_path):
    cfg = ConfigNeko(ConfigStruct, tmp_path).filename("cfg").init()
    cfg.set("voice_model", "models/small")
    assert cfg.read_key(lambda c: c.voice_model) == "models/small"


def test_set_adds_unknown_key_and_read_ignores_it(tmp_path):
    cfg = ConfigNeko(ConfigStruct, tmp_path).filename("cfg").init()
    cfg.set("extra", [1, 2])
    data = json.loads(cfg.path().read_text(encoding="utf-8"))
    assert data == {"extra": [1, 2], "voice_model": ""}
    assert cfg.read() == ConfigStruct()


def test_set_on_non_object_raises(tmp_path):
    (tmp_path / "cfg.json").write_text("[1, 2]", encoding="utf-8")
    cfg = ConfigNeko(ConfigStruct, tmp_path).filename("cfg")
    with pytest.raises(ValueError, match="not a valid JSON object"):
        cfg.set("voice_model", "x")


def test_read_missing_field_raises(tmp_path):
    (tmp_path / "s.json").write_text('{"name": "x"}', encoding="utf-8")
    cfg = ConfigNeko(Sample, tmp_path).filename("s")
    with pytest.raises(ValueError, match="count"):
        cfg.read()


def test_read_missing_file_raises(tmp_path):
    cfg = ConfigNeko(ConfigStruct, tmp_path).filename("absent")
    with pytest.raises(FileNotFoundError):
        cfg.read()


def test_custom_existing_path_is_used(tmp_path):
    custom = tmp_path / "mine.json"
    custom.write_text('{"voice_model": "m"}', encoding="utf-8")
    cfg = ConfigNeko(ConfigStruct, tmp_path / "elsewhere").custom(str(custom))
    assert cfg.path() == custom
    assert cfg.read().voice_model == "m"


def test_custom_missing_path_falls_back_to_location(tmp_path):
    custom = tmp_path / "sub" / "mine.json"
    cfg = ConfigNeko(ConfigStruct, tmp_path).custom(custom)
    assert cfg.path() == tmp_path / "sub" / "mine.json.json"


def test_default_location_is_program_directory():
    cfg = app_config().filename("x")
    assert cfg.path() == Path(sys.argv[0]).resolve().parent / "x.json"


def test_model_must_be_dataclass():
    with pytest.raises(TypeError):
        ConfigNeko(dict)