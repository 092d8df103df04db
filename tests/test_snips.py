from pathlib import Path
from unittest import mock

import pytest

from nekosys import snips


def test_root_path_is_parent_of_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert snips.root_path() == tmp_path.parent
    assert snips.root_path() == Path.cwd().parent


@pytest.mark.parametrize(
    "platform, command",
    [
        ("win32", ["cmd", "/C", "start", "http://localhost:4989/"]),
        ("darwin", ["open", "http://localhost:4989/"]),
        ("linux", ["xdg-open", "http://localhost:4989/"]),
    ],
)
def test_open_url_uses_platform_opener(platform, command):
    with mock.patch.object(snips.sys, "platform", platform), \
            mock.patch.object(snips.subprocess, "run") as run:
        run.return_value = "done"
        assert snips.open_url("http://localhost:4989/") == "done"
    run.assert_called_once_with(command, capture_output=True)


def test_open_url_missing_opener_raises():
    with mock.patch.object(snips.sys, "platform", "linux"), \
            mock.patch.object(snips.subprocess, "run", side_effect=FileNotFoundError):
        with pytest.raises(FileNotFoundError):
            snips.open_url("/tmp/file")