from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from echoes_tui import main as main_module

DOCUMENT = {
    "stories": [
        {"id": "a1", "title": "T1", "storyText": "The first story."},
        {"id": "a2", "title": "T2"},
    ]
}


@pytest.fixture
def stories_file(tmp_path):
    path = tmp_path / "stories.json"
    path.write_text(json.dumps(DOCUMENT), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def isolated_config(tmp_path):
    with patch("echoes_tui.config.CONFIG_PATH", str(tmp_path / "config.json")):
        yield


def test_print_home(stories_file, capsys):
    code = main_module.main(["--print", "--file", str(stories_file)])
    out = capsys.readouterr().out
    assert code == 0
    assert "Featured Echoes" in out
    assert "T1" in out and "T2" in out


def test_print_deep_link(stories_file, capsys):
    code = main_module.main(["--print", "--file", str(stories_file), "--story", "#a1"])
    out = capsys.readouterr().out
    assert code == 0
    assert "The first story." in out


def test_print_bad_file_fails(tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_text("[1,2,3]", encoding="utf-8")
    code = main_module.main(["--print", "--file", str(path)])
    out = capsys.readouterr().out
    assert code == 1
    assert '"stories" array' in out
