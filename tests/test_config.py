import json
from pathlib import Path

import pytest

from literally.config import DEFAULT_CONFIG_NAME, LiterallyConfig, load_config
from literally.errors import ConfigError
from literally.retarget import RetargetRule


def test_missing_default_config_is_empty(tmp_path: Path) -> None:
    assert load_config(None, cwd=tmp_path) == LiterallyConfig()


def test_missing_explicit_config_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(Path("nope.json"), cwd=tmp_path)


def test_invalid_json_raises(tmp_path: Path) -> None:
    (tmp_path / DEFAULT_CONFIG_NAME).write_text("{files: [}", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(None, cwd=tmp_path)


def test_config_values_are_loaded(tmp_path: Path) -> None:
    payload = {
        "files": "docs/intro.md",
        "output": "dist",
        "format": "blocks",
        "drop_title": True,
        "retarget": [{"rule": "\\.\\./", "value": "https://cdn/"}],
    }
    (tmp_path / "custom.json").write_text(json.dumps(payload), encoding="utf-8")
    config = load_config(Path("custom.json"), cwd=tmp_path)
    assert config.files == ["docs/intro.md"]
    assert config.output == "dist"
    assert config.format == "blocks"
    assert config.drop_title is True
    assert config.retarget == [RetargetRule("\\.\\./", "https://cdn/")]


def test_files_must_be_a_list() -> None:
    with pytest.raises(ConfigError):
        LiterallyConfig.from_dict({"files": {"a": 1}})
