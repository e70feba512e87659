"""Tests for configuration loading."""

import pytest

from aacboard.config import AACBOARD_DEFAULTS, read_config
from aacboard.errors import DocumentError


@pytest.fixture(autouse=True)
def clean_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("AACBOARD_CONFIG", raising=False)
    for key in AACBOARD_DEFAULTS:
        monkeypatch.delenv("AACBOARD_" + key.replace("-", "_").upper(), raising=False)


def test_defaults():
    config = read_config()
    assert config == {
        "aacboard": {
            "locale": "en-US",
            "author": "",
            "thumbnail_url": "https://aacboard.app/assets/thumbnail.png",
            "fetch_timeout": 30.0,
            "upload_url": "",
            "symbol_base_url": "https://aacboard.app/symbols",
        }
    }


def test_file_overrides_defaults(tmp_path):
    path = tmp_path / "custom.yaml"
    path.write_text("aacboard:\n  locale: fr-FR\n  fetch-timeout: '5'\nupload:\n  api_key: abc\n")
    config = read_config(path)
    assert config["aacboard"]["locale"] == "fr-FR"
    assert config["aacboard"]["fetch_timeout"] == 5.0
    assert config["aacboard"]["author"] == ""
    assert config["upload"] == {"api_key": "abc"}


def test_underscored_keys_in_file(tmp_path):
    path = tmp_path / "custom.yaml"
    path.write_text("aacboard:\n  symbol_base_url: https://cdn.test/symbols\n")
    assert read_config(path)["aacboard"]["symbol_base_url"] == "https://cdn.test/symbols"


def test_working_directory_file(tmp_path):
    (tmp_path / "aacboard.yaml").write_text("aacboard:\n  author: Robin\n")
    assert read_config()["aacboard"]["author"] == "Robin"


def test_config_env_var(tmp_path, monkeypatch):
    path = tmp_path / "elsewhere.yaml"
    path.write_text("aacboard:\n  locale: nl-NL\n")
    monkeypatch.setenv("AACBOARD_CONFIG", str(path))
    assert read_config()["aacboard"]["locale"] == "nl-NL"


def test_environment_beats_file(tmp_path, monkeypatch):
    path = tmp_path / "custom.yaml"
    path.write_text("aacboard:\n  locale: fr-FR\n")
    monkeypatch.setenv("AACBOARD_LOCALE", "it-IT")
    monkeypatch.setenv("AACBOARD_FETCH_TIMEOUT", "2.5")
    config = read_config(path)
    assert config["aacboard"]["locale"] == "it-IT"
    assert config["aacboard"]["fetch_timeout"] == 2.5


def test_bad_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("aacboard: [unclosed\n")
    with pytest.raises(DocumentError, match="cannot read config"):
        read_config(path)


def test_not_a_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- one\n- two\n")
    with pytest.raises(DocumentError, match="mapping"):
        read_config(path)


def test_missing_explicit_file(tmp_path):
    with pytest.raises(DocumentError):
        read_config(tmp_path / "absent.yaml")
