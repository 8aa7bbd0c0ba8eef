"""Test configuration loading"""

from pathlib import Path

import pytest
from mutagen.id3 import PictureType

from id3reader.core.config import CONFIG_FILENAME, Config, load_config
from id3reader.core.exceptions import ConfigError


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run the test from an empty directory"""
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestLoadConfig:
    """Test load_config()"""

    def test_defaults_without_file(self, workdir):
        config = load_config()

        assert config == Config()
        assert config.reader.strict is False
        assert config.reader.cover_types == (PictureType.COVER_FRONT, PictureType.COVER_BACK)
        assert config.logging.level == "INFO"
        assert config.logging.file is None

    def test_default_file_in_cwd(self, workdir):
        (workdir / CONFIG_FILENAME).write_text(
            "reader:\n  strict: true\n  cover_types: [3]\nlogging:\n  level: debug\n",
            encoding="utf-8"
        )
        config = load_config()

        assert config.reader.strict is True
        assert config.reader.cover_types == (3,)
        assert config.logging.level == "DEBUG"

    def test_explicit_file(self, workdir):
        path = workdir / "custom.yaml"
        path.write_text("logging:\n  file: logs/id3.log\n  colored: false\n", encoding="utf-8")
        config = load_config(path)

        assert config.logging.file == Path("logs/id3.log")
        assert config.logging.colored is False
        assert config.reader.strict is False

    def test_empty_file(self, workdir):
        path = workdir / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == Config()

    def test_missing_explicit_file(self, workdir):
        with pytest.raises(ConfigError) as exc_info:
            load_config(workdir / "missing.yaml")
        assert "not found" in exc_info.value.message

    def test_invalid_yaml(self, workdir):
        path = workdir / "bad.yaml"
        path.write_text("reader: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_not_a_mapping(self, workdir):
        path = workdir / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(path)

    @pytest.mark.parametrize("content,field", [
        ("reader: yes-please\n", None),
        ("reader:\n  strict: maybe\n", "reader.strict"),
        ("reader:\n  cover_types: []\n", "reader.cover_types"),
        ("reader:\n  cover_types: [3, 300]\n", "reader.cover_types"),
        ("reader:\n  cover_types: front\n", "reader.cover_types"),
        ("logging:\n  level: LOUD\n", "logging.level"),
        ("logging:\n  colored: 1\n", "logging.colored"),
        ("logging:\n  file: ''\n", "logging.file"),
    ])
    def test_invalid_values(self, workdir, content, field):
        path = workdir / "invalid.yaml"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        if field is not None:
            assert exc_info.value.details["field"] == field


class TestEnvironment:
    """Test ID3READER_* overrides"""

    def test_overrides(self, workdir, monkeypatch):
        monkeypatch.setenv("ID3READER_STRICT", "yes")
        monkeypatch.setenv("ID3READER_LOG_LEVEL", "warning")
        monkeypatch.setenv("ID3READER_LOG_FILE", "out/id3.log")
        config = load_config()

        assert config.reader.strict is True
        assert config.logging.level == "WARNING"
        assert config.logging.file == Path("out/id3.log")

    def test_environment_beats_file(self, workdir, monkeypatch):
        (workdir / CONFIG_FILENAME).write_text("reader:\n  strict: true\n", encoding="utf-8")
        monkeypatch.setenv("ID3READER_STRICT", "0")
        assert load_config().reader.strict is False

    def test_dotenv_file(self, workdir):
        (workdir / ".env").write_text("ID3READER_LOG_LEVEL=ERROR\n", encoding="utf-8")
        assert load_config().logging.level == "ERROR"

    def test_invalid_values(self, workdir, monkeypatch):
        monkeypatch.setenv("ID3READER_STRICT", "sometimes")
        with pytest.raises(ConfigError):
            load_config()

        monkeypatch.setenv("ID3READER_STRICT", "1")
        monkeypatch.setenv("ID3READER_LOG_LEVEL", "chatty")
        with pytest.raises(ConfigError):
            load_config()
