"""Tests for the .pdd.yml sources provider."""

from pathlib import Path

import pytest

from pzt.exceptions import ConfigError
from pzt.sources import Sources


def test_missing_file_returns_none(tmp_path: Path) -> None:
    assert Sources(tmp_path / ".pdd.yml").config() is None


def test_empty_file_returns_none(tmp_path: Path) -> None:
    path = tmp_path / ".pdd.yml"
    path.write_text("")
    assert Sources(path).config() is None


def test_reads_format_and_alerts(tmp_path: Path) -> None:
    path = tmp_path / ".pdd.yml"
    path.write_text("format:\n  - short-title\n  - title-length=100\nalerts:\n  gitlab:\n    - yegor256\n")
    config = Sources(path).config()
    assert config is not None
    assert config.format == ["short-title", "title-length=100"]
    assert config.alerts == {"gitlab": ["yegor256"]}


def test_rereads_on_each_call(tmp_path: Path) -> None:
    path = tmp_path / ".pdd.yml"
    path.write_text("format:\n  - short-title\n")
    sources = Sources(path)
    assert sources.config().format == ["short-title"]  # type: ignore[union-attr]
    path.write_text("format:\n  - title-length=80\n")
    assert sources.config().format == ["title-length=80"]  # type: ignore[union-attr]


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    path = tmp_path / ".pdd.yml"
    path.write_text("format: [unclosed\n")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        Sources(path).config()


def test_non_mapping_raises(tmp_path: Path) -> None:
    path = tmp_path / ".pdd.yml"
    path.write_text("- short-title\n")
    with pytest.raises(ConfigError, match="mapping"):
        Sources(path).config()
