"""Tests for startup parameter handling."""

import os

import pytest

from server_config import BUFFER_SIZE, DEFAULT_PORT, ServerConfig, parse_port


@pytest.mark.parametrize("value, expected", [
    ("8080", 8080),
    ("0", 0),
    ("abc", DEFAULT_PORT),
    ("", DEFAULT_PORT),
    (None, DEFAULT_PORT),
    ("-1", DEFAULT_PORT),
    ("70000", DEFAULT_PORT),
])
def test_parse_port(value, expected) -> None:
    assert parse_port(value) == expected


def test_defaults_with_no_arguments() -> None:
    config = ServerConfig.from_args([])

    assert config.port == 3000
    assert config.root == os.path.realpath(os.getcwd())
    assert config.buffer_size == BUFFER_SIZE
    assert config.follow_symlinks is False


def test_port_and_base_dir_arguments(tmp_path) -> None:
    config = ServerConfig.from_args(["8081", str(tmp_path)])

    assert config.port == 8081
    assert config.root == os.path.realpath(tmp_path)


def test_bad_port_still_uses_base_dir(tmp_path) -> None:
    config = ServerConfig.from_args(["http", str(tmp_path)])

    assert config.port == DEFAULT_PORT
    assert config.root == os.path.realpath(tmp_path)


def test_relative_base_dir_is_normalized(tmp_path, monkeypatch) -> None:
    (tmp_path / "public").mkdir()
    monkeypatch.chdir(tmp_path)

    config = ServerConfig.build("./public/../public/")

    assert config.root == os.path.realpath(tmp_path / "public")
    assert os.path.isabs(config.root)


def test_config_is_immutable(tmp_path) -> None:
    config = ServerConfig.build(tmp_path)

    with pytest.raises(AttributeError):
        config.root = "/"
