import pytest

from dascommon.config import ConfigError, load_config


def test_loads_nested_mapping(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("server:\n  host: localhost\n  port: 8114\nnames:\n  - a\n  - b\n")
    assert load_config(path) == {
        "server": {"host": "localhost", "port": 8114},
        "names": ["a", "b"],
    }


def test_accepts_string_path(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("key: value\n")
    assert load_config(str(path)) == {"key": "value"}


def test_empty_file_gives_empty_mapping(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == {}


def test_missing_file_raises(tmp_path):
    with pytest.raises(ConfigError, match="open config file failed"):
        load_config(tmp_path / "missing.yaml")


def test_invalid_yaml_raises(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("a: [1, 2\n")
    with pytest.raises(ConfigError, match="yaml config file formal invalid"):
        load_config(path)