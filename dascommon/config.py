"""Loading of YAML configuration files."""

from __future__ import annotations

import os
from typing import Any

import yaml


class ConfigError(Exception):
    """Raised when a configuration file cannot be opened, read or parsed."""


def load_config(path: str | os.PathLike[str]) -> Any:
    """Read the YAML file at ``path`` and return its parsed content.

    An empty file gives an empty mapping.
    """
    try:
        handle = open(path, "rb")
    except OSError as exc:
        raise ConfigError(f"open config file failed: {exc}") from exc
    with handle:
        try:
            raw = handle.read()
        except OSError as exc:
            raise ConfigError(f"read config file failed: {exc}") from exc
    try:
        content = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigError(f"yaml config file formal invalid: {exc}") from exc
    return {} if content is None else content