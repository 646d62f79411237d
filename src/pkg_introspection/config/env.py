from __future__ import annotations

import os
from pathlib import Path

from ..domain.exceptions import ConfigurationError
from .settings import FilterConfig, load_config

CONFIG_ENV = "INTROSPECTION_FILTER_CONFIG"
CONFIG_FILE_ENV = "INTROSPECTION_FILTER_CONFIG_FILE"


def config_from_env() -> FilterConfig:
    """
    Load the filter configuration from the environment.

    INTROSPECTION_FILTER_CONFIG holds the JSON document inline and wins
    over INTROSPECTION_FILTER_CONFIG_FILE, which points at a JSON file.
    """
    inline = os.getenv(CONFIG_ENV)
    if inline:
        return load_config(inline)

    path = os.getenv(CONFIG_FILE_ENV)
    if not path:
        raise ConfigurationError(
            f"Missing filter settings: set {CONFIG_ENV} or {CONFIG_FILE_ENV}"
        )

    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise ConfigurationError(f"Cannot read configuration file {path}: {exc}") from exc
    return load_config(raw)
