from __future__ import annotations

"""
Profile configuration: where the analyzer catalog and the persisted
preferences live, and under which keys preferences are stored.

This is the single place to update when new preference keys are added.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Preference key holding the serialized problem overrides ("id=state!...").
PROBLEMS_KEY = "problems"

# Preference key holding the analyzer binary path; changes trigger a catalog reload.
BINARY_PATH_KEY = "binary_path"

DEFAULT_BINARY_PATH = "cppcheck"
DEFAULT_CATALOG_FILE = "catalog.json"
DEFAULT_SETTINGS_FILE = Path.home() / ".config" / "checkprofile" / "settings.json"

# Environment overrides, used when no CLI option is given.
ENV_CATALOG = "CHECKPROFILE_CATALOG"
ENV_SETTINGS = "CHECKPROFILE_SETTINGS"


@dataclass
class Config:
    """
    Profile configuration.

    binary_path identifies the analyzer; catalog_path is the exported
    catalog of that analyzer; settings_path is the JSON preferences file.
    """

    binary_path: str = DEFAULT_BINARY_PATH
    catalog_path: Path = Path(DEFAULT_CATALOG_FILE)
    settings_path: Path = DEFAULT_SETTINGS_FILE
    problems_key: str = PROBLEMS_KEY


def get_default_config(
    catalog_path: Optional[Path] = None,
    settings_path: Optional[Path] = None,
) -> Config:
    """
    Return the configuration, preferring explicit paths, then environment
    variables, then built-in defaults.
    """
    config = Config()
    if catalog_path is not None:
        config.catalog_path = catalog_path
    elif os.environ.get(ENV_CATALOG):
        config.catalog_path = Path(os.environ[ENV_CATALOG])
    if settings_path is not None:
        config.settings_path = settings_path
    elif os.environ.get(ENV_SETTINGS):
        config.settings_path = Path(os.environ[ENV_SETTINGS])
    return config
