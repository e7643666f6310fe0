"""Shared path constants for configuration and temporary audio."""

from __future__ import annotations

import tempfile
from pathlib import Path

from platformdirs import user_config_path

CONFIG_DIR = user_config_path('stt-proxy')

DEFAULT_CONFIG_PATHS = [
    CONFIG_DIR / 'config.yaml',
    CONFIG_DIR / 'config.yml',
]

DOTENV_PATH = Path('.env')


def temp_dir() -> Path:
    return Path(tempfile.gettempdir())
