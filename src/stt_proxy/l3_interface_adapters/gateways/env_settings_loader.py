"""Gateway: settings loader — environment, .env file and YAML config, merged per call."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from dotenv import dotenv_values
from pydantic import ValidationError

from stt_proxy.l1_entities.config import SttSettings
from stt_proxy.l1_entities.errors import ConfigurationError
from stt_proxy.l3_interface_adapters.gateways.paths import DEFAULT_CONFIG_PATHS, DOTENV_PATH

log = logging.getLogger('stt.config')

ENV_PROVIDER = 'STT_PROVIDER'
ENV_PROVIDER_LEGACY = 'TRANSCRIPTION_PROVIDER'
ENV_WHISPER_MODEL_PATH = 'WHISPER_CPP_MODEL_PATH'
ENV_CLOUDFLARE_ACCOUNT_ID = 'CLOUDFLARE_ACCOUNT_ID'
ENV_CLOUDFLARE_AUTH_KEY = 'CLOUDFLARE_AUTH_KEY'
ENV_CLOUDFLARE_MODEL = 'CLOUDFLARE_MODEL'
ENV_REQUEST_TIMEOUT = 'STT_REQUEST_TIMEOUT'
ENV_CONFIG_PATH = 'STT_PROXY_CONFIG'

# Settings field -> environment variables, first match wins.
ENV_FIELDS: dict[str, tuple[str, ...]] = {
    'provider': (ENV_PROVIDER, ENV_PROVIDER_LEGACY),
    'whisper_model_path': (ENV_WHISPER_MODEL_PATH,),
    'cloudflare_account_id': (ENV_CLOUDFLARE_ACCOUNT_ID,),
    'cloudflare_auth_key': (ENV_CLOUDFLARE_AUTH_KEY,),
    'cloudflare_model': (ENV_CLOUDFLARE_MODEL,),
    'request_timeout': (ENV_REQUEST_TIMEOUT,),
}


class EnvSettingsLoader:
    """Builds :class:`SttSettings` from scratch on every ``load()``.

    Precedence, highest first: process environment, ``.env`` file, YAML
    config file, model defaults. Empty strings count as unset.
    """

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        dotenv_path: Path | None = DOTENV_PATH,
        config_paths: list[Path] | None = None,
    ) -> None:
        self._environ = environ
        self._dotenv_path = dotenv_path
        self._config_paths = config_paths if config_paths is not None else DEFAULT_CONFIG_PATHS

    def load(self) -> SttSettings:
        environ = os.environ if self._environ is None else self._environ
        data = self._load_yaml(environ)
        deep_merge(data, _from_env(self._load_dotenv()))
        deep_merge(data, _from_env(environ))
        try:
            return SttSettings.model_validate(data)
        except ValidationError as exc:
            raise ConfigurationError(f'Invalid STT settings: {exc}') from exc

    def _load_dotenv(self) -> dict[str, str]:
        if self._dotenv_path is None or not self._dotenv_path.is_file():
            return {}
        return {k: v for k, v in dotenv_values(self._dotenv_path).items() if v is not None}

    def _load_yaml(self, environ: Mapping[str, str]) -> dict:
        explicit = environ.get(ENV_CONFIG_PATH)
        if explicit:
            path = Path(explicit)
            if not path.exists():
                raise ConfigurationError(f'Config file not found: {path}')
            return _read_yaml(path)
        for default_path in self._config_paths:
            if default_path.exists():
                return _read_yaml(default_path)
        return {}


def _read_yaml(path: Path) -> dict:
    try:
        data = yaml.safe_load(path.read_text(encoding='utf-8')) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f'Cannot parse config file {path}: {exc}') from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f'Config file {path} must contain a mapping, got {type(data).__name__}')
    log.debug('Loaded config file %s', path)
    return data


def _from_env(source: Mapping[str, str]) -> dict:
    values: dict = {}
    for field, names in ENV_FIELDS.items():
        for name in names:
            value = source.get(name)
            if value is not None and value.strip():
                values[field] = value.strip()
                break
    return values


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (mutates base)."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base
