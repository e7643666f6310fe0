"""Use case: resolve the single provider that serves a transcription call."""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict

from stt_proxy.l1_entities.config import SttSettings
from stt_proxy.l1_entities.errors import ConfigurationError
from stt_proxy.l1_entities.provider import ProviderId, parse_provider_name, provider_names
from stt_proxy.l2_use_cases.inspect_providers_use_case import InspectProvidersUseCase

log = logging.getLogger('stt.select')


class ResolvedProvider(BaseModel):
    """Outcome of selection: the provider plus the settings snapshot it was chosen under."""

    model_config = ConfigDict(frozen=True)

    provider: ProviderId
    settings: SttSettings
    explicit: bool = False


class SelectProviderUseCase:
    """Explicit override is strict and authoritative; auto-selection is ordered and permissive."""

    def __init__(self, inspector: InspectProvidersUseCase) -> None:
        self._inspector = inspector

    def execute(self, settings: SttSettings, override: str | None = None) -> ResolvedProvider:
        # A blank per-call override means "not given", not "auto".
        requested = override if override and override.strip() else settings.provider
        if requested and requested.strip():
            return self._select_explicit(requested, settings)
        return self._select_auto(settings)

    def _select_explicit(self, requested: str, settings: SttSettings) -> ResolvedProvider:
        provider = parse_provider_name(requested)
        if provider is None:
            raise ConfigurationError(
                f"Unknown STT provider '{requested.strip()}'. Valid providers: {', '.join(provider_names())}"
            )
        missing = self._inspector.missing_requirements(provider, settings)
        if missing:
            raise ConfigurationError(
                f"STT provider '{provider.value}' was requested but is not configured: {'; '.join(missing)}"
            )
        log.debug('Explicit STT provider selected: %s', provider.value)
        return ResolvedProvider(provider=provider, settings=settings, explicit=True)

    def _select_auto(self, settings: SttSettings) -> ResolvedProvider:
        configured = self._inspector.configured_providers(settings)
        if configured:
            log.debug('Auto-selected STT provider: %s', configured[0].value)
            return ResolvedProvider(provider=configured[0], settings=settings)
        raise ConfigurationError(
            'No STT provider configured. Set one of: ' + ', '.join(self._inspector.recognized_settings())
        )
