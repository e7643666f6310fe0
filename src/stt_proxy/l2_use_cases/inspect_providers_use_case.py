"""Use case: inspect which providers the current settings make usable."""

from __future__ import annotations

from collections.abc import Iterable

from stt_proxy.l1_entities.config import SttSettings
from stt_proxy.l1_entities.provider import PROVIDER_PRIORITY, ProviderId
from stt_proxy.l2_use_cases.ports.speech_provider import SpeechProvider


class InspectProvidersUseCase:
    """Answers "is this provider configured?" against one settings snapshot.

    Pure: every question is answered from the *settings* argument, so callers
    that reload settings per call always see the current environment.
    """

    def __init__(self, providers: Iterable[SpeechProvider]) -> None:
        self._providers: dict[ProviderId, SpeechProvider] = {p.provider_id: p for p in providers}

    def provider(self, provider_id: ProviderId) -> SpeechProvider:
        try:
            return self._providers[provider_id]
        except KeyError:
            raise KeyError(f'No adapter registered for provider {provider_id.value!r}') from None

    def is_configured(self, provider_id: ProviderId, settings: SttSettings) -> bool:
        return self.provider(provider_id).is_configured(settings)

    def missing_requirements(self, provider_id: ProviderId, settings: SttSettings) -> list[str]:
        return self.provider(provider_id).missing_requirements(settings)

    def configured_providers(self, settings: SttSettings) -> list[ProviderId]:
        """Configured providers in auto-selection priority order."""
        return [pid for pid in PROVIDER_PRIORITY if pid in self._providers and self.is_configured(pid, settings)]

    def recognized_settings(self) -> list[str]:
        """Every setting name across all registered providers, in priority order."""
        names: list[str] = []
        for pid in PROVIDER_PRIORITY:
            if pid not in self._providers:
                continue
            for name in self._providers[pid].setting_names():
                if name not in names:
                    names.append(name)
        return names
