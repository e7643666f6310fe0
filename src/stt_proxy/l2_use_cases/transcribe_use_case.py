"""Use case: dispatch one transcription request to the resolved provider."""

from __future__ import annotations

import logging
from pathlib import Path

from stt_proxy.l1_entities.errors import NotFoundError
from stt_proxy.l1_entities.transcription import TranscribeOutput, TranscriptionRequest
from stt_proxy.l2_use_cases.inspect_providers_use_case import InspectProvidersUseCase
from stt_proxy.l2_use_cases.ports.settings_loader import SettingsLoader
from stt_proxy.l2_use_cases.ports.temp_audio_store import TempAudioStore
from stt_proxy.l2_use_cases.select_provider_use_case import ResolvedProvider, SelectProviderUseCase

log = logging.getLogger('stt.dispatch')


class TranscribeUseCase:
    """Resolve a provider, then route the request to that provider's adapter.

    Settings are reloaded on every call. Buffer input is written to a scoped
    temp file and takes the same path as file input; the temp file is gone
    by the time this returns or raises.
    """

    def __init__(
        self,
        settings_loader: SettingsLoader,
        inspector: InspectProvidersUseCase,
        selector: SelectProviderUseCase,
        temp_store: TempAudioStore,
    ) -> None:
        self._settings_loader = settings_loader
        self._inspector = inspector
        self._selector = selector
        self._temp_store = temp_store

    def resolve(self, provider: str | None = None) -> ResolvedProvider:
        return self._selector.execute(self._settings_loader.load(), override=provider)

    async def execute(self, request: TranscriptionRequest, provider: str | None = None) -> TranscribeOutput:
        resolved = self.resolve(provider)

        if isinstance(request.audio, bytes):
            log.debug('Buffering %d bytes of audio for %s', len(request.audio), resolved.provider.value)
            with self._temp_store.materialize(request.audio) as temp_path:
                return await self._dispatch(resolved, temp_path, request)

        path = Path(request.audio)
        if not path.is_file():
            raise NotFoundError(f'Audio file not found: {path}')
        return await self._dispatch(resolved, path, request)

    async def _dispatch(self, resolved: ResolvedProvider, path: Path, request: TranscriptionRequest) -> TranscribeOutput:
        adapter = self._inspector.provider(resolved.provider)
        log.info('Transcribing %s with %s', path.name, resolved.provider.value)
        return await adapter.run(path, request.options, resolved.settings)
