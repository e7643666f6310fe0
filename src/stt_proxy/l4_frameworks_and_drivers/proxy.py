"""Public facade: one entry point that picks a provider and returns normalized text."""

from __future__ import annotations

import asyncio
import logging
import os
import threading
from pathlib import Path

from stt_proxy.l1_entities.provider import PROVIDER_PRIORITY, ProviderId, parse_provider_name
from stt_proxy.l1_entities.transcription import TranscribeOptions, TranscribeOutput, TranscriptionRequest
from stt_proxy.l2_use_cases.select_provider_use_case import ResolvedProvider
from stt_proxy.l4_frameworks_and_drivers.container import DependencyContainer

log = logging.getLogger('stt.proxy')

AudioInput = str | os.PathLike | bytes | bytearray | memoryview


def build_request(
    audio: AudioInput,
    options: TranscribeOptions | None = None,
    *,
    language: str | None = None,
    translate: bool | None = None,
) -> TranscriptionRequest:
    """Normalize caller input into a request. Keyword options override *options* fields."""
    opts = options or TranscribeOptions()
    updates = {k: v for k, v in (('language', language), ('translate', translate)) if v is not None}
    if updates:
        opts = opts.model_copy(update=updates)

    if isinstance(audio, (bytes, bytearray, memoryview)):
        return TranscriptionRequest(audio=bytes(audio), options=opts)
    return TranscriptionRequest(audio=Path(os.fspath(audio)), options=opts)


class SttProxy:
    """Owns the engine manager and adapters; call :meth:`shutdown` when done.

    Settings are re-read from the environment on every call, so one
    instance can live for the whole process.
    """

    def __init__(self, container: DependencyContainer | None = None) -> None:
        self._container = container or DependencyContainer()

    @property
    def container(self) -> DependencyContainer:
        return self._container

    async def transcribe(
        self,
        audio: AudioInput,
        options: TranscribeOptions | None = None,
        *,
        language: str | None = None,
        translate: bool | None = None,
        provider: str | None = None,
    ) -> TranscribeOutput:
        request = build_request(audio, options, language=language, translate=translate)
        return await self._container.transcribe_use_case.execute(request, provider=provider)

    def select_provider(self, provider: str | None = None) -> ResolvedProvider:
        return self._container.transcribe_use_case.resolve(provider)

    def is_configured(self, provider: ProviderId | str) -> bool:
        pid = provider if isinstance(provider, ProviderId) else parse_provider_name(provider)
        if pid is None:
            return False
        return self._container.inspector.is_configured(pid, self._container.settings_loader.load())

    def provider_status(self) -> dict[ProviderId, list[str]]:
        """Missing requirements per provider, in priority order; empty list means configured."""
        settings = self._container.settings_loader.load()
        return {pid: self._container.inspector.missing_requirements(pid, settings) for pid in PROVIDER_PRIORITY}

    def shutdown(self) -> None:
        """Release the local engine. Best-effort hygiene, not needed for correctness."""
        self._container.engine_manager.release()

    async def __aenter__(self) -> SttProxy:
        return self

    async def __aexit__(self, *exc_info) -> None:
        # shutdown() waits for any in-flight lease; keep that wait off the event loop.
        await asyncio.to_thread(self.shutdown)


_default_lock = threading.Lock()
_default_proxy: SttProxy | None = None


def default_proxy() -> SttProxy:
    global _default_proxy
    with _default_lock:
        if _default_proxy is None:
            _default_proxy = SttProxy()
        return _default_proxy


async def transcribe(
    audio: AudioInput,
    options: TranscribeOptions | None = None,
    *,
    language: str | None = None,
    translate: bool | None = None,
    provider: str | None = None,
) -> TranscribeOutput:
    """Transcribe *audio* (a path or raw bytes) with the default proxy."""
    return await default_proxy().transcribe(audio, options, language=language, translate=translate, provider=provider)


def shutdown() -> None:
    """Release the default proxy's engine, if one was ever created."""
    with _default_lock:
        proxy = _default_proxy
    if proxy is not None:
        log.debug('Shutting down default STT proxy')
        proxy.shutdown()
