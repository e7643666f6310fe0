"""Port: transcription provider adapter."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from stt_proxy.l1_entities.config import SttSettings
from stt_proxy.l1_entities.provider import ProviderId
from stt_proxy.l1_entities.transcription import TranscribeOptions, TranscribeOutput


class SpeechProvider(Protocol):
    """One backend transcription provider behind the unified contract."""

    provider_id: ProviderId

    def setting_names(self) -> list[str]:
        """Configuration setting names this provider recognizes."""
        ...

    def is_configured(self, settings: SttSettings) -> bool:
        """True iff every required setting is present and valid. No side effects."""
        ...

    def missing_requirements(self, settings: SttSettings) -> list[str]:
        """Human-readable list of what is missing; empty when configured."""
        ...

    async def run(self, path: Path, options: TranscribeOptions, settings: SttSettings) -> TranscribeOutput:
        """Transcribe the audio file at *path*."""
        ...
