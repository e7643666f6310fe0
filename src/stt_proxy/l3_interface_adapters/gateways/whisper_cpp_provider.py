"""Gateway: local whisper.cpp provider — implements SpeechProvider port."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from pathlib import Path

import numpy as np

from stt_proxy.l1_entities.config import SttSettings
from stt_proxy.l1_entities.errors import NotFoundError, ProviderError
from stt_proxy.l1_entities.provider import ProviderId
from stt_proxy.l1_entities.transcription import TranscribeOptions, TranscribeOutput
from stt_proxy.l2_use_cases.engine_manager import EngineManager
from stt_proxy.l2_use_cases.utils.text_normalizer import normalize_text
from stt_proxy.l3_interface_adapters.gateways.audio_file_loader import decode_audio_file
from stt_proxy.l3_interface_adapters.gateways.env_settings_loader import ENV_WHISPER_MODEL_PATH

log = logging.getLogger('stt.whisper')


class WhisperCppProvider:
    """Decodes audio with ffmpeg and runs it through the managed whisper.cpp engine."""

    provider_id = ProviderId.WHISPER_CPP

    def __init__(
        self,
        engine_manager: EngineManager,
        decoder: Callable[[Path], np.ndarray] = decode_audio_file,
    ) -> None:
        self._engines = engine_manager
        self._decode = decoder

    def setting_names(self) -> list[str]:
        return [ENV_WHISPER_MODEL_PATH]

    def is_configured(self, settings: SttSettings) -> bool:
        return not self.missing_requirements(settings)

    def missing_requirements(self, settings: SttSettings) -> list[str]:
        model_path = settings.whisper_model_path
        if not model_path:
            return [f'{ENV_WHISPER_MODEL_PATH} is not set']
        if not Path(model_path).is_file():
            return [f'{ENV_WHISPER_MODEL_PATH} points to a missing model file: {model_path}']
        return []

    async def run(self, path: Path, options: TranscribeOptions, settings: SttSettings) -> TranscribeOutput:
        if not path.is_file():
            raise NotFoundError(f'Audio file not found: {path}')
        text = await asyncio.to_thread(self._transcribe_blocking, path, options, settings.whisper_model_path)
        return TranscribeOutput(text=normalize_text(text))

    def _transcribe_blocking(self, path: Path, options: TranscribeOptions, model_path: str | None) -> str:
        with self._engines.lease(model_path) as engine:
            samples = self._decode(path)
            try:
                segments = engine.transcribe(samples, language=options.language, translate=options.translate)
            except Exception as exc:
                raise ProviderError(f'whisper.cpp transcription failed: {exc}') from exc
        log.debug('whisper.cpp returned %d segments for %s', len(segments), path.name)
        return ' '.join(seg.text for seg in segments)
