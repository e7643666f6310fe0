"""Dependency container — composition root for wiring all layers together."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import httpx
import numpy as np

from stt_proxy.l2_use_cases.engine_manager import EngineManager
from stt_proxy.l2_use_cases.inspect_providers_use_case import InspectProvidersUseCase
from stt_proxy.l2_use_cases.ports.settings_loader import SettingsLoader
from stt_proxy.l2_use_cases.ports.speech_engine import SpeechEngine
from stt_proxy.l2_use_cases.ports.speech_provider import SpeechProvider
from stt_proxy.l2_use_cases.ports.temp_audio_store import TempAudioStore
from stt_proxy.l2_use_cases.select_provider_use_case import SelectProviderUseCase
from stt_proxy.l2_use_cases.transcribe_use_case import TranscribeUseCase
from stt_proxy.l3_interface_adapters.gateways.audio_file_loader import decode_audio_file
from stt_proxy.l3_interface_adapters.gateways.cloudflare_provider import CloudflareProvider
from stt_proxy.l3_interface_adapters.gateways.env_settings_loader import EnvSettingsLoader
from stt_proxy.l3_interface_adapters.gateways.temp_audio_file import TempAudioFileStore
from stt_proxy.l3_interface_adapters.gateways.whisper_cpp_provider import WhisperCppProvider


def _default_engine_factory() -> SpeechEngine:
    # Deferred: pywhispercpp loads the native library on import.
    from stt_proxy.l3_interface_adapters.gateways.whisper_engine import (  # noqa: PLC0415
        WhisperCppEngine,
    )

    return WhisperCppEngine()


class DependencyContainer:
    """Creates and wires all concrete instances. Easy to override for testing."""

    def __init__(
        self,
        settings_loader: SettingsLoader | None = None,
        engine_factory: Callable[[], SpeechEngine] | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
        temp_store: TempAudioStore | None = None,
        audio_decoder: Callable[[Path], np.ndarray] | None = None,
        providers: list[SpeechProvider] | None = None,
    ) -> None:
        self.settings_loader: SettingsLoader = settings_loader or EnvSettingsLoader()
        self.engine_manager = EngineManager(engine_factory or _default_engine_factory)
        self.temp_store: TempAudioStore = temp_store or TempAudioFileStore()

        self.providers: list[SpeechProvider] = providers or [
            WhisperCppProvider(self.engine_manager, decoder=audio_decoder or decode_audio_file),
            CloudflareProvider(transport=http_transport),
        ]
        self.inspector = InspectProvidersUseCase(self.providers)
        self.selector = SelectProviderUseCase(self.inspector)
        self.transcribe_use_case = TranscribeUseCase(
            settings_loader=self.settings_loader,
            inspector=self.inspector,
            selector=self.selector,
            temp_store=self.temp_store,
        )
