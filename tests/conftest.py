"""Shared test fixtures and protocol-conforming fakes."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import numpy as np
import pytest

from stt_proxy.l1_entities.config import SttSettings
from stt_proxy.l1_entities.provider import ProviderId
from stt_proxy.l1_entities.transcription import TranscribeOptions, TranscribeOutput
from stt_proxy.l1_entities.transcript import TranscriptSegment
from stt_proxy.l3_interface_adapters.gateways.env_settings_loader import EnvSettingsLoader
from stt_proxy.l3_interface_adapters.gateways.temp_audio_file import TempAudioFileStore
from stt_proxy.l4_frameworks_and_drivers.container import DependencyContainer
from stt_proxy.l4_frameworks_and_drivers.proxy import SttProxy

# --- Protocol-conforming Fakes ---


class FakeSpeechEngine:
    """Fake local engine — implements SpeechEngine."""

    def __init__(self, segments: list[TranscriptSegment] | None = None):
        self._segments = segments if segments is not None else [TranscriptSegment(text='Hello, world!')]
        self.load_model_calls: list[str] = []
        self.transcribe_calls: list[tuple[np.ndarray, str | None, bool | None]] = []
        self.close_calls = 0
        self.load_error: Exception | None = None
        self.transcribe_error: Exception | None = None

    def load_model(self, model_path: str) -> None:
        self.load_model_calls.append(model_path)
        if self.load_error is not None:
            raise self.load_error

    def transcribe(
        self,
        samples: np.ndarray,
        language: str | None = None,
        translate: bool | None = None,
    ) -> list[TranscriptSegment]:
        self.transcribe_calls.append((samples, language, translate))
        if self.transcribe_error is not None:
            raise self.transcribe_error
        return self._segments

    def close(self) -> None:
        self.close_calls += 1

    def set_segments(self, *texts: str) -> None:
        self._segments = [TranscriptSegment(text=t) for t in texts]


class FakeDecoder:
    """Stands in for ffmpeg: records the bytes of every file it is asked to decode."""

    def __init__(self, samples: np.ndarray | None = None):
        self._samples = samples if samples is not None else np.array([0.1, 0.2, 0.3], dtype=np.float32)
        self.calls: list[Path] = []
        self.seen_bytes: list[bytes] = []
        self.error: Exception | None = None

    def __call__(self, path: Path) -> np.ndarray:
        self.calls.append(path)
        self.seen_bytes.append(path.read_bytes())
        if self.error is not None:
            raise self.error
        return self._samples


class FakeProvider:
    """Fake SpeechProvider for L2 use case tests."""

    def __init__(self, provider_id: ProviderId, configured: bool = True, text: str = 'fake text'):
        self.provider_id = provider_id
        self.configured = configured
        self.text = text
        self.error: Exception | None = None
        self.run_calls: list[tuple[Path, TranscribeOptions, SttSettings, bytes | None]] = []

    def setting_names(self) -> list[str]:
        return [f'{self.provider_id.name}_A', f'{self.provider_id.name}_B']

    def is_configured(self, settings: SttSettings) -> bool:
        return self.configured

    def missing_requirements(self, settings: SttSettings) -> list[str]:
        return [] if self.configured else [f'{self.provider_id.name}_A is not set']

    async def run(self, path: Path, options: TranscribeOptions, settings: SttSettings) -> TranscribeOutput:
        data = path.read_bytes() if path.exists() else None
        self.run_calls.append((path, options, settings, data))
        if self.error is not None:
            raise self.error
        return TranscribeOutput(text=self.text)


class FakeSettingsLoader:
    def __init__(self, settings: SttSettings | None = None):
        self.settings = settings or SttSettings()
        self.load_calls = 0

    def load(self) -> SttSettings:
        self.load_calls += 1
        return self.settings


class RecordingTransport(httpx.MockTransport):
    """httpx transport that answers with a canned response and keeps every request."""

    def __init__(self, status_code: int = 200, body: dict | str | None = None):
        self.requests: list[httpx.Request] = []
        self.status_code = status_code
        self.body = body if body is not None else {'success': True, 'result': {'text': 'Cloudflare transcription'}}
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.body, str):
            return httpx.Response(self.status_code, text=self.body)
        return httpx.Response(self.status_code, json=self.body)

    def respond(self, status_code: int, body: dict | str) -> None:
        self.status_code = status_code
        self.body = body

    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


# --- Standard Fixtures ---


@pytest.fixture
def model_file(tmp_path: Path) -> Path:
    p = tmp_path / 'models' / 'ggml-tiny.bin'
    p.parent.mkdir()
    p.write_bytes(b'ggml')
    return p


@pytest.fixture
def audio_file(tmp_path: Path) -> Path:
    p = tmp_path / 'audio.wav'
    p.write_bytes(b'RIFF\x00\x00\x00\x00WAVEfake audio data')
    return p


@pytest.fixture
def fake_engine() -> FakeSpeechEngine:
    return FakeSpeechEngine()


@pytest.fixture
def fake_decoder() -> FakeDecoder:
    return FakeDecoder()


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def env() -> dict[str, str]:
    """Mutable stand-in for os.environ, read fresh by the loader on every call."""
    return {}


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    d = tmp_path / 'tmp'
    d.mkdir()
    return d


@pytest.fixture
def container(env, fake_engine, fake_decoder, transport, temp_dir) -> DependencyContainer:
    return DependencyContainer(
        settings_loader=EnvSettingsLoader(environ=env, dotenv_path=None, config_paths=[]),
        engine_factory=lambda: fake_engine,
        http_transport=transport,
        temp_store=TempAudioFileStore(directory=temp_dir),
        audio_decoder=fake_decoder,
    )


@pytest.fixture
def proxy(container) -> SttProxy:
    return SttProxy(container)


@pytest.fixture
def whisper_env(env, model_file) -> dict[str, str]:
    env['WHISPER_CPP_MODEL_PATH'] = str(model_file)
    return env


@pytest.fixture
def cloudflare_env(env) -> dict[str, str]:
    env['CLOUDFLARE_ACCOUNT_ID'] = 'test-account-id'
    env['CLOUDFLARE_AUTH_KEY'] = 'test-auth-key'
    return env
