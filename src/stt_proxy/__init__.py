"""stt-proxy: one transcription call in front of several speech-to-text providers."""

__version__ = '0.3.0'

from stt_proxy.l1_entities.errors import ConfigurationError, NotFoundError, ProviderError, SttError  # noqa: E402
from stt_proxy.l1_entities.provider import ProviderId  # noqa: E402
from stt_proxy.l1_entities.transcription import TranscribeOptions, TranscribeOutput  # noqa: E402
from stt_proxy.l2_use_cases.utils.text_normalizer import normalize_text  # noqa: E402
from stt_proxy.l3_interface_adapters.gateways.whisper_model_catalog import available_models, model_url  # noqa: E402
from stt_proxy.l4_frameworks_and_drivers.proxy import SttProxy, shutdown, transcribe  # noqa: E402

__all__ = [
    'ConfigurationError',
    'NotFoundError',
    'ProviderError',
    'ProviderId',
    'SttError',
    'SttProxy',
    'TranscribeOptions',
    'TranscribeOutput',
    '__version__',
    'available_models',
    'model_url',
    'normalize_text',
    'shutdown',
    'transcribe',
]
