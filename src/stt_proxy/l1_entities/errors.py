"""Domain error types."""


class SttError(Exception):
    """Base class for every error raised by stt-proxy."""


class ConfigurationError(SttError):
    """Raised when no usable provider can be resolved from the current settings."""


class NotFoundError(SttError, FileNotFoundError):
    """Raised when an audio file or model file does not exist."""


class ProviderError(SttError):
    """Raised when the selected provider fails to produce a transcription."""
