"""Port: local speech recognition engine."""

from __future__ import annotations

from typing import Protocol

import numpy as np

from stt_proxy.l1_entities.transcript import TranscriptSegment


class SpeechEngine(Protocol):
    """Abstract local inference engine. Zero framework types leak through."""

    def load_model(self, model_path: str) -> None:
        """Load the model file at *model_path*. Raises on failure."""
        ...

    def transcribe(
        self,
        samples: np.ndarray,
        language: str | None = None,
        translate: bool | None = None,
    ) -> list[TranscriptSegment]:
        """Transcribe 16 kHz mono float32 samples. ``None`` options are not forwarded."""
        ...

    def close(self) -> None:
        """Release the loaded model."""
        ...
