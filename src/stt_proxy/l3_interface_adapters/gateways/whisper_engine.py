"""Gateway: whisper.cpp engine — implements SpeechEngine port."""

from __future__ import annotations

import contextlib
import os

import numpy as np
from pywhispercpp.model import Model

from stt_proxy.l1_entities.transcript import TranscriptSegment


@contextlib.contextmanager
def _silence_native_output():
    """Point fds 1 and 2 at /dev/null while whisper.cpp runs.

    The C library logs model init and timings with fprintf, which bypasses
    sys.stdout and would end up in the transcription CLI's output.
    """
    devnull = os.open(os.devnull, os.O_WRONLY)
    saved_out = os.dup(1)
    saved_err = os.dup(2)
    try:
        os.dup2(devnull, 1)
        os.dup2(devnull, 2)
        yield
    finally:
        os.dup2(saved_out, 1)
        os.dup2(saved_err, 2)
        os.close(devnull)
        os.close(saved_out)
        os.close(saved_err)


class WhisperCppEngine:
    """pywhispercpp adapter. Converts centisecond timestamps to seconds."""

    def __init__(self) -> None:
        self._model: Model | None = None

    def load_model(self, model_path: str) -> None:
        with _silence_native_output():
            self._model = Model(model_path, print_progress=False, print_realtime=False)

    def transcribe(
        self,
        samples: np.ndarray,
        language: str | None = None,
        translate: bool | None = None,
    ) -> list[TranscriptSegment]:
        if self._model is None:
            raise RuntimeError('Model not loaded. Call load_model() first.')

        params: dict = {}
        if language is not None:
            params['language'] = language
        if translate is not None:
            params['translate'] = translate

        with _silence_native_output():
            raw_segments = self._model.transcribe(samples, **params)

        # Segment text is passed through untouched; callers join and normalize.
        return [TranscriptSegment(text=seg.text, start=seg.t0 / 100.0, end=seg.t1 / 100.0) for seg in raw_segments]

    def close(self) -> None:
        if self._model is not None:
            with _silence_native_output():
                del self._model
                self._model = None
