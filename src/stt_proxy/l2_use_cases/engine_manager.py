"""Use case: own the single live local-engine handle and rebuild it on model change."""

from __future__ import annotations

import contextlib
import logging
import threading
from collections.abc import Callable, Iterator
from pathlib import Path

from stt_proxy.l1_entities.errors import NotFoundError, ProviderError
from stt_proxy.l2_use_cases.ports.speech_engine import SpeechEngine

log = logging.getLogger('stt.engine')


class EngineManager:
    """Exclusive owner of at most one loaded :class:`SpeechEngine`.

    The handle is keyed by the model path it was loaded from. Leasing a
    different path closes the old engine before loading the new one. The
    lock is held for the whole lease, so a concurrent caller asking for
    another model waits instead of closing an engine that is still in use.
    """

    def __init__(self, engine_factory: Callable[[], SpeechEngine]) -> None:
        self._engine_factory = engine_factory
        self._lock = threading.Lock()
        self._engine: SpeechEngine | None = None
        self._model_path: str | None = None

    @property
    def model_path(self) -> str | None:
        return self._model_path

    @property
    def is_loaded(self) -> bool:
        return self._engine is not None

    @contextlib.contextmanager
    def lease(self, model_path: str | None) -> Iterator[SpeechEngine]:
        """Yield the engine for *model_path*, loading or rebuilding it as needed."""
        with self._lock:
            yield self._ensure(model_path)

    def release(self) -> None:
        """Close the live engine, if any. Safe to call repeatedly."""
        with self._lock:
            self._close_current()

    def _ensure(self, model_path: str | None) -> SpeechEngine:
        if not model_path:
            raise ProviderError('WHISPER_CPP_MODEL_PATH environment variable is not set')
        if not Path(model_path).exists():
            raise ProviderError(f'Whisper model not found at path: {model_path}')

        if self._engine is not None and self._model_path == model_path:
            return self._engine

        self._close_current()

        engine = self._engine_factory()
        log.info('Loading whisper model: %s', model_path)
        try:
            engine.load_model(model_path)
        except NotFoundError as exc:
            raise ProviderError(f'Whisper model not found at path: {model_path}') from exc
        except Exception as exc:
            raise ProviderError(f'Failed to load whisper model {model_path}: {exc}') from exc

        self._engine = engine
        self._model_path = model_path
        return engine

    def _close_current(self) -> None:
        if self._engine is None:
            return
        log.info('Releasing whisper model: %s', self._model_path)
        engine = self._engine
        self._engine = None
        self._model_path = None
        engine.close()
