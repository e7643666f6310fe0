"""Gateway: whisper.cpp ggml model catalog and Hugging Face downloader."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from huggingface_hub import hf_hub_download

log = logging.getLogger('stt.models')

WHISPER_CPP_REPO = 'ggerganov/whisper.cpp'

AVAILABLE_MODELS = [
    'tiny',
    'tiny.en',
    'base',
    'base.en',
    'small',
    'small.en',
    'medium',
    'medium.en',
    'large',
    'large-v2',
    'large-v3',
    'large-v3-turbo',
]


def available_models() -> list[str]:
    return list(AVAILABLE_MODELS)


def model_filename(model: str) -> str:
    if model not in AVAILABLE_MODELS:
        raise ValueError(f"Unknown whisper.cpp model '{model}'. Available: {', '.join(AVAILABLE_MODELS)}")
    return f'ggml-{model}.bin'


def model_url(model: str) -> str:
    return f'https://huggingface.co/{WHISPER_CPP_REPO}/resolve/main/{model_filename(model)}'


def _make_progress_class(callback: Callable[[int], None]) -> type:
    """Create a tqdm-compatible class that reports download progress via *callback*."""

    class _ProgressReporter:
        def __init__(self, *args, **kwargs):
            self.total: int = kwargs.get('total', 0) or 0
            self.n: int = 0
            self._last = -1
            if self.total > 0:
                self._report(0)

        def _report(self, percent: int) -> None:
            if percent != self._last:
                self._last = percent
                callback(percent)

        def update(self, n: int = 1) -> None:
            self.n += n
            if self.total > 0:
                self._report(min(int(self.n / self.total * 100), 100))

        def close(self) -> None:
            pass

        def set_description(self, *a, **kw) -> None:
            pass

        def set_description_str(self, *a, **kw) -> None:
            pass

        def refresh(self) -> None:
            pass

        def __enter__(self):
            return self

        def __exit__(self, *args):
            self.close()

    return _ProgressReporter


class WhisperModelDownloader:
    """Fetches ggml models into *dest*, reusing a file that is already there."""

    def __init__(self, on_progress: Callable[[int], None] | None = None) -> None:
        self._on_progress = on_progress

    def download(self, model: str, dest: Path) -> Path:
        filename = model_filename(model)
        dest.mkdir(parents=True, exist_ok=True)
        local_path = dest / filename
        if local_path.exists() and local_path.stat().st_size > 0:
            log.info('Model already present: %s', local_path)
            return local_path

        kwargs: dict = dict(repo_id=WHISPER_CPP_REPO, filename=filename, local_dir=dest)
        if self._on_progress is not None:
            kwargs['tqdm_class'] = _make_progress_class(self._on_progress)
        log.info('Downloading %s from %s', filename, WHISPER_CPP_REPO)
        return Path(hf_hub_download(**kwargs))
