"""Tests for the whisper.cpp model catalog and downloader."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from stt_proxy.l3_interface_adapters.gateways.whisper_model_catalog import (
    AVAILABLE_MODELS,
    WHISPER_CPP_REPO,
    WhisperModelDownloader,
    _make_progress_class,  # noqa: PLC2701 -- testing private helper
    available_models,
    model_filename,
    model_url,
)

MODULE = 'stt_proxy.l3_interface_adapters.gateways.whisper_model_catalog'


class TestCatalog:
    def test_known_sizes_listed(self):
        models = available_models()
        assert models[0] == 'tiny'
        assert 'base.en' in models
        assert models[-1] == 'large-v3-turbo'

    def test_available_models_is_a_copy(self):
        available_models().append('bogus')
        assert 'bogus' not in AVAILABLE_MODELS

    def test_filename(self):
        assert model_filename('base.en') == 'ggml-base.en.bin'

    def test_url(self):
        assert model_url('tiny') == 'https://huggingface.co/ggerganov/whisper.cpp/resolve/main/ggml-tiny.bin'

    def test_unknown_model_rejected(self):
        with pytest.raises(ValueError, match="Unknown whisper.cpp model 'huge'"):
            model_url('huge')


class TestDownloader:
    @patch(f'{MODULE}.hf_hub_download')
    def test_downloads_into_dest(self, mock_download, tmp_path: Path):
        dest = tmp_path / 'models'
        mock_download.return_value = str(dest / 'ggml-tiny.bin')

        path = WhisperModelDownloader().download('tiny', dest)

        assert path == dest / 'ggml-tiny.bin'
        assert dest.is_dir()
        kwargs = mock_download.call_args.kwargs
        assert kwargs['repo_id'] == WHISPER_CPP_REPO
        assert kwargs['filename'] == 'ggml-tiny.bin'
        assert kwargs['local_dir'] == dest
        assert 'tqdm_class' not in kwargs

    @patch(f'{MODULE}.hf_hub_download')
    def test_progress_callback_passes_tqdm_class(self, mock_download, tmp_path: Path):
        mock_download.return_value = str(tmp_path / 'ggml-tiny.bin')
        WhisperModelDownloader(on_progress=lambda p: None).download('tiny', tmp_path)
        assert 'tqdm_class' in mock_download.call_args.kwargs

    @patch(f'{MODULE}.hf_hub_download')
    def test_existing_file_reused(self, mock_download, tmp_path: Path):
        existing = tmp_path / 'ggml-base.bin'
        existing.write_bytes(b'ggml')

        assert WhisperModelDownloader().download('base', tmp_path) == existing
        mock_download.assert_not_called()

    @patch(f'{MODULE}.hf_hub_download')
    def test_empty_file_is_redownloaded(self, mock_download, tmp_path: Path):
        (tmp_path / 'ggml-base.bin').touch()
        mock_download.return_value = str(tmp_path / 'ggml-base.bin')

        WhisperModelDownloader().download('base', tmp_path)

        mock_download.assert_called_once()

    @patch(f'{MODULE}.hf_hub_download')
    def test_unknown_model_never_downloads(self, mock_download, tmp_path: Path):
        with pytest.raises(ValueError):
            WhisperModelDownloader().download('huge', tmp_path)
        mock_download.assert_not_called()


class TestProgressClass:
    def test_reports_zero_on_init(self):
        calls = []
        cls = _make_progress_class(calls.append)
        cls(total=1000)
        assert calls == [0]

    def test_reports_percentage_on_update(self):
        calls = []
        reporter = _make_progress_class(calls.append)(total=100)
        reporter.update(50)
        reporter.update(50)
        assert calls == [0, 50, 100]

    def test_repeated_percent_reported_once(self):
        calls = []
        reporter = _make_progress_class(calls.append)(total=1000)
        reporter.update(1)
        reporter.update(1)
        assert calls == [0]

    def test_no_callback_when_total_is_zero(self):
        calls = []
        reporter = _make_progress_class(calls.append)(total=0)
        reporter.update(10)
        assert calls == []

    def test_caps_at_100(self):
        calls = []
        reporter = _make_progress_class(calls.append)(total=50)
        reporter.update(60)
        assert calls[-1] == 100

    def test_tqdm_surface_is_noop(self):
        with _make_progress_class(lambda p: None)(total=100) as reporter:
            reporter.set_description('downloading')
            reporter.set_description_str('downloading')
            reporter.refresh()
            reporter.update(100)
