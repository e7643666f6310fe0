"""Tests for request / option / output entities."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from stt_proxy.l1_entities.config import DEFAULT_CLOUDFLARE_MODEL, SttSettings
from stt_proxy.l1_entities.transcription import TranscribeOptions, TranscribeOutput, TranscriptionRequest


class TestTranscribeOptions:
    def test_defaults_are_unset(self):
        opts = TranscribeOptions()
        assert opts.language is None
        assert opts.translate is None

    def test_false_and_empty_are_kept_distinct_from_unset(self):
        opts = TranscribeOptions(language='', translate=False)
        assert opts.language == ''
        assert opts.translate is False

    def test_frozen(self):
        with pytest.raises(ValidationError):
            TranscribeOptions().language = 'en'


class TestTranscriptionRequest:
    def test_path_source(self):
        req = TranscriptionRequest(audio=Path('/a.wav'))
        assert req.audio == Path('/a.wav')
        assert not req.is_buffer

    def test_bytes_source(self):
        req = TranscriptionRequest(audio=b'abc')
        assert req.audio == b'abc'
        assert req.is_buffer

    def test_immutable(self):
        req = TranscriptionRequest(audio=b'abc')
        with pytest.raises(ValidationError):
            req.audio = b'other'


class TestTranscribeOutput:
    def test_only_text(self):
        assert TranscribeOutput(text='hi').model_dump() == {'text': 'hi'}


class TestSttSettings:
    def test_defaults(self):
        s = SttSettings()
        assert s.provider is None
        assert s.cloudflare_model == DEFAULT_CLOUDFLARE_MODEL
        assert s.request_timeout == 120.0

    def test_auth_key_hidden_from_repr(self):
        assert 'secret' not in repr(SttSettings(cloudflare_auth_key='secret'))

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            SttSettings(request_timeout=0)
