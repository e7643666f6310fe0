"""Transcription request / response entities."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class TranscribeOptions(BaseModel):
    """Caller-supplied transcription settings.

    ``None`` means "not supplied": providers omit the setting entirely rather
    than sending a default, since engines treat absent and false differently.
    """

    model_config = ConfigDict(frozen=True)

    language: str | None = None
    translate: bool | None = None


class TranscriptionRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    audio: Path | bytes
    options: TranscribeOptions = Field(default_factory=TranscribeOptions)

    @property
    def is_buffer(self) -> bool:
        return isinstance(self.audio, bytes)


class TranscribeOutput(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
