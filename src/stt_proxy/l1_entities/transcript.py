"""Transcript segment entity."""

from __future__ import annotations

from pydantic import BaseModel, Field


class TranscriptSegment(BaseModel):
    """A single chunk of recognized speech, as returned by the local engine."""

    text: str
    start: float = Field(default=0.0, description='Offset in seconds from the start of the audio')
    end: float = Field(default=0.0, description='Offset in seconds from the start of the audio')
