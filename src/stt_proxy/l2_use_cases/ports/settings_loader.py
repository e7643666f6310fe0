"""Port: settings loader."""

from __future__ import annotations

from typing import Protocol

from stt_proxy.l1_entities.config import SttSettings


class SettingsLoader(Protocol):
    """Abstract settings source. Called once per transcription, never cached."""

    def load(self) -> SttSettings:
        """Build a fresh settings snapshot. Raises ConfigurationError on invalid values."""
        ...
