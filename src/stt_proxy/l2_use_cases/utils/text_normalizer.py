"""Normalize raw transcription text before it leaves the library."""

from __future__ import annotations

import re

_CONTROL_CHARS = re.compile(r'[\x00-\x1f\x7f]')


def normalize_text(text: str) -> str:
    """Strip ASCII control characters (0x00-0x1F, 0x7F) and surrounding whitespace."""
    return _CONTROL_CHARS.sub('', text).strip()
