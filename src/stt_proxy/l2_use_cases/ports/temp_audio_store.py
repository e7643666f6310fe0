"""Port: scoped temporary storage for in-memory audio."""

from __future__ import annotations

from contextlib import AbstractContextManager
from pathlib import Path
from typing import Protocol


class TempAudioStore(Protocol):
    def materialize(self, data: bytes) -> AbstractContextManager[Path]:
        """Write *data* to a unique temp file; the file is removed when the context exits."""
        ...
