"""Gateway: scoped temp files for in-memory audio — implements TempAudioStore port."""

from __future__ import annotations

import contextlib
import logging
import secrets
import time
from collections.abc import Iterator
from pathlib import Path

from stt_proxy.l3_interface_adapters.gateways.paths import temp_dir

log = logging.getLogger('stt.tempfile')


class TempAudioFileStore:
    def __init__(self, directory: Path | None = None, prefix: str = 'stt_input') -> None:
        self._directory = directory
        self._prefix = prefix

    def unique_path(self) -> Path:
        directory = self._directory or temp_dir()
        return directory / f'{self._prefix}_{time.time_ns()}_{secrets.token_hex(6)}.audio'

    @contextlib.contextmanager
    def materialize(self, data: bytes) -> Iterator[Path]:
        path = self.unique_path()
        # 'xb' refuses to clobber a file that somehow already has this name.
        fh = path.open('xb')
        try:
            with fh:
                fh.write(data)
            log.debug('Wrote %d bytes to %s', len(data), path)
            yield path
        finally:
            path.unlink(missing_ok=True)
            log.debug('Removed %s', path)
