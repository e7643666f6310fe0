"""Gateway: decode any audio file to whisper-ready PCM via an ffmpeg subprocess."""

from __future__ import annotations

import logging
import shutil
import subprocess  # noqa: S404 -- intentional: fixed arg list, never shell=True
from pathlib import Path

import numpy as np

from stt_proxy.l1_entities.audio_constants import CHANNELS, PCM_FORMAT, SAMPLE_RATE
from stt_proxy.l1_entities.errors import NotFoundError, ProviderError

log = logging.getLogger('stt.ffmpeg')

FFMPEG_TIMEOUT = 300  # seconds


def ffmpeg_command(path: Path) -> list[str]:
    """Arguments that decode *path* to raw little-endian float32 mono 16 kHz on stdout."""
    return [
        'ffmpeg',
        '-nostdin',
        '-i',
        str(path),
        '-ar',
        str(SAMPLE_RATE),
        '-ac',
        str(CHANNELS),
        '-f',
        PCM_FORMAT,
        '-v',
        'error',
        'pipe:1',
    ]


def decode_audio_file(path: Path) -> np.ndarray:
    """Return the samples of *path* as a float32 array.

    Raises:
        NotFoundError: the audio file does not exist.
        ProviderError: ffmpeg is missing, failed, timed out, or produced no samples.
    """
    if not path.is_file():
        raise NotFoundError(f'Audio file not found: {path}')

    if shutil.which('ffmpeg') is None:
        raise ProviderError(
            'ffmpeg is required but not found on PATH.\n  macOS:  brew install ffmpeg\n  Debian: apt install ffmpeg'
        )

    cmd = ffmpeg_command(path)
    log.debug('Running %s', ' '.join(cmd))
    try:
        proc = subprocess.run(cmd, capture_output=True, timeout=FFMPEG_TIMEOUT, check=False)  # noqa: S603
    except subprocess.TimeoutExpired as exc:
        raise ProviderError(f'Audio conversion timed out after {FFMPEG_TIMEOUT}s: {path}') from exc
    except OSError as exc:
        raise ProviderError(f'Failed to launch ffmpeg: {exc}') from exc

    if proc.returncode != 0:
        detail = proc.stderr.decode('utf-8', errors='replace').strip()
        raise ProviderError(f'Audio conversion failed (ffmpeg exit code {proc.returncode}) for {path}: {detail}')

    # A trailing partial sample would make frombuffer raise; drop it.
    usable = len(proc.stdout) - len(proc.stdout) % 4
    samples = np.frombuffer(proc.stdout[:usable], dtype='<f4').astype(np.float32, copy=False)
    if samples.size == 0:
        raise ProviderError(f'Audio conversion produced no samples for: {path}')
    log.debug('Decoded %d samples (%.1fs) from %s', samples.size, samples.size / SAMPLE_RATE, path.name)
    return samples
