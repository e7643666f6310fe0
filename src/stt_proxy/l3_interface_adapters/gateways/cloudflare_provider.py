"""Gateway: Cloudflare Workers AI whisper — implements SpeechProvider port."""

from __future__ import annotations

import base64
import logging
from pathlib import Path

import httpx

from stt_proxy.l1_entities.config import SttSettings
from stt_proxy.l1_entities.errors import NotFoundError, ProviderError
from stt_proxy.l1_entities.provider import ProviderId
from stt_proxy.l1_entities.transcription import TranscribeOptions, TranscribeOutput
from stt_proxy.l2_use_cases.utils.text_normalizer import normalize_text
from stt_proxy.l3_interface_adapters.gateways.env_settings_loader import (
    ENV_CLOUDFLARE_ACCOUNT_ID,
    ENV_CLOUDFLARE_AUTH_KEY,
)

log = logging.getLogger('stt.cloudflare')


def endpoint_url(settings: SttSettings) -> str:
    base = settings.cloudflare_api_base.rstrip('/')
    return f'{base}/accounts/{settings.cloudflare_account_id}/ai/run/{settings.cloudflare_model}'


def build_payload(audio: bytes, options: TranscribeOptions) -> dict:
    payload: dict = {
        'audio': base64.b64encode(audio).decode('ascii'),
        'task': 'translate' if options.translate else 'transcribe',
        'vad_filter': True,
    }
    if options.language is not None:
        payload['language'] = options.language
    return payload


class CloudflareProvider:
    """One authenticated POST per call; no retries."""

    provider_id = ProviderId.CLOUDFLARE

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._transport = transport

    def setting_names(self) -> list[str]:
        return [ENV_CLOUDFLARE_ACCOUNT_ID, ENV_CLOUDFLARE_AUTH_KEY]

    def is_configured(self, settings: SttSettings) -> bool:
        return not self.missing_requirements(settings)

    def missing_requirements(self, settings: SttSettings) -> list[str]:
        missing = []
        if not settings.cloudflare_account_id:
            missing.append(f'{ENV_CLOUDFLARE_ACCOUNT_ID} is not set')
        if not settings.cloudflare_auth_key:
            missing.append(f'{ENV_CLOUDFLARE_AUTH_KEY} is not set')
        return missing

    async def run(self, path: Path, options: TranscribeOptions, settings: SttSettings) -> TranscribeOutput:
        if not path.is_file():
            raise NotFoundError(f'Audio file not found: {path}')
        try:
            audio = path.read_bytes()
        except OSError as exc:
            raise ProviderError(f'Cannot read audio file {path}: {exc}') from exc

        url = endpoint_url(settings)
        headers = {
            'Authorization': f'Bearer {settings.cloudflare_auth_key}',
            'Content-Type': 'application/json',
        }
        log.debug('POST %s (%d audio bytes)', url, len(audio))
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=settings.request_timeout) as client:
                resp = await client.post(url, headers=headers, json=build_payload(audio, options))
        except httpx.HTTPError as exc:
            raise ProviderError(f'Cloudflare API request failed: {exc}') from exc

        if not resp.is_success:
            raise ProviderError(f'Cloudflare API error: {resp.status_code} {resp.reason_phrase} - {resp.text}')

        return TranscribeOutput(text=normalize_text(_extract_text(resp)))


def _extract_text(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError as exc:
        raise ProviderError(f'Cloudflare transcription failed: response is not JSON ({exc})') from exc
    if not isinstance(body, dict):
        body = {}

    result = body.get('result')
    text = result.get('text') if isinstance(result, dict) else None
    if body.get('success') and isinstance(text, str):
        return text

    errors = body.get('errors') or []
    message = errors[0].get('message') if isinstance(errors, list) and errors and isinstance(errors[0], dict) else None
    raise ProviderError(f'Cloudflare transcription failed: {message or "Unknown error"}')
