"""Configuration Pydantic models — pure schema, no infrastructure defaults."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CLOUDFLARE_MODEL = '@cf/openai/whisper-large-v3-turbo'
DEFAULT_CLOUDFLARE_API_BASE = 'https://api.cloudflare.com/client/v4'


class SttSettings(BaseModel):
    """One snapshot of provider settings. Rebuilt on every transcription call."""

    model_config = ConfigDict(frozen=True)

    provider: str | None = None
    whisper_model_path: str | None = None
    cloudflare_account_id: str | None = None
    cloudflare_auth_key: str | None = Field(default=None, repr=False)
    cloudflare_model: str = DEFAULT_CLOUDFLARE_MODEL
    cloudflare_api_base: str = DEFAULT_CLOUDFLARE_API_BASE
    request_timeout: float = Field(default=120.0, gt=0)
