"""L1 entity: provider identities and their fixed auto-selection order."""

from __future__ import annotations

import enum


class ProviderId(enum.Enum):
    WHISPER_CPP = 'whisper-cpp'
    CLOUDFLARE = 'cloudflare'


# Auto-selection tries providers in this order; first configured one wins.
PROVIDER_PRIORITY: tuple[ProviderId, ...] = (ProviderId.WHISPER_CPP, ProviderId.CLOUDFLARE)

PROVIDER_ALIASES: dict[str, ProviderId] = {
    'whisper': ProviderId.WHISPER_CPP,
    'whispercpp': ProviderId.WHISPER_CPP,
    'whisper_cpp': ProviderId.WHISPER_CPP,
    'whisper.cpp': ProviderId.WHISPER_CPP,
    'local': ProviderId.WHISPER_CPP,
    'cf': ProviderId.CLOUDFLARE,
    'workers-ai': ProviderId.CLOUDFLARE,
}


def parse_provider_name(name: str) -> ProviderId | None:
    """Match *name* case-insensitively against provider values and aliases."""
    key = name.strip().lower()
    for provider in ProviderId:
        if provider.value == key:
            return provider
    return PROVIDER_ALIASES.get(key)


def provider_names() -> list[str]:
    return [p.value for p in PROVIDER_PRIORITY]
