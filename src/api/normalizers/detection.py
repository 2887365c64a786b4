"""Detecção do formato do webhook por sondagem estrutural.

- `channel_id` não vazio => Whapi
- `object` e `entry` presentes => Meta (API oficial)
- qualquer outro formato => desconhecido
"""

from __future__ import annotations

from typing import Any

from app.constants.whatsapp import ProviderKind


def get_channel_id(document: Any) -> str | None:
    """Retorna o channel_id (Whapi) como string ou None se ausente/vazio."""
    if not isinstance(document, dict):
        return None
    value = document.get("channel_id")
    if value is None:
        return None
    channel_id = value if isinstance(value, str) else str(value)
    return channel_id or None


def detect_provider(document: Any) -> ProviderKind:
    """Classifica o documento parseado em um ProviderKind.

    Whapi tem precedência quando ambos os formatos aparecem no mesmo JSON.
    """
    if not isinstance(document, dict):
        return ProviderKind.UNKNOWN
    if get_channel_id(document):
        return ProviderKind.WHAPI
    if document.get("object") is not None and document.get("entry") is not None:
        return ProviderKind.META_OFFICIAL
    return ProviderKind.UNKNOWN
