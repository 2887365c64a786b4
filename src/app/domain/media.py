"""Regras puras de mídia: extensão por tipo e layout da chave no storage."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from app.constants.whatsapp import FALLBACK_EXTENSION, MEDIA_EXTENSIONS, MEDIA_KINDS

if TYPE_CHECKING:
    from datetime import datetime


def is_media_kind(message_type: object) -> bool:
    """Retorna True se o tipo da mensagem carrega mídia persistível."""
    return isinstance(message_type, str) and message_type in MEDIA_KINDS


def extension_for(media_kind: str) -> str:
    """Extensão do objeto a partir do tipo (case-insensitive)."""
    return MEDIA_EXTENSIONS.get(media_kind.lower(), FALLBACK_EXTENSION)


def new_object_id() -> str:
    """Identificador aleatório do objeto (uuid4 em hex, sem hífens)."""
    return uuid.uuid4().hex


def build_object_key(
    partition_key: str,
    media_kind: str,
    *,
    now: datetime,
    object_id: str,
) -> str:
    """Monta a chave `{partition}/{YYYY-MM}/{id}{ext}`.

    Args:
        partition_key: Pasta do objeto (channel_id ou id da conta Meta).
        media_kind: Tipo da mídia; define a extensão.
        now: Instante usado para a partição mensal.
        object_id: Identificador aleatório já gerado.
    """
    return f"{partition_key}/{now:%Y-%m}/{object_id}{extension_for(media_kind)}"
