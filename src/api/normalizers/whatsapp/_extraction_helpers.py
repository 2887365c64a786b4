"""Helpers de navegação usados pelos extractors Whapi e Meta."""

from __future__ import annotations

from typing import Any


def first_item(value: Any) -> Any:
    """Primeiro elemento de uma lista, ou None."""
    if isinstance(value, list) and value:
        return value[0]
    return None


def non_empty_str(value: Any) -> str | None:
    """Converte escalares para string; None para vazio/ausente/containers."""
    if value is None or isinstance(value, (dict, list)):
        return None
    text = value if isinstance(value, str) else str(value)
    return text or None


def message_type(message: Any) -> str | None:
    """Tipo declarado da mensagem (`type`)."""
    if not isinstance(message, dict):
        return None
    return non_empty_str(message.get("type"))


def media_node(message: dict[str, Any], media_kind: str) -> dict[str, Any] | None:
    """Nó de mídia da mensagem (`message[<type>]`), se for objeto."""
    node = message.get(media_kind)
    return node if isinstance(node, dict) else None
