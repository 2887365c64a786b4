"""Extração da referência de mídia em payloads Whapi.

Formato esperado:
{
  "channel_id": "...",
  "messages": [{"type": "image", "image": {"link": "https://..."}}]
}

Apenas a primeira mensagem é considerada.
"""

from __future__ import annotations

from typing import Any

from app.constants.whatsapp import WHAPI_LOCATOR_FIELD
from app.domain.media import is_media_kind
from app.protocols.models import MediaReference

from ._extraction_helpers import first_item, media_node, message_type, non_empty_str


def extract_whapi_media(document: dict[str, Any]) -> tuple[MediaReference | None, str | None]:
    """Extrai a mídia da primeira mensagem Whapi.

    Returns:
        (referência, None) quando há mídia com `link`;
        (None, motivo) caso contrário: no_message | not_media | empty_locator.
    """
    message = first_item(document.get("messages"))
    if not isinstance(message, dict):
        return None, "no_message"

    kind = message_type(message)
    if not is_media_kind(kind):
        return None, "not_media"

    node = media_node(message, kind)
    link = non_empty_str(node.get(WHAPI_LOCATOR_FIELD)) if node else None
    if not link:
        return None, "empty_locator"

    return (
        MediaReference(
            kind=kind,
            locator=link,
            requires_auth=False,
            target_path=("messages", 0, kind, WHAPI_LOCATOR_FIELD),
        ),
        None,
    )
