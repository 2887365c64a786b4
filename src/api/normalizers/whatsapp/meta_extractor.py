"""Extração da referência de mídia em payloads da API oficial (Meta).

Formato esperado:
{
  "object": "whatsapp_business_account",
  "entry": [{
    "id": "<business_account_id>",
    "changes": [{
      "value": {"messages": [{"type": "document", "document": {"id": "<media_id>"}}]}
    }]
  }]
}

O `id` do nó de mídia é opaco: o download exige endpoint construído e token.
"""

from __future__ import annotations

from typing import Any

from app.constants.whatsapp import META_LOCATOR_FIELD
from app.domain.media import is_media_kind
from app.protocols.models import MediaReference

from ._extraction_helpers import first_item, media_node, message_type, non_empty_str


def get_business_account_id(document: dict[str, Any]) -> str | None:
    """Id da conta de negócio (`entry[0].id`)."""
    entry = first_item(document.get("entry"))
    if not isinstance(entry, dict):
        return None
    return non_empty_str(entry.get("id"))


def _first_message(document: dict[str, Any]) -> Any:
    entry = first_item(document.get("entry"))
    if not isinstance(entry, dict):
        return None
    change = first_item(entry.get("changes"))
    if not isinstance(change, dict):
        return None
    value = change.get("value")
    if not isinstance(value, dict):
        return None
    return first_item(value.get("messages"))


def extract_meta_media(document: dict[str, Any]) -> tuple[MediaReference | None, str | None]:
    """Extrai a mídia de `entry[0].changes[0].value.messages[0]`.

    Returns:
        (referência, None) quando há mídia com `id`;
        (None, motivo) caso contrário: no_message | not_media | empty_locator.
    """
    message = _first_message(document)
    if not isinstance(message, dict):
        return None, "no_message"

    kind = message_type(message)
    if not is_media_kind(kind):
        return None, "not_media"

    node = media_node(message, kind)
    media_id = non_empty_str(node.get("id")) if node else None
    if not media_id:
        return None, "empty_locator"

    return (
        MediaReference(
            kind=kind,
            locator=media_id,
            requires_auth=True,
            target_path=(
                "entry", 0, "changes", 0, "value", "messages", 0, kind, META_LOCATOR_FIELD,
            ),
            account_id=get_business_account_id(document),
        ),
        None,
    )
