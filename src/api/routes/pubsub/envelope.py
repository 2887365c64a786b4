"""Parse do envelope de push do Pub/Sub.

Formato:
{
  "message": {"data": "<base64>", "messageId": "123", "attributes": {...}},
  "subscription": "projects/.../subscriptions/..."
}
"""

from __future__ import annotations

import base64
import binascii

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from app.protocols.models import RawEvent


class InvalidEnvelopeError(ValueError):
    """Envelope de push malformado: reentrega nunca teria sucesso."""


class PushMessage(BaseModel):
    """Mensagem dentro do envelope de push."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    data: str = ""
    message_id: str = Field(default="", alias="messageId")
    attributes: dict[str, str] = Field(default_factory=dict)


class PushEnvelope(BaseModel):
    """Envelope enviado pela push subscription."""

    model_config = ConfigDict(extra="ignore")

    message: PushMessage
    subscription: str = ""


def parse_push_envelope(raw_body: bytes) -> tuple[RawEvent, str]:
    """Converte o corpo do push em RawEvent.

    Returns:
        (evento, subscription)

    Raises:
        InvalidEnvelopeError: JSON inválido, sem `message` ou `data` não-base64.
    """
    try:
        envelope = PushEnvelope.model_validate_json(raw_body)
    except ValidationError as exc:
        raise InvalidEnvelopeError(f"envelope inválido: {exc.error_count()} erro(s)") from exc

    try:
        body = base64.b64decode(envelope.message.data, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise InvalidEnvelopeError(f"data inválido: {type(exc).__name__}") from exc

    return RawEvent(body=body, delivery_id=envelope.message.message_id), envelope.subscription
