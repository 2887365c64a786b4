"""Dispatcher de entrada: parse, detecção de formato, normalização e publicação.

Regras:
- corpo vazio, JSON inválido, null, NaN/Infinity ou aninhamento excessivo => skip
- formato desconhecido => skip, ou encaminhado sem alteração se configurado
- formato conhecido => normalizer (nunca levanta) => publicação sempre

Falhas de publicação NÃO são capturadas aqui: sobem para o handler do lote.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from api.normalizers import detect_provider
from app.constants.whatsapp import ProviderKind
from app.observability import record_event_outcome
from app.protocols.models import DispatchOutcome

if TYPE_CHECKING:
    from app.protocols import EventNormalizerProtocol, EventPublisherProtocol, RawEvent

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    # NaN/Infinity não são JSON válido para o consumidor
    raise ValueError(f"constante JSON não suportada: {name}")


def serialize_document(document: Any) -> str:
    """JSON compacto, preservando caracteres não-ASCII."""
    return json.dumps(document, ensure_ascii=False, allow_nan=False, separators=(",", ":"))


class IntakeDispatcher:
    """Roteia cada RawEvent para o normalizer do provedor e publica.

    Args:
        normalizers: Normalizer por ProviderKind conhecido
        publisher: Fila de saída
        forward_unknown: Encaminha o corpo original de formatos desconhecidos
    """

    def __init__(
        self,
        *,
        normalizers: dict[ProviderKind, EventNormalizerProtocol],
        publisher: EventPublisherProtocol,
        forward_unknown: bool = False,
    ) -> None:
        self._normalizers = normalizers
        self._publisher = publisher
        self._forward_unknown = forward_unknown

    def _skip(self, reason: str, provider: ProviderKind | None = None) -> DispatchOutcome:
        record_event_outcome(str(provider or "none"), "skipped", reason)
        return DispatchOutcome(status="skipped", provider=provider, reason=reason)

    async def process(self, event: RawEvent) -> DispatchOutcome:
        """Processa um evento.

        Raises:
            PublishError: Falha na publicação (fatal para o lote).
        """
        if not event.body or not event.body.strip():
            logger.info("event_skipped_empty_body", extra={"delivery_id": event.delivery_id})
            return self._skip("empty_body")

        try:
            document = json.loads(event.body, parse_constant=_reject_constant)
        except (ValueError, RecursionError):
            logger.warning("event_skipped_invalid_json", extra={"delivery_id": event.delivery_id})
            return self._skip("invalid_json")

        if document is None:
            logger.warning("event_skipped_invalid_json", extra={"delivery_id": event.delivery_id})
            return self._skip("invalid_json")

        provider = detect_provider(document)
        normalizer = self._normalizers.get(provider)

        if normalizer is None:
            if not self._forward_unknown:
                logger.warning(
                    "event_skipped_unknown_format",
                    extra={"delivery_id": event.delivery_id},
                )
                return self._skip("unknown_format", ProviderKind.UNKNOWN)

            await self._publisher.publish(event.body)
            logger.info(
                "event_forwarded_unknown_format",
                extra={"delivery_id": event.delivery_id},
            )
            record_event_outcome(ProviderKind.UNKNOWN, "forwarded", "unknown_format")
            return DispatchOutcome(
                status="forwarded",
                provider=ProviderKind.UNKNOWN,
                reason="unknown_format",
            )

        result = await normalizer.normalize(document)
        await self._publisher.publish(serialize_document(result.document))

        logger.info(
            "event_forwarded",
            extra={
                "delivery_id": event.delivery_id,
                "provider": provider,
                "outcome": result.outcome,
                "reason": result.reason,
            },
        )
        record_event_outcome(provider, "forwarded", result.outcome)
        return DispatchOutcome(status="forwarded", provider=provider, reason=result.reason)
