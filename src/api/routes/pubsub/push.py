"""Endpoint de push do Pub/Sub.

- POST /pubsub/push: cada push é um lote de um evento

Respostas:
- 204: processado, ignorado ou envelope malformado (ack)
- 500: erro fatal (nack, o Pub/Sub reentrega)
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request, Response, status

from api.routes.pubsub.envelope import InvalidEnvelopeError, parse_push_envelope

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/push")
async def receive_push(request: Request) -> Response:
    """Recebe um evento da push subscription e processa o lote."""
    processor = getattr(request.app.state, "batch_processor", None)
    if processor is None:
        logger.error("pubsub_push_processor_unavailable")
        return Response(status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    raw_body = await request.body()
    try:
        event, subscription = parse_push_envelope(raw_body)
    except InvalidEnvelopeError as exc:
        logger.warning(
            "pubsub_push_invalid_envelope",
            extra={"error": str(exc), "payload_size": len(raw_body)},
        )
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    logger.info(
        "pubsub_push_received",
        extra={"delivery_id": event.delivery_id, "subscription": subscription},
    )

    try:
        await processor.execute([event])
    except Exception:
        # Já logado como critical pelo handler do lote
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
