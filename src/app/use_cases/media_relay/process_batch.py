"""Handler de lote: processa eventos em sequência, sem fan-out.

O primeiro erro fatal interrompe o lote e sobe para o transporte,
que reentrega o lote inteiro.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from app.observability import bind_correlation_id, record_batch
from app.protocols.models import BatchSummary

if TYPE_CHECKING:
    from collections.abc import Iterable

    from app.protocols import RawEvent
    from app.use_cases.media_relay.intake_dispatcher import IntakeDispatcher

logger = logging.getLogger(__name__)


class ProcessBatchUseCase:
    """Executa o dispatcher para cada evento do lote."""

    def __init__(self, dispatcher: IntakeDispatcher) -> None:
        self._dispatcher = dispatcher

    async def execute(self, events: Iterable[RawEvent]) -> BatchSummary:
        """Processa o lote em ordem.

        Raises:
            Exception: O primeiro erro fatal, após log crítico com o delivery_id.
        """
        started = time.perf_counter()
        total = forwarded = skipped = 0

        for event in events:
            total += 1
            with bind_correlation_id(event.delivery_id):
                try:
                    outcome = await self._dispatcher.process(event)
                except Exception as exc:
                    logger.critical(
                        "batch_event_failed",
                        extra={
                            "delivery_id": event.delivery_id,
                            "error_type": type(exc).__name__,
                        },
                    )
                    raise

            if outcome.forwarded:
                forwarded += 1
            else:
                skipped += 1

        summary = BatchSummary(total=total, forwarded=forwarded, skipped=skipped)
        record_batch(total, forwarded, skipped, (time.perf_counter() - started) * 1000)
        return summary
