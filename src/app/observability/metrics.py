"""Métricas do relay registradas como logs estruturados.

Agregáveis depois via Cloud Logging / BigQuery (log-based metrics).
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    *,
    outcome: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Componente (ex: "media_resolver")
        operation: Operação (ex: "resolve")
        latency_ms: Latência em milissegundos
        outcome: Resultado curto (ex: "stored", "timeout")
    """
    extra: dict[str, object] = {
        "metric_type": "latency",
        "component": component,
        "operation": operation,
        "latency_ms": round(latency_ms, 2),
    }
    if outcome:
        extra["outcome"] = outcome
    logger.info("metric_latency", extra=extra)


def record_media_bytes(media_kind: str, size_bytes: int) -> None:
    """Registra volume de bytes gravados no storage por tipo de mídia."""
    logger.info(
        "metric_media_bytes",
        extra={
            "metric_type": "media_bytes",
            "media_kind": media_kind,
            "size_bytes": size_bytes,
        },
    )


def record_event_outcome(provider: str, status: str, reason: str | None = None) -> None:
    """Counter de eventos por provedor e destino (forwarded/skipped)."""
    logger.info(
        "metric_event_outcome",
        extra={
            "metric_type": "event_outcome",
            "provider": provider,
            "status": status,
            "reason": reason,
        },
    )


def record_batch(total: int, forwarded: int, skipped: int, latency_ms: float) -> None:
    """Resumo de um lote processado."""
    logger.info(
        "metric_batch",
        extra={
            "metric_type": "batch",
            "total": total,
            "forwarded": forwarded,
            "skipped": skipped,
            "latency_ms": round(latency_ms, 2),
        },
    )
