"""Observabilidade: correlation_id por entrega e métricas via logs.

Uso:
    from app.observability import bind_correlation_id, record_latency
"""

from app.observability.correlation import (
    bind_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import (
    record_batch,
    record_event_outcome,
    record_latency,
    record_media_bytes,
)

__all__ = [
    "bind_correlation_id",
    "get_correlation_id",
    "record_batch",
    "record_event_outcome",
    "record_latency",
    "record_media_bytes",
    "reset_correlation_id",
    "set_correlation_id",
]
