"""Setup do logging JSON do relay.

`configure_logging` roda uma vez no bootstrap; o resto do código só
chama `get_logger(__name__)` e passa contexto via `extra`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter, SecretRedactionFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "media_relay"

# Bibliotecas HTTP/GCP logam URLs completas em DEBUG
_NOISY_LOGGERS = ("httpx", "httpcore", "google.auth", "urllib3")


def _resolve_level(level: str) -> str:
    normalized = level.upper()
    if normalized in VALID_LOG_LEVELS:
        return normalized
    allowed = ", ".join(sorted(VALID_LOG_LEVELS))
    raise ValueError(f"Nível de log inválido: {level}. Válidos: {allowed}")


def _build_handler(
    level: str,
    service_name: str,
    correlation_id_getter: Callable[[], str] | None,
) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(create_json_formatter())
    for log_filter in (
        CorrelationIdFilter(service_name, correlation_id_getter),
        SecretRedactionFilter(),
    ):
        handler.addFilter(log_filter)
    return handler


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Substitui os handlers do root logger por um único handler JSON.

    Args:
        level: Nível mínimo (case-insensitive).
        service_name: Valor do campo `service` em todo record.
        correlation_id_getter: Callable que devolve o id da entrega atual,
            normalmente app.observability.get_correlation_id.

    Raises:
        ValueError: Nível desconhecido.
    """
    resolved = _resolve_level(level)

    root = logging.getLogger()
    root.handlers = [_build_handler(resolved, service_name, correlation_id_getter)]
    root.setLevel(resolved)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_fallback(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
    elapsed_ms: float | None = None,
    **fields: object,
) -> None:
    """Emite `media_fallback_applied` quando o documento segue sem a mídia resolvida.

    Ex.: log_fallback(logger, "whapi_normalizer", reason="timeout", elapsed_ms=60000.0)
    """
    extra: dict[str, object] = {"fallback_used": True, "component": component, **fields}
    if reason:
        extra["reason"] = reason
    if elapsed_ms is not None:
        extra["elapsed_ms"] = round(elapsed_ms, 2)
    logger.warning("media_fallback_applied", extra=extra)
