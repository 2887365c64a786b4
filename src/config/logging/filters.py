"""Filters aplicados ao handler JSON.

`CorrelationIdFilter` preenche `correlation_id` e `service`;
`SecretRedactionFilter` mascara credenciais passadas em `extra`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

REDACTED = "***"

SENSITIVE_KEYS = frozenset({"token", "access_token", "authorization", "bearer"})


def _no_correlation_id() -> str:
    return ""


class CorrelationIdFilter(logging.Filter):
    """Completa o record com o id da entrega atual, sem sobrescrever um explícito."""

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._correlation_id = correlation_id_getter or _no_correlation_id

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlation_id", None):
            record.correlation_id = self._correlation_id()
        record.service = self._service_name
        return True


class SecretRedactionFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        for key in SENSITIVE_KEYS.intersection(vars(record)):
            if getattr(record, key):
                setattr(record, key, REDACTED)
        return True
