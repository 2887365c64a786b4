"""Formatter JSON dos logs estruturados (python-json-logger)."""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Ordem fixa no output; campos de `extra` vêm depois
REQUIRED_LOG_FIELDS: tuple[str, ...] = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "asctime": "timestamp",
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Exemplo de output:
        {"timestamp": "2026-02-02T10:30:00", "level": "INFO",
         "logger": "app.use_cases.media_relay.intake_dispatcher",
         "message": "event_forwarded", "correlation_id": "1234",
         "service": "media_relay", "provider": "whapi"}
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)

    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
        datefmt="%Y-%m-%dT%H:%M:%S%z",
        json_ensure_ascii=False,
    )
