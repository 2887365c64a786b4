"""Composition root do relay.

`initialize_app` liga o logging JSON ao correlation id da entrega;
`validate_runtime_settings` impede boot com configuração inválida fora
de development. As factories concretas ficam em `dependencies`.
"""

from __future__ import annotations

import logging

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_credential_broker_settings,
    get_gcs_settings,
    get_media_settings,
    get_pubsub_settings,
)

STRICT_VALIDATION_ENVS = frozenset({"staging", "production"})

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    base = get_base_settings()
    configure_logging(
        level=base.log_level,
        service_name=base.service_name,
        correlation_id_getter=get_correlation_id,
    )


def collect_settings_errors() -> list[str]:
    """Erros de todas as settings, cada um prefixado pelo grupo (`gcs: ...`)."""
    base = get_base_settings()
    dev = base.is_development
    groups = (
        ("base", base.validate()),
        ("media", get_media_settings().validate()),
        ("gcs", get_gcs_settings().validate(dev)),
        ("pubsub", get_pubsub_settings().validate(base.gcp_project, dev)),
        ("credential_broker", get_credential_broker_settings().validate(dev)),
    )
    return [f"{group}: {error}" for group, errors in groups for error in errors]


def validate_runtime_settings() -> None:
    """Loga o resultado da validação; levanta RuntimeError em staging/production."""
    environment = get_base_settings().environment
    errors = collect_settings_errors()
    log_context: dict[str, object] = {"component": "bootstrap", "environment": environment}

    if not errors:
        logger.info("settings_validated", extra={**log_context, "result": "ok"})
        return

    logger.warning(
        "settings_validation_failed",
        extra={**log_context, "result": "failed", "error_count": len(errors), "errors": errors},
    )
    if environment not in STRICT_VALIDATION_ENVS:
        return

    details = "\n".join(f"- {error}" for error in errors)
    raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")
