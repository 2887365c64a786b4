"""Aplicação ASGI do relay de mídia WhatsApp.

Recebe os eventos do webhook via push subscription do Pub/Sub, persiste a
mídia e republica o documento no tópico de saída.

    uvicorn app.app:app --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI

from api.routes import create_api_router
from app.bootstrap import initialize_app, validate_runtime_settings
from app.bootstrap.clients import create_http_client, create_storage_client
from app.bootstrap.dependencies import create_batch_processor
from config.logging import get_logger
from config.settings import get_base_settings, get_gcs_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# Logging precisa estar configurado antes dos primeiros get_logger
initialize_app()

logger = get_logger(__name__)


def _media_bucket() -> Any | None:
    """Bucket usado pelo readiness probe; None com backend em memória."""
    gcs = get_gcs_settings()
    if gcs.backend != "gcs":
        return None
    return create_storage_client().bucket(gcs.bucket_media)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Monta o pipeline no startup e fecha o AsyncClient no shutdown."""
    log_extra = {"service_name": get_base_settings().service_name}
    logger.info("app_starting", extra=log_extra)
    validate_runtime_settings()

    http_client = create_http_client()
    app.state.http_client = http_client
    app.state.batch_processor = create_batch_processor(http_client)
    app.state.media_bucket = _media_bucket()

    try:
        yield
    finally:
        logger.info("app_shutting_down", extra=log_extra)
        app.state.batch_processor = None
        await http_client.aclose()


def create_app() -> FastAPI:
    application = FastAPI(
        title="WhatsApp Media Relay",
        description="Persiste mídia de webhooks WhatsApp e republica o evento",
        version="1.0.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
    )
    application.include_router(create_api_router())
    return application


app = create_app()


def main() -> None:
    """Servidor local com reload."""
    import uvicorn

    uvicorn.run("app.app:app", host="0.0.0.0", port=8080, reload=True)


if __name__ == "__main__":
    main()
