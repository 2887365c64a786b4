"""Factories de clientes externos: HTTP, Cloud Storage e Pub/Sub.

Clientes GCP são singletons; o AsyncClient HTTP é criado no lifespan
e fechado no shutdown.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from app.infra.media import build_media_http_client
from config.settings import get_base_settings, get_media_settings, get_pubsub_settings

if TYPE_CHECKING:
    import httpx
    from google.cloud.pubsub_v1 import PublisherClient
    from google.cloud.storage import Client as StorageClient

logger = logging.getLogger(__name__)


def create_http_client() -> httpx.AsyncClient:
    """Cria o AsyncClient compartilhado por fetcher e broker."""
    client = build_media_http_client(get_media_settings().fetch_timeout_seconds)
    logger.info("http_client_created")
    return client


@lru_cache(maxsize=1)
def create_storage_client() -> StorageClient:
    """Cria cliente do Cloud Storage (singleton)."""
    from google.cloud import storage

    project_id = get_base_settings().gcp_project or None
    client = storage.Client(project=project_id)
    logger.info("storage_client_created", extra={"project": project_id})
    return client


@lru_cache(maxsize=1)
def create_publisher_client() -> PublisherClient:
    """Cria PublisherClient do Pub/Sub (singleton)."""
    from google.cloud import pubsub_v1

    client = pubsub_v1.PublisherClient()
    logger.info(
        "pubsub_publisher_created",
        extra={"topic": get_pubsub_settings().topic_processed},
    )
    return client
