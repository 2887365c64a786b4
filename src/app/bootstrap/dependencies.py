"""Factories de adapters e use cases: criação conforme settings.

Backends:
- MEDIA_STORE_BACKEND: memory (dev) | gcs
- PUBLISHER_BACKEND: memory (dev) | pubsub
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.bootstrap.clients import create_publisher_client, create_storage_client
from app.constants.whatsapp import ProviderKind
from app.infra.credentials import HttpCredentialBrokerClient
from app.infra.credentials.broker_client import fetch_oidc_token
from app.infra.media import GCSMediaStore, HttpMediaFetcher
from app.infra.pubsub import PubSubEventPublisher
from app.infra.stores import MemoryEventPublisher, MemoryMediaStore
from app.use_cases.media_relay import (
    IntakeDispatcher,
    MediaResolver,
    MetaOfficialNormalizer,
    ProcessBatchUseCase,
    WhapiNormalizer,
)
from config.settings import (
    get_base_settings,
    get_credential_broker_settings,
    get_gcs_settings,
    get_media_settings,
    get_pubsub_settings,
)

if TYPE_CHECKING:
    import httpx

    from app.protocols import (
        CredentialBrokerProtocol,
        EventPublisherProtocol,
        MediaStoreProtocol,
    )

logger = logging.getLogger(__name__)


def create_media_store() -> MediaStoreProtocol:
    """Cria media store conforme MEDIA_STORE_BACKEND."""
    settings = get_gcs_settings()

    if settings.backend == "gcs":
        bucket = create_storage_client().bucket(settings.bucket_media)
        logger.info("media_store_created", extra={"backend": "gcs"})
        return GCSMediaStore(
            bucket,
            public_url_template=settings.public_url_template,
            chunk_size=settings.upload_chunk_size_bytes,
        )

    if settings.backend == "memory":
        logger.info("media_store_created", extra={"backend": "memory"})
        return MemoryMediaStore()

    msg = f"MEDIA_STORE_BACKEND inválido: {settings.backend}"
    raise ValueError(msg)


def create_event_publisher() -> EventPublisherProtocol:
    """Cria publisher conforme PUBLISHER_BACKEND."""
    settings = get_pubsub_settings()

    if settings.backend == "pubsub":
        client = create_publisher_client()
        project_id = settings.project_id or get_base_settings().gcp_project
        topic_path = client.topic_path(project_id, settings.topic_processed)
        logger.info("event_publisher_created", extra={"backend": "pubsub"})
        return PubSubEventPublisher(
            client,
            topic_path,
            timeout_seconds=settings.publish_timeout_seconds,
        )

    if settings.backend == "memory":
        logger.info("event_publisher_created", extra={"backend": "memory"})
        return MemoryEventPublisher()

    msg = f"PUBLISHER_BACKEND inválido: {settings.backend}"
    raise ValueError(msg)


def create_credential_broker(http_client: httpx.AsyncClient) -> CredentialBrokerProtocol:
    """Cria cliente do credential broker."""
    settings = get_credential_broker_settings()
    return HttpCredentialBrokerClient(
        http_client,
        url=settings.url,
        timeout_seconds=settings.timeout_seconds,
        id_token_provider=fetch_oidc_token if settings.use_id_token else None,
    )


def create_batch_processor(
    http_client: httpx.AsyncClient,
    *,
    media_store: MediaStoreProtocol | None = None,
    publisher: EventPublisherProtocol | None = None,
    credential_broker: CredentialBrokerProtocol | None = None,
) -> ProcessBatchUseCase:
    """Monta o pipeline completo: batch -> dispatcher -> normalizers -> adapters.

    Adapters podem ser injetados (testes); os demais vêm das settings.
    """
    media_settings = get_media_settings()

    resolver = MediaResolver(
        fetcher=HttpMediaFetcher(http_client, user_agent=media_settings.user_agent),
        store=media_store or create_media_store(),
        timeout_seconds=media_settings.fetch_timeout_seconds,
    )
    dispatcher = IntakeDispatcher(
        normalizers={
            ProviderKind.WHAPI: WhapiNormalizer(resolver),
            ProviderKind.META_OFFICIAL: MetaOfficialNormalizer(
                resolver=resolver,
                credential_broker=credential_broker or create_credential_broker(http_client),
                media_url_for=media_settings.meta_media_url,
            ),
        },
        publisher=publisher or create_event_publisher(),
        forward_unknown=media_settings.forward_unknown_events,
    )
    logger.info("batch_processor_created")
    return ProcessBatchUseCase(dispatcher)
