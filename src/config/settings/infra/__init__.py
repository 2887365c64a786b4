"""Settings dos backends GCP (Cloud Storage e Pub/Sub)."""

from __future__ import annotations

from config.settings.infra.gcs import (
    DEFAULT_PUBLIC_URL_TEMPLATE,
    GCSSettings,
    MediaStoreBackend,
    get_gcs_settings,
)
from config.settings.infra.pubsub import PublisherBackend, PubSubSettings, get_pubsub_settings

__all__ = [
    "DEFAULT_PUBLIC_URL_TEMPLATE",
    "GCSSettings",
    "MediaStoreBackend",
    "PubSubSettings",
    "PublisherBackend",
    "get_gcs_settings",
    "get_pubsub_settings",
]
