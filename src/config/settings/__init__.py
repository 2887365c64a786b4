"""Settings do relay, uma dataclass congelada por domínio.

Cada getter lê o ambiente uma vez (lru_cache); `clear_settings_cache`
existe para os testes.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)

# Credential broker
from config.settings.credential_broker import (
    CredentialBrokerSettings,
    get_credential_broker_settings,
)

# Infrastructure settings
from config.settings.infra import (
    DEFAULT_PUBLIC_URL_TEMPLATE,
    GCSSettings,
    MediaStoreBackend,
    PublisherBackend,
    PubSubSettings,
    get_gcs_settings,
    get_pubsub_settings,
)

# Media settings
from config.settings.media import (
    DEFAULT_MEDIA_USER_AGENT,
    DEFAULT_META_MEDIA_URL_TEMPLATE,
    MediaSettings,
    get_media_settings,
)

__all__ = [
    # Constants
    "DEFAULT_MEDIA_USER_AGENT",
    "DEFAULT_META_MEDIA_URL_TEMPLATE",
    "DEFAULT_PUBLIC_URL_TEMPLATE",
    # Base
    "BaseSettings",
    # Credential broker
    "CredentialBrokerSettings",
    "Environment",
    # Infrastructure
    "GCSSettings",
    # Media
    "MediaSettings",
    "MediaStoreBackend",
    "PubSubSettings",
    "PublisherBackend",
    "clear_settings_cache",
    "get_base_settings",
    "get_credential_broker_settings",
    "get_gcs_settings",
    "get_media_settings",
    "get_pubsub_settings",
]


def clear_settings_cache() -> None:
    """Limpa o cache de todas as settings (uso em testes)."""
    for getter in (
        get_base_settings,
        get_credential_broker_settings,
        get_gcs_settings,
        get_media_settings,
        get_pubsub_settings,
    ):
        getter.cache_clear()
