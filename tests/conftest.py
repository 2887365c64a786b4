"""Configuração do pytest para o relay de mídia."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from config.settings import clear_settings_cache  # noqa: E402

_SETTINGS_ENV_VARS = (
    "ENVIRONMENT",
    "SERVICE_NAME",
    "LOG_LEVEL",
    "GCP_PROJECT",
    "GOOGLE_CLOUD_PROJECT",
    "MEDIA_FETCH_TIMEOUT_SECONDS",
    "MEDIA_FETCH_USER_AGENT",
    "META_MEDIA_URL_TEMPLATE",
    "FORWARD_UNKNOWN_EVENTS",
    "MEDIA_STORE_BACKEND",
    "GCS_BUCKET_MEDIA",
    "GCS_PUBLIC_URL_TEMPLATE",
    "GCS_UPLOAD_CHUNK_SIZE_BYTES",
    "PUBLISHER_BACKEND",
    "PUBSUB_PROJECT_ID",
    "PUBSUB_TOPIC_PROCESSED",
    "PUBSUB_PUBLISH_TIMEOUT_SECONDS",
    "CREDENTIAL_BROKER_URL",
    "CREDENTIAL_BROKER_TIMEOUT_SECONDS",
    "CREDENTIAL_BROKER_USE_ID_TOKEN",
)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch):
    """Cada teste começa com env limpa e cache de settings vazio."""
    for name in _SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()
