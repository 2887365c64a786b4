"""Testes das settings carregadas de variáveis de ambiente."""

from __future__ import annotations

import pytest

from config.settings import (
    DEFAULT_META_MEDIA_URL_TEMPLATE,
    CredentialBrokerSettings,
    GCSSettings,
    MediaSettings,
    PubSubSettings,
    get_base_settings,
    get_credential_broker_settings,
    get_gcs_settings,
    get_media_settings,
    get_pubsub_settings,
)


class TestMediaSettings:
    def test_defaults(self) -> None:
        settings = get_media_settings()
        assert settings.fetch_timeout_seconds == 60.0
        assert settings.user_agent == "PostmanRuntime/7.29.2"
        assert settings.meta_media_url_template == DEFAULT_META_MEDIA_URL_TEMPLATE
        assert settings.forward_unknown_events is False
        assert settings.validate() == []

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MEDIA_FETCH_TIMEOUT_SECONDS", "15")
        monkeypatch.setenv("FORWARD_UNKNOWN_EVENTS", "true")
        monkeypatch.setenv("META_MEDIA_URL_TEMPLATE", "https://m/{media_id}")

        settings = get_media_settings()

        assert settings.fetch_timeout_seconds == 15.0
        assert settings.forward_unknown_events is True
        assert settings.meta_media_url("abc") == "https://m/abc"

    def test_default_meta_media_url(self) -> None:
        assert MediaSettings().meta_media_url("med1") == (
            "https://api.chakrahq.com/v1/whatsapp/v19.0/media/med1/show"
        )

    def test_validate(self) -> None:
        errors = MediaSettings(fetch_timeout_seconds=0, meta_media_url_template="x").validate()
        assert len(errors) == 2

    def test_settings_are_cached(self) -> None:
        assert get_media_settings() is get_media_settings()


class TestGCSSettings:
    def test_public_url(self) -> None:
        settings = GCSSettings(backend="gcs", bucket_media="b1")
        assert settings.public_url("c1/2024-01/x.jpg") == (
            "https://storage.googleapis.com/b1/c1/2024-01/x.jpg"
        )

    def test_memory_backend_forbidden_outside_development(self) -> None:
        assert GCSSettings().validate(is_development=True) == []
        assert GCSSettings().validate(is_development=False)

    def test_gcs_requires_bucket(self) -> None:
        errors = GCSSettings(backend="gcs").validate(is_development=True)
        assert errors == ["GCS_BUCKET_MEDIA não configurado"]

    def test_chunk_size_granularity(self) -> None:
        errors = GCSSettings(upload_chunk_size_bytes=1000).validate(is_development=True)
        assert len(errors) == 1

    def test_loaded_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MEDIA_STORE_BACKEND", "GCS")
        monkeypatch.setenv("GCS_BUCKET_MEDIA", "media")
        settings = get_gcs_settings()
        assert settings.backend == "gcs"
        assert settings.bucket_media == "media"


class TestPubSubSettings:
    def test_pubsub_requires_project(self) -> None:
        settings = PubSubSettings(backend="pubsub")
        assert settings.validate(gcp_project="", is_development=True)
        assert settings.validate(gcp_project="p1", is_development=True) == []

    def test_loaded_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PUBLISHER_BACKEND", "pubsub")
        monkeypatch.setenv("PUBSUB_TOPIC_PROCESSED", "out")
        monkeypatch.setenv("PUBSUB_PUBLISH_TIMEOUT_SECONDS", "5")
        settings = get_pubsub_settings()
        assert (settings.backend, settings.topic_processed) == ("pubsub", "out")
        assert settings.publish_timeout_seconds == 5.0


class TestCredentialBrokerSettings:
    def test_url_required_outside_development(self) -> None:
        assert CredentialBrokerSettings().validate(is_development=True) == []
        assert CredentialBrokerSettings().validate(is_development=False)

    def test_rejects_non_http_url(self) -> None:
        errors = CredentialBrokerSettings(url="ftp://x").validate(is_development=True)
        assert errors == ["CREDENTIAL_BROKER_URL deve ser http(s)"]

    def test_loaded_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CREDENTIAL_BROKER_URL", "https://broker")
        monkeypatch.setenv("CREDENTIAL_BROKER_USE_ID_TOKEN", "1")
        settings = get_credential_broker_settings()
        assert settings.enabled
        assert settings.use_id_token is True


class TestBaseSettings:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("prod", "production"), ("STAGE", "staging"), ("whatever", "development")],
    )
    def test_environment_aliases(
        self, monkeypatch: pytest.MonkeyPatch, raw: str, expected: str
    ) -> None:
        monkeypatch.setenv("ENVIRONMENT", raw)
        assert get_base_settings().environment == expected

    def test_gcp_project_fallback(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GOOGLE_CLOUD_PROJECT", "p-fallback")
        assert get_base_settings().gcp_project == "p-fallback"
