"""Adapters de mídia: download HTTP em streaming e gravação no GCS."""

from __future__ import annotations

from app.infra.media.fetcher import HttpMediaFetcher, build_media_http_client
from app.infra.media.gcs_store import GCSMediaStore

__all__ = [
    "GCSMediaStore",
    "HttpMediaFetcher",
    "build_media_http_client",
]
