"""Publicação de eventos normalizados no Cloud Pub/Sub."""

from __future__ import annotations

from app.infra.pubsub.publisher import PubSubEventPublisher

__all__ = ["PubSubEventPublisher"]
