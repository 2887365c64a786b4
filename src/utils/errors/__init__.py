"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    InfrastructureError,
    MediaFetchError,
    MediaStoreError,
    PublishError,
)

__all__ = [
    "InfrastructureError",
    "MediaFetchError",
    "MediaStoreError",
    "PublishError",
]
