"""Protocolo de persistência de mídia em object storage."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


class MediaStoreProtocol(Protocol):
    """Contrato mínimo para gravar mídia e devolver o locator estável."""

    async def store(
        self,
        *,
        partition_key: str,
        media_kind: str,
        chunks: AsyncIterator[bytes],
        content_length: int | None = None,
        content_type: str | None = None,
    ) -> str: ...
