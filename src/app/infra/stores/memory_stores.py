"""Backends em memória: apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from app.constants.whatsapp import DEFAULT_CONTENT_TYPE
from app.domain.media import build_object_key, new_object_id

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

MEMORY_URL_PREFIX = "memory://media/"


@dataclass(slots=True)
class StoredObject:
    """Objeto gravado no MemoryMediaStore."""

    key: str
    data: bytes
    content_type: str
    metadata: dict[str, str] = field(default_factory=dict)


class MemoryMediaStore:
    """Media store em memória: dev/test."""

    def __init__(self, url_prefix: str = MEMORY_URL_PREFIX) -> None:
        self._url_prefix = url_prefix
        self.objects: dict[str, StoredObject] = {}

    async def store(
        self,
        *,
        partition_key: str,
        media_kind: str,
        chunks: AsyncIterator[bytes],
        content_length: int | None = None,
        content_type: str | None = None,
    ) -> str:
        key = build_object_key(
            partition_key,
            media_kind,
            now=datetime.now(UTC),
            object_id=new_object_id(),
        )
        buffer = bytearray()
        async for chunk in chunks:
            buffer.extend(chunk)

        metadata = {}
        if content_length is not None:
            metadata["source-content-length"] = str(content_length)
        self.objects[key] = StoredObject(
            key=key,
            data=bytes(buffer),
            content_type=content_type or DEFAULT_CONTENT_TYPE,
            metadata=metadata,
        )
        return f"{self._url_prefix}{key}"


class MemoryEventPublisher:
    """Publisher em memória: guarda o texto publicado na ordem recebida."""

    def __init__(self) -> None:
        self.published: list[str] = []
        self._ids = itertools.count(1)

    async def publish(self, json_text: str) -> str:
        self.published.append(json_text)
        return f"memory-{next(self._ids)}"
