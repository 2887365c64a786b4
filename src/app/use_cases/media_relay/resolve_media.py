"""Resolução de mídia: download em streaming + gravação no storage.

Um único escopo de timeout cobre o par fetch+store. Qualquer falha é
logada e devolve None; o chamador mantém o locator original.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING

from app.observability import record_latency

if TYPE_CHECKING:
    from app.protocols import MediaFetcherProtocol, MediaStoreProtocol

logger = logging.getLogger(__name__)

DEFAULT_RESOLVE_TIMEOUT_SECONDS = 60.0


class MediaResolver:
    """Combina fetcher e store sob um único timeout.

    Args:
        fetcher: Download HTTP em streaming
        store: Object storage
        timeout_seconds: Limite do par fetch+store
    """

    def __init__(
        self,
        *,
        fetcher: MediaFetcherProtocol,
        store: MediaStoreProtocol,
        timeout_seconds: float = DEFAULT_RESOLVE_TIMEOUT_SECONDS,
    ) -> None:
        self._fetcher = fetcher
        self._store = store
        self._timeout = timeout_seconds

    async def _fetch_and_store(
        self,
        source_url: str,
        partition_key: str,
        media_kind: str,
        token: str | None,
    ) -> str:
        async with self._fetcher.open(source_url, token) as media:
            return await self._store.store(
                partition_key=partition_key,
                media_kind=media_kind,
                chunks=media.chunks,
                content_length=media.content_length,
                content_type=media.content_type,
            )

    async def resolve(
        self,
        source_url: str,
        partition_key: str,
        media_kind: str,
        token: str | None = None,
    ) -> str | None:
        """Baixa `source_url`, grava sob `partition_key` e retorna a URL estável.

        Returns:
            URL no storage ou None em qualquer falha (status HTTP,
            transporte, timeout, storage).
        """
        started = time.perf_counter()
        try:
            locator = await asyncio.wait_for(
                self._fetch_and_store(source_url, partition_key, media_kind, token),
                timeout=self._timeout,
            )
        except TimeoutError:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.error(
                "media_resolve_timeout",
                extra={"media_kind": media_kind, "timeout_seconds": self._timeout},
            )
            record_latency("media_resolver", "resolve", elapsed_ms, outcome="timeout")
            return None
        except Exception as exc:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.error(
                "media_resolve_failed",
                extra={
                    "media_kind": media_kind,
                    "error_type": type(exc).__name__,
                    "status_code": getattr(exc, "status_code", None),
                },
            )
            record_latency("media_resolver", "resolve", elapsed_ms, outcome="failed")
            return None

        record_latency(
            "media_resolver",
            "resolve",
            (time.perf_counter() - started) * 1000,
            outcome="stored",
        )
        return locator
