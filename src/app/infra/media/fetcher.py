"""Download de mídia dos provedores WhatsApp em streaming.

O corpo nunca é bufferizado: os chunks seguem direto para o storage.
"""

from __future__ import annotations

import logging
import re
import ssl
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import httpx

from app.protocols.models import FetchedMedia
from config.settings.media import DEFAULT_MEDIA_USER_AGENT
from utils.errors import MediaFetchError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 60.0

_BEARER_PREFIX = re.compile(r"^(?:\s*bearer\s+)+", re.IGNORECASE)


def clean_token(token: str) -> str:
    """Remove prefixos `Bearer ` (qualquer caixa, repetidos) do token."""
    return _BEARER_PREFIX.sub("", token).strip()


def build_ssl_context() -> ssl.SSLContext:
    """Contexto TLS com verificação padrão e versão mínima 1.2."""
    ssl_context = ssl.create_default_context()
    ssl_context.minimum_version = ssl.TLSVersion.TLSv1_2
    return ssl_context


def build_media_http_client(timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS) -> httpx.AsyncClient:
    """Cria o AsyncClient compartilhado por fetcher e broker."""
    return httpx.AsyncClient(
        verify=build_ssl_context(),
        timeout=httpx.Timeout(timeout_seconds),
        follow_redirects=True,
    )


class HttpMediaFetcher:
    """Abre downloads de mídia com httpx.AsyncClient.stream.

    Args:
        client: AsyncClient compartilhado (ciclo de vida no bootstrap)
        user_agent: User-Agent enviado junto do bearer token
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        user_agent: str = DEFAULT_MEDIA_USER_AGENT,
    ) -> None:
        self._client = client
        self._user_agent = user_agent

    def _headers(self, token: str | None) -> dict[str, str]:
        if not token:
            return {}
        cleaned = clean_token(token)
        if not cleaned:
            return {}
        return {
            "Authorization": f"Bearer {cleaned}",
            "User-Agent": self._user_agent,
        }

    @asynccontextmanager
    async def open(self, url: str, token: str | None = None) -> AsyncIterator[FetchedMedia]:
        """Abre o download e entrega os chunks do corpo.

        Raises:
            MediaFetchError: Status não-2xx ou falha de transporte.
        """
        try:
            async with self._client.stream("GET", url, headers=self._headers(token)) as response:
                if not response.is_success:
                    logger.warning(
                        "media_fetch_bad_status",
                        extra={"status_code": response.status_code},
                    )
                    raise MediaFetchError(
                        f"media download returned HTTP {response.status_code}",
                        status_code=response.status_code,
                    )

                yield FetchedMedia(
                    chunks=response.aiter_bytes(),
                    content_length=_parse_content_length(response.headers.get("content-length")),
                    content_type=response.headers.get("content-type") or None,
                )
        except httpx.HTTPError as exc:
            raise MediaFetchError(f"media download failed: {type(exc).__name__}") from exc


def _parse_content_length(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        length = int(value)
    except ValueError:
        return None
    return length if length >= 0 else None
