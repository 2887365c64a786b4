"""Protocolo de download de mídia em streaming."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from contextlib import AbstractAsyncContextManager

    from .models import FetchedMedia


class MediaFetcherProtocol(Protocol):
    """Contrato mínimo para baixar mídia sem bufferizar o corpo.

    O context manager levanta MediaFetchError para status não-2xx e libera
    a conexão ao sair.
    """

    def open(
        self,
        url: str,
        token: str | None = None,
    ) -> AbstractAsyncContextManager[FetchedMedia]: ...
