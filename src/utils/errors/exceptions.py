"""Exceções de infraestrutura do relay de mídia.

Falhas de mídia (download/upload) são contidas pelo resolvedor e viram
degradação; falha de publicação é fatal e deve subir até o handler do lote.
"""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura externa."""


class MediaFetchError(InfrastructureError):
    """Falha ao baixar mídia do provedor (status não-2xx ou transporte)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MediaStoreError(InfrastructureError):
    """Falha ao gravar mídia no object storage."""


class PublishError(InfrastructureError):
    """Falha ao publicar evento normalizado na fila de saída.

    Nunca deve ser capturada no fluxo por mensagem: dispara reentrega do lote.
    """
