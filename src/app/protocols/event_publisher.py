"""Protocolo de publicação na fila de saída."""

from __future__ import annotations

from typing import Protocol


class EventPublisherProtocol(Protocol):
    """Contrato mínimo para publicar o JSON normalizado.

    Falhas levantam PublishError e não devem ser capturadas por mensagem.
    """

    async def publish(self, json_text: str) -> str: ...
