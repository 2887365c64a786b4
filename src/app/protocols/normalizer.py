"""Protocolos de normalização por provedor."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from .models import NormalizationResult


class EventNormalizerProtocol(Protocol):
    """Contrato mínimo para normalizar um evento já parseado.

    Implementações nunca levantam: falhas viram outcome "degraded".
    """

    async def normalize(self, document: dict[str, Any]) -> NormalizationResult: ...
