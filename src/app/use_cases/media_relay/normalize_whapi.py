"""Normalizer de eventos Whapi.

Baixa a mídia de `messages[0].<tipo>.link` (URL direta, sem auth),
grava sob o channel_id e reescreve `link` com a URL estável.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from api.normalizers import extract_whapi_media, get_channel_id, replace_at
from app.protocols.models import NormalizationResult
from config.logging import log_fallback

if TYPE_CHECKING:
    from app.use_cases.media_relay.resolve_media import MediaResolver

logger = logging.getLogger(__name__)

COMPONENT = "whapi_normalizer"


class WhapiNormalizer:
    """Normaliza eventos Whapi. Nunca levanta exceção."""

    def __init__(self, resolver: MediaResolver) -> None:
        self._resolver = resolver

    async def normalize(self, document: dict[str, Any]) -> NormalizationResult:
        try:
            return await self._normalize(document)
        except Exception as exc:
            logger.error(
                "whapi_normalize_error",
                extra={"error_type": type(exc).__name__},
            )
            return NormalizationResult(document=document, outcome="degraded", reason="error")

    async def _normalize(self, document: dict[str, Any]) -> NormalizationResult:
        reference, reason = extract_whapi_media(document)
        if reference is None:
            logger.debug("whapi_no_media", extra={"reason": reason})
            return NormalizationResult(document=document, outcome="unchanged", reason=reason)

        channel_id = get_channel_id(document) or ""
        stable_locator = await self._resolver.resolve(
            reference.locator,
            channel_id,
            reference.kind,
        )
        if stable_locator is None:
            log_fallback(
                logger,
                COMPONENT,
                reason="media_unresolved",
                provider="whapi",
                media_kind=reference.kind,
            )
            return NormalizationResult(
                document=document,
                outcome="degraded",
                reason="media_unresolved",
            )

        logger.info("whapi_media_resolved", extra={"media_kind": reference.kind})
        return NormalizationResult(
            document=replace_at(document, reference.target_path, stable_locator),
            outcome="resolved",
            stable_locator=stable_locator,
        )
