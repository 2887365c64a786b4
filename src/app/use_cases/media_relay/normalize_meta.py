"""Normalizer de eventos da API oficial (Meta).

O nó de mídia traz apenas um id opaco: o download usa o endpoint de
mídia configurado e um token pedido ao credential broker por evento.
O resultado é gravado sob o id da conta e escrito em `<tipo>.url`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from api.normalizers import extract_meta_media, replace_at
from app.protocols.models import NormalizationResult
from config.logging import log_fallback

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.protocols import CredentialBrokerProtocol
    from app.use_cases.media_relay.resolve_media import MediaResolver

logger = logging.getLogger(__name__)

COMPONENT = "meta_normalizer"


class MetaOfficialNormalizer:
    """Normaliza eventos Meta. Nunca levanta exceção.

    Args:
        resolver: Par fetch+store com timeout
        credential_broker: Fonte do bearer token por conta
        media_url_for: Monta a URL de download a partir do media id
    """

    def __init__(
        self,
        *,
        resolver: MediaResolver,
        credential_broker: CredentialBrokerProtocol,
        media_url_for: Callable[[str], str],
    ) -> None:
        self._resolver = resolver
        self._credential_broker = credential_broker
        self._media_url_for = media_url_for

    async def normalize(self, document: dict[str, Any]) -> NormalizationResult:
        try:
            return await self._normalize(document)
        except Exception as exc:
            logger.error(
                "meta_normalize_error",
                extra={"error_type": type(exc).__name__},
            )
            return NormalizationResult(document=document, outcome="degraded", reason="error")

    async def _normalize(self, document: dict[str, Any]) -> NormalizationResult:
        reference, reason = extract_meta_media(document)
        if reference is None:
            logger.debug("meta_no_media", extra={"reason": reason})
            return NormalizationResult(document=document, outcome="unchanged", reason=reason)

        account_id = reference.account_id
        token: str | None = None
        if reference.requires_auth:
            credential = await self._credential_broker.resolve_token(account_id)
            if credential is None:
                log_fallback(
                    logger,
                    COMPONENT,
                    reason="no_credential",
                    provider="meta_official",
                    account_id=account_id,
                )
                return NormalizationResult(
                    document=document,
                    outcome="degraded",
                    reason="no_credential",
                )
            token = credential.token

        stable_locator = await self._resolver.resolve(
            self._media_url_for(reference.locator),
            account_id or "",
            reference.kind,
            token,
        )
        if stable_locator is None:
            log_fallback(
                logger,
                COMPONENT,
                reason="media_unresolved",
                provider="meta_official",
                account_id=account_id,
                media_kind=reference.kind,
            )
            return NormalizationResult(
                document=document,
                outcome="degraded",
                reason="media_unresolved",
            )

        logger.info(
            "meta_media_resolved",
            extra={"account_id": account_id, "media_kind": reference.kind},
        )
        return NormalizationResult(
            document=replace_at(document, reference.target_path, stable_locator),
            outcome="resolved",
            stable_locator=stable_locator,
        )
