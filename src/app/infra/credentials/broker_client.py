"""Cliente HTTP do credential broker.

O broker é uma função interna (Cloud Function / Cloud Run) que recebe
`{"accountId": ...}` e responde `{"success": true, "token": "..."}`.
Tokens nunca são cacheados: cada evento Meta pede um token novo.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import httpx
from google.auth.transport.requests import Request as GoogleRequest
from google.oauth2.id_token import fetch_id_token

from app.protocols.models import Credential

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


def fetch_oidc_token(audience: str) -> str:
    """Obtém ID token do metadata server / ADC para o audience."""
    return fetch_id_token(GoogleRequest(), audience)


class HttpCredentialBrokerClient:
    """Troca o id da conta de negócio por um bearer token.

    Nunca levanta: qualquer falha vira None e é logada.

    Args:
        client: AsyncClient compartilhado
        url: Endpoint do broker
        timeout_seconds: Timeout da chamada
        id_token_provider: Função audience -> ID token; None desativa OIDC
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        url: str,
        timeout_seconds: float = 10.0,
        id_token_provider: Callable[[str], str] | None = None,
    ) -> None:
        self._client = client
        self._url = url
        self._timeout = timeout_seconds
        self._id_token_provider = id_token_provider

    async def _auth_headers(self) -> dict[str, str]:
        if self._id_token_provider is None:
            return {}
        id_token = await asyncio.to_thread(self._id_token_provider, self._url)
        return {"Authorization": f"Bearer {id_token}"}

    async def resolve_token(self, account_id: str | None) -> Credential | None:
        """Retorna o token da conta ou None.

        Args:
            account_id: Id da conta de negócio (entry[0].id do webhook)
        """
        if not account_id:
            logger.warning("credential_broker_missing_account_id")
            return None

        if not self._url:
            logger.error("credential_broker_not_configured", extra={"account_id": account_id})
            return None

        try:
            headers = await self._auth_headers()
            response = await self._client.post(
                self._url,
                json={"accountId": account_id},
                headers=headers,
                timeout=self._timeout,
            )
        except Exception as exc:
            logger.error(
                "credential_broker_request_failed",
                extra={"account_id": account_id, "error_type": type(exc).__name__},
            )
            return None

        if not response.is_success:
            logger.error(
                "credential_broker_bad_status",
                extra={"account_id": account_id, "status_code": response.status_code},
            )
            return None

        try:
            payload = response.json()
        except ValueError:
            logger.error("credential_broker_invalid_json", extra={"account_id": account_id})
            return None

        if not isinstance(payload, dict) or payload.get("success") is not True:
            logger.error("credential_broker_unsuccessful", extra={"account_id": account_id})
            return None

        token = payload.get("token")
        if not isinstance(token, str) or not token.strip():
            logger.error("credential_broker_missing_token", extra={"account_id": account_id})
            return None

        logger.debug("credential_broker_token_resolved", extra={"account_id": account_id})
        return Credential(token=token)
