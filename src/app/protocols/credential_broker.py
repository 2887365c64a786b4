"""Protocolo do broker de credenciais (tokens Meta por conta)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .models import Credential


class CredentialBrokerProtocol(Protocol):
    """Contrato mínimo: nunca levanta; None quando não há token."""

    async def resolve_token(self, account_id: str | None) -> Credential | None: ...
