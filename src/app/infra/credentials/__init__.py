"""Clientes de credenciais para download de mídia autenticado."""

from __future__ import annotations

from app.infra.credentials.broker_client import HttpCredentialBrokerClient

__all__ = ["HttpCredentialBrokerClient"]
