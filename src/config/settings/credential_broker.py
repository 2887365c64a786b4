"""Settings do credential broker.

Serviço interno que troca o id da conta de negócio por um bearer token
usado no download de mídia da API oficial.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class CredentialBrokerSettings:
    """Configurações do credential broker.

    Attributes:
        url: Endpoint HTTP do broker (POST {"accountId": ...})
        timeout_seconds: Timeout da chamada ao broker
        use_id_token: Envia OIDC ID token (audience = url) na chamada
    """

    url: str = ""
    timeout_seconds: float = 10.0
    use_id_token: bool = False

    @property
    def enabled(self) -> bool:
        """True se há endpoint configurado."""
        return bool(self.url)

    def validate(self, is_development: bool) -> list[str]:
        """Valida configurações do broker.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if not self.url and not is_development:
            errors.append("CREDENTIAL_BROKER_URL não configurado")

        if self.url and not self.url.startswith(("https://", "http://")):
            errors.append("CREDENTIAL_BROKER_URL deve ser http(s)")

        if self.timeout_seconds <= 0:
            errors.append("CREDENTIAL_BROKER_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _load_credential_broker_from_env() -> CredentialBrokerSettings:
    """Carrega CredentialBrokerSettings de variáveis de ambiente."""
    return CredentialBrokerSettings(
        url=os.getenv("CREDENTIAL_BROKER_URL", ""),
        timeout_seconds=float(os.getenv("CREDENTIAL_BROKER_TIMEOUT_SECONDS", "10")),
        use_id_token=os.getenv("CREDENTIAL_BROKER_USE_ID_TOKEN", "false").lower()
        in ("true", "1", "yes"),
    )


@lru_cache(maxsize=1)
def get_credential_broker_settings() -> CredentialBrokerSettings:
    """Retorna instância cacheada de CredentialBrokerSettings."""
    return _load_credential_broker_from_env()
