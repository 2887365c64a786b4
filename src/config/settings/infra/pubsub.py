"""Settings do Pub/Sub.

Tópico de saída para eventos já normalizados.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

PublisherBackend = Literal["memory", "pubsub"]


@dataclass(frozen=True)
class PubSubSettings:
    """Configurações do Pub/Sub.

    Attributes:
        backend: Backend do publisher (memory|pubsub)
        project_id: Projeto do tópico (default: GCP_PROJECT)
        topic_processed: Tópico que recebe o JSON normalizado
        publish_timeout_seconds: Tempo máximo aguardando confirmação do publish
    """

    backend: PublisherBackend = "memory"
    project_id: str = ""
    topic_processed: str = "whatsapp-media-processed"
    publish_timeout_seconds: float = 30.0

    def validate(self, gcp_project: str, is_development: bool) -> list[str]:
        """Valida configurações do Pub/Sub.

        Args:
            gcp_project: Projeto GCP padrão.
            is_development: Se está em ambiente de desenvolvimento.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.backend not in ("memory", "pubsub"):
            errors.append(f"PUBLISHER_BACKEND inválido: {self.backend}")

        if self.backend == "memory" and not is_development:
            errors.append(
                "PUBLISHER_BACKEND=memory proibido em staging/production. Use pubsub."
            )

        if self.backend == "pubsub" and not (self.project_id or gcp_project):
            errors.append("PUBLISHER_BACKEND=pubsub requer PUBSUB_PROJECT_ID ou GCP_PROJECT")

        if not self.topic_processed:
            errors.append("PUBSUB_TOPIC_PROCESSED não pode ser vazio")

        if self.publish_timeout_seconds <= 0:
            errors.append("PUBSUB_PUBLISH_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _load_pubsub_from_env() -> PubSubSettings:
    """Carrega PubSubSettings de variáveis de ambiente."""
    backend_str = os.getenv("PUBLISHER_BACKEND", "memory").lower()
    backend: PublisherBackend = "pubsub" if backend_str == "pubsub" else "memory"

    return PubSubSettings(
        backend=backend,
        project_id=os.getenv("PUBSUB_PROJECT_ID", ""),
        topic_processed=os.getenv("PUBSUB_TOPIC_PROCESSED", "whatsapp-media-processed"),
        publish_timeout_seconds=float(os.getenv("PUBSUB_PUBLISH_TIMEOUT_SECONDS", "30")),
    )


@lru_cache(maxsize=1)
def get_pubsub_settings() -> PubSubSettings:
    """Retorna instância cacheada de PubSubSettings."""
    return _load_pubsub_from_env()
