"""Settings do download de mídia dos provedores WhatsApp.

Timeouts, cabeçalhos e template da URL de mídia da API oficial (Meta).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_META_MEDIA_URL_TEMPLATE = (
    "https://api.chakrahq.com/v1/whatsapp/v19.0/media/{media_id}/show"
)
DEFAULT_MEDIA_USER_AGENT = "PostmanRuntime/7.29.2"


@dataclass(frozen=True)
class MediaSettings:
    """Configurações do fluxo de mídia.

    Attributes:
        fetch_timeout_seconds: Timeout total da resolução de uma mídia
            (download + upload)
        user_agent: User-Agent enviado apenas em downloads autenticados
        meta_media_url_template: Template com {media_id} para mídia Meta
        forward_unknown_events: Encaminha eventos de formato desconhecido
            sem alteração em vez de descartar
    """

    fetch_timeout_seconds: float = 60.0
    user_agent: str = DEFAULT_MEDIA_USER_AGENT
    meta_media_url_template: str = DEFAULT_META_MEDIA_URL_TEMPLATE
    forward_unknown_events: bool = False

    def meta_media_url(self, media_id: str) -> str:
        """URL de download de uma mídia Meta a partir do id opaco."""
        return self.meta_media_url_template.format(media_id=media_id)

    def validate(self) -> list[str]:
        """Valida configurações de mídia.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.fetch_timeout_seconds <= 0:
            errors.append("MEDIA_FETCH_TIMEOUT_SECONDS deve ser > 0")

        if "{media_id}" not in self.meta_media_url_template:
            errors.append("META_MEDIA_URL_TEMPLATE deve conter {media_id}")

        return errors


def _load_media_from_env() -> MediaSettings:
    """Carrega MediaSettings de variáveis de ambiente."""
    return MediaSettings(
        fetch_timeout_seconds=float(os.getenv("MEDIA_FETCH_TIMEOUT_SECONDS", "60")),
        user_agent=os.getenv("MEDIA_FETCH_USER_AGENT", DEFAULT_MEDIA_USER_AGENT),
        meta_media_url_template=os.getenv(
            "META_MEDIA_URL_TEMPLATE", DEFAULT_META_MEDIA_URL_TEMPLATE
        ),
        forward_unknown_events=os.getenv("FORWARD_UNKNOWN_EVENTS", "false").lower()
        in ("true", "1", "yes"),
    )


@lru_cache(maxsize=1)
def get_media_settings() -> MediaSettings:
    """Retorna instância cacheada de MediaSettings."""
    return _load_media_from_env()
