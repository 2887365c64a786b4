"""Settings do Google Cloud Storage.

Bucket de mídia e formato da URL estável devolvida ao downstream.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

MediaStoreBackend = Literal["memory", "gcs"]

DEFAULT_PUBLIC_URL_TEMPLATE = "https://storage.googleapis.com/{bucket}/{key}"

# Uploads resumíveis exigem múltiplos de 256 KiB
_UPLOAD_CHUNK_GRANULARITY = 256 * 1024


@dataclass(frozen=True)
class GCSSettings:
    """Configurações do Google Cloud Storage.

    Attributes:
        backend: Backend do media store (memory|gcs)
        bucket_media: Bucket para mídia (imagens, vídeos, áudio, documentos)
        public_url_template: Template com {bucket} e {key}
        upload_chunk_size_bytes: Tamanho do chunk do upload resumível
    """

    backend: MediaStoreBackend = "memory"
    bucket_media: str = ""
    public_url_template: str = DEFAULT_PUBLIC_URL_TEMPLATE
    upload_chunk_size_bytes: int = 8 * 1024 * 1024

    def public_url(self, key: str) -> str:
        """URL estável do objeto gravado."""
        return self.public_url_template.format(bucket=self.bucket_media, key=key)

    def validate(self, is_development: bool) -> list[str]:
        """Valida configurações do GCS.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.backend not in ("memory", "gcs"):
            errors.append(f"MEDIA_STORE_BACKEND inválido: {self.backend}")

        if self.backend == "memory" and not is_development:
            errors.append(
                "MEDIA_STORE_BACKEND=memory proibido em staging/production. Use gcs."
            )

        if self.backend == "gcs" and not self.bucket_media:
            errors.append("GCS_BUCKET_MEDIA não configurado")

        if "{key}" not in self.public_url_template:
            errors.append("GCS_PUBLIC_URL_TEMPLATE deve conter {key}")

        if (
            self.upload_chunk_size_bytes <= 0
            or self.upload_chunk_size_bytes % _UPLOAD_CHUNK_GRANULARITY
        ):
            errors.append("GCS_UPLOAD_CHUNK_SIZE_BYTES deve ser múltiplo de 262144")

        return errors


def _load_gcs_from_env() -> GCSSettings:
    """Carrega GCSSettings de variáveis de ambiente."""
    backend_str = os.getenv("MEDIA_STORE_BACKEND", "memory").lower()
    backend: MediaStoreBackend = "gcs" if backend_str == "gcs" else "memory"

    return GCSSettings(
        backend=backend,
        bucket_media=os.getenv("GCS_BUCKET_MEDIA", ""),
        public_url_template=os.getenv("GCS_PUBLIC_URL_TEMPLATE", DEFAULT_PUBLIC_URL_TEMPLATE),
        upload_chunk_size_bytes=int(
            os.getenv("GCS_UPLOAD_CHUNK_SIZE_BYTES", str(8 * 1024 * 1024))
        ),
    )


@lru_cache(maxsize=1)
def get_gcs_settings() -> GCSSettings:
    """Retorna instância cacheada de GCSSettings."""
    return _load_gcs_from_env()
