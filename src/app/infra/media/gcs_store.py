"""Media store no Google Cloud Storage.

Grava a mídia via upload resumível em chunks, sem montar o arquivo
inteiro em memória. O SDK do GCS é síncrono: cada escrita roda em
asyncio.to_thread para não bloquear o event loop.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from app.constants.whatsapp import DEFAULT_CONTENT_TYPE
from app.domain.media import build_object_key, new_object_id
from app.observability import record_media_bytes
from utils.errors import MediaStoreError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

    from google.cloud.storage import Bucket
    from google.cloud.storage.fileio import BlobWriter

logger = logging.getLogger(__name__)

CONTENT_LENGTH_METADATA_KEY = "source-content-length"


class GCSMediaStore:
    """Grava mídia em `{partition}/{YYYY-MM}/{uuid}{ext}` no bucket.

    Args:
        bucket: Bucket do google-cloud-storage
        public_url_template: Template com {bucket} e {key}
        chunk_size: Tamanho do chunk do upload resumível (múltiplo de 256 KiB)
        clock: Fonte de tempo (UTC) para a partição mensal
    """

    def __init__(
        self,
        bucket: Bucket,
        *,
        public_url_template: str,
        chunk_size: int = 8 * 1024 * 1024,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._bucket = bucket
        self._public_url_template = public_url_template
        self._chunk_size = chunk_size
        self._clock = clock or (lambda: datetime.now(UTC))

    async def store(
        self,
        *,
        partition_key: str,
        media_kind: str,
        chunks: AsyncIterator[bytes],
        content_length: int | None = None,
        content_type: str | None = None,
    ) -> str:
        """Grava os chunks e retorna a URL estável do objeto.

        Se o stream de origem falhar ou a chamada for cancelada no meio, a
        sessão resumível é cancelada (`BlobWriter.terminate`)
        e nenhum objeto fica visível no bucket.

        Raises:
            MediaStoreError: Falha do GCS ao abrir, escrever ou finalizar.
            MediaFetchError: Propagada do stream de origem.
        """
        key = build_object_key(
            partition_key,
            media_kind,
            now=self._clock(),
            object_id=new_object_id(),
        )
        blob = self._bucket.blob(key, chunk_size=self._chunk_size)
        if content_length is not None:
            blob.metadata = {CONTENT_LENGTH_METADATA_KEY: str(content_length)}

        try:
            writer = await asyncio.to_thread(
                blob.open,
                "wb",
                content_type=content_type or DEFAULT_CONTENT_TYPE,
            )
        except Exception as exc:
            raise MediaStoreError(f"gcs open failed: {type(exc).__name__}") from exc

        written = 0
        try:
            async for chunk in chunks:
                if not chunk:
                    continue
                try:
                    await asyncio.to_thread(writer.write, chunk)
                except Exception as exc:
                    raise MediaStoreError(f"gcs write failed: {type(exc).__name__}") from exc
                written += len(chunk)

            try:
                await asyncio.to_thread(writer.close)
            except Exception as exc:
                raise MediaStoreError(f"gcs finalize failed: {type(exc).__name__}") from exc
        except BaseException:
            # Sem terminate, o finalizer do writer chama close() e grava o objeto truncado
            await _terminate_upload(writer)
            raise

        logger.info(
            "media_object_stored",
            extra={"media_kind": media_kind, "size_bytes": written},
        )
        record_media_bytes(media_kind, written)
        return self._public_url_template.format(bucket=self._bucket.name, key=key)


async def _terminate_upload(writer: BlobWriter) -> None:
    """Cancela a sessão resumível e fecha o writer sem finalizar o objeto."""
    try:
        await asyncio.to_thread(writer.terminate)
    except Exception as exc:
        logger.warning(
            "gcs_upload_terminate_failed",
            extra={"error_type": type(exc).__name__},
        )
