"""Publisher do Cloud Pub/Sub para a fila de saída.

Qualquer falha vira PublishError e sobe até o handler do lote, que
devolve o lote inteiro para reentrega.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from utils.errors import PublishError

if TYPE_CHECKING:
    from google.cloud.pubsub_v1 import PublisherClient

logger = logging.getLogger(__name__)


class PubSubEventPublisher:
    """Publica o JSON normalizado como bytes UTF-8 no tópico.

    Args:
        publisher: PublisherClient do google-cloud-pubsub
        topic_path: projects/{project}/topics/{topic}
        timeout_seconds: Tempo máximo aguardando o message id
    """

    def __init__(
        self,
        publisher: PublisherClient,
        topic_path: str,
        *,
        timeout_seconds: float = 30.0,
    ) -> None:
        self._publisher = publisher
        self._topic_path = topic_path
        self._timeout = timeout_seconds

    async def publish(self, json_text: str) -> str:
        """Publica e aguarda a confirmação.

        Returns:
            Message id atribuído pelo Pub/Sub.

        Raises:
            PublishError: Falha ao publicar ou timeout.
        """
        try:
            future = self._publisher.publish(self._topic_path, json_text.encode("utf-8"))
            message_id = await asyncio.wait_for(
                asyncio.wrap_future(future),
                timeout=self._timeout,
            )
        except TimeoutError as exc:
            raise PublishError(f"pubsub publish timed out after {self._timeout}s") from exc
        except Exception as exc:
            raise PublishError(f"pubsub publish failed: {type(exc).__name__}") from exc

        logger.info("event_published", extra={"message_id": message_id})
        return str(message_id)
