"""Fluxo completo: lote -> dispatcher -> normalizer -> HTTP/storage -> publicação.

HTTP (mídia e broker) via httpx.MockTransport; storage e fila em memória.
"""

from __future__ import annotations

import json
import logging
import re

import httpx
import pytest

from app.bootstrap.dependencies import create_batch_processor
from app.infra.credentials import HttpCredentialBrokerClient
from app.infra.stores import MemoryEventPublisher, MemoryMediaStore
from app.protocols.models import RawEvent

BROKER_URL = "https://broker.internal/token"
BUCKET_PREFIX = "https://storage.googleapis.com/media-bucket/"

SCENARIO_WHAPI = (
    '{"channel_id":"c1","messages":[{"type":"image","image":{"link":"http://src/x.jpg"}}]}'
)
SCENARIO_META = (
    '{"object":"whatsapp_business_account","entry":[{"id":"biz1","changes":'
    '[{"value":{"messages":[{"type":"document","document":{"id":"med1"}}]}}]}]}'
)


class _Upstream:
    """Servidor HTTP fake: mídia por URL e respostas do broker."""

    def __init__(self, media: dict[str, bytes], broker_payload: dict) -> None:
        self.media = media
        self.broker_payload = broker_payload
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if str(request.url) == BROKER_URL:
            return httpx.Response(200, json=self.broker_payload)
        body = self.media.get(str(request.url))
        if body is None:
            return httpx.Response(404)
        return httpx.Response(200, content=body, headers={"content-type": "image/jpeg"})

    def media_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if str(r.url) != BROKER_URL]


def _pipeline(upstream: _Upstream):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    store = MemoryMediaStore(url_prefix=BUCKET_PREFIX)
    publisher = MemoryEventPublisher()
    processor = create_batch_processor(
        http_client,
        media_store=store,
        publisher=publisher,
        credential_broker=HttpCredentialBrokerClient(http_client, url=BROKER_URL),
    )
    return processor, store, publisher, http_client


@pytest.mark.asyncio
async def test_whapi_image_is_rewritten_to_storage_locator() -> None:
    upstream = _Upstream({"http://src/x.jpg": b"\xff\xd8\xff"}, {})
    processor, store, publisher, http_client = _pipeline(upstream)

    async with http_client:
        summary = await processor.execute([RawEvent(body=SCENARIO_WHAPI, delivery_id="1")])

    assert summary.forwarded == 1
    [published] = publisher.published
    link = json.loads(published)["messages"][0]["image"]["link"]
    assert re.fullmatch(
        re.escape(BUCKET_PREFIX) + r"c1/\d{4}-\d{2}/[0-9a-f]{32}\.jpg", link
    )
    [stored] = store.objects.values()
    assert stored.data == b"\xff\xd8\xff"


@pytest.mark.asyncio
async def test_whapi_fetch_404_forwards_original(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)
    upstream = _Upstream({}, {})
    processor, store, publisher, http_client = _pipeline(upstream)

    async with http_client:
        await processor.execute([RawEvent(body=SCENARIO_WHAPI, delivery_id="1")])

    assert [json.loads(p) for p in publisher.published] == [json.loads(SCENARIO_WHAPI)]
    assert store.objects == {}
    assert any(r.levelname == "ERROR" for r in caplog.records)


@pytest.mark.asyncio
async def test_meta_broker_failure_forwards_unchanged_without_fetch() -> None:
    upstream = _Upstream({}, {"success": False})
    processor, store, publisher, http_client = _pipeline(upstream)

    async with http_client:
        await processor.execute([RawEvent(body=SCENARIO_META, delivery_id="1")])

    assert [json.loads(p) for p in publisher.published] == [json.loads(SCENARIO_META)]
    assert upstream.media_requests() == []
    assert store.objects == {}


@pytest.mark.asyncio
async def test_meta_document_resolved_with_bearer_token() -> None:
    media_url = "https://api.chakrahq.com/v1/whatsapp/v19.0/media/med1/show"
    upstream = _Upstream({media_url: b"%PDF"}, {"success": True, "token": "Bearer t0k"})
    processor, _, publisher, http_client = _pipeline(upstream)

    async with http_client:
        await processor.execute([RawEvent(body=SCENARIO_META, delivery_id="1")])

    [media_request] = upstream.media_requests()
    assert media_request.headers["authorization"] == "Bearer t0k"
    assert media_request.headers["user-agent"] == "PostmanRuntime/7.29.2"
    document = json.loads(publisher.published[0])
    node = document["entry"][0]["changes"][0]["value"]["messages"][0]["document"]
    assert node["id"] == "med1"
    assert node["url"].startswith(BUCKET_PREFIX + "biz1/")
    assert node["url"].endswith(".pdf")


@pytest.mark.asyncio
async def test_unknown_shape_has_no_side_effects() -> None:
    upstream = _Upstream({}, {"success": True, "token": "x"})
    processor, store, publisher, http_client = _pipeline(upstream)

    async with http_client:
        summary = await processor.execute(
            [RawEvent(body='{"event": {"type": "messages"}}', delivery_id="1")]
        )

    assert summary.skipped == 1
    assert publisher.published == []
    assert upstream.requests == []
    assert store.objects == {}
