"""Testes do IntakeDispatcher: skips, roteamento e publicação."""

from __future__ import annotations

import json

import pytest

from app.constants.whatsapp import ProviderKind
from app.infra.stores import MemoryEventPublisher, MemoryMediaStore
from app.protocols.models import NormalizationResult, RawEvent
from app.use_cases.media_relay import (
    IntakeDispatcher,
    MediaResolver,
    WhapiNormalizer,
    serialize_document,
)
from tests.fakes.fake_media import FailingPublisher, FakeMediaFetcher
from utils.errors import PublishError


class _RecordingNormalizer:
    def __init__(self) -> None:
        self.documents: list[dict] = []

    async def normalize(self, document: dict) -> NormalizationResult:
        self.documents.append(document)
        return NormalizationResult(document=document, outcome="unchanged", reason="not_media")


def _dispatcher(
    publisher=None,
    *,
    forward_unknown: bool = False,
) -> tuple[IntakeDispatcher, _RecordingNormalizer, _RecordingNormalizer]:
    whapi, meta = _RecordingNormalizer(), _RecordingNormalizer()
    dispatcher = IntakeDispatcher(
        normalizers={ProviderKind.WHAPI: whapi, ProviderKind.META_OFFICIAL: meta},
        publisher=publisher or MemoryEventPublisher(),
        forward_unknown=forward_unknown,
    )
    return dispatcher, whapi, meta


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("body", "reason"),
    [
        ("", "empty_body"),
        ("   \n", "empty_body"),
        ("{not json", "invalid_json"),
        ("null", "invalid_json"),
        pytest.param("[" * 100_000 + "]" * 100_000, "invalid_json", id="deeply_nested"),
        ('{"channel_id": "c1", "v": NaN}', "invalid_json"),
        ('{"channel_id": "c1", "v": -Infinity}', "invalid_json"),
        ('{"foo": 1}', "unknown_format"),
        ("[1, 2]", "unknown_format"),
        ('"text"', "unknown_format"),
    ],
)
async def test_skip_conditions_do_not_publish(body: str, reason: str) -> None:
    publisher = MemoryEventPublisher()
    dispatcher, whapi, meta = _dispatcher(publisher)

    outcome = await dispatcher.process(RawEvent(body=body, delivery_id="d1"))

    assert outcome.status == "skipped"
    assert outcome.reason == reason
    assert not outcome.forwarded
    assert publisher.published == []
    assert whapi.documents == meta.documents == []


@pytest.mark.asyncio
async def test_routes_whapi_and_meta_to_their_normalizers() -> None:
    dispatcher, whapi, meta = _dispatcher()

    await dispatcher.process(RawEvent(body='{"channel_id": "c1", "messages": []}', delivery_id="1"))
    await dispatcher.process(RawEvent(body='{"object": "x", "entry": []}', delivery_id="2"))

    assert whapi.documents == [{"channel_id": "c1", "messages": []}]
    assert meta.documents == [{"object": "x", "entry": []}]


@pytest.mark.asyncio
async def test_unchanged_event_is_republished_as_compact_json() -> None:
    publisher = MemoryEventPublisher()
    dispatcher, _, _ = _dispatcher(publisher)
    body = '{\n  "channel_id": "c1",\n  "messages": [{"type": "text", "text": {"body": "olá"}}]\n}'

    outcome = await dispatcher.process(RawEvent(body=body, delivery_id="d1"))

    assert outcome.forwarded
    assert outcome.provider == ProviderKind.WHAPI
    assert publisher.published == [
        '{"channel_id":"c1","messages":[{"type":"text","text":{"body":"olá"}}]}'
    ]
    assert json.loads(publisher.published[0]) == json.loads(body)


@pytest.mark.asyncio
async def test_unknown_format_is_forwarded_raw_when_enabled() -> None:
    publisher = MemoryEventPublisher()
    dispatcher, _, _ = _dispatcher(publisher, forward_unknown=True)
    body = '{"foo": 1}'

    outcome = await dispatcher.process(RawEvent(body=body, delivery_id="d1"))

    assert outcome.forwarded
    assert outcome.provider == ProviderKind.UNKNOWN
    assert publisher.published == [body]


@pytest.mark.asyncio
async def test_publish_failure_propagates() -> None:
    publisher = FailingPublisher()
    dispatcher, _, _ = _dispatcher(publisher)

    with pytest.raises(PublishError):
        await dispatcher.process(RawEvent(body='{"channel_id": "c1"}', delivery_id="d1"))

    assert publisher.attempts == 1


@pytest.mark.asyncio
async def test_redelivered_normalized_event_degrades_without_crashing() -> None:
    publisher = MemoryEventPublisher()
    store = MemoryMediaStore()
    dispatcher = IntakeDispatcher(
        normalizers={
            ProviderKind.WHAPI: WhapiNormalizer(
                MediaResolver(fetcher=FakeMediaFetcher(), store=store)
            ),
        },
        publisher=publisher,
    )
    document = {
        "channel_id": "c1",
        "messages": [
            {"type": "image", "image": {"link": "https://bucket/c1/2024-01/abc.jpg"}},
        ],
    }

    outcome = await dispatcher.process(RawEvent(body=json.dumps(document), delivery_id="d1"))

    assert outcome.forwarded
    assert outcome.reason == "media_unresolved"
    assert json.loads(publisher.published[0]) == document
    assert store.objects == {}


def test_serialize_document_is_compact_and_keeps_unicode() -> None:
    assert serialize_document({"a": [1, {"b": "ç"}]}) == '{"a":[1,{"b":"ç"}]}'


def test_serialize_document_rejects_non_finite_numbers() -> None:
    with pytest.raises(ValueError):
        serialize_document({"v": float("nan")})
