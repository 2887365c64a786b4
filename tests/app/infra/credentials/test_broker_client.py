"""Testes do HttpCredentialBrokerClient com httpx.MockTransport."""

from __future__ import annotations

import json

import httpx
import pytest

from app.infra.credentials import HttpCredentialBrokerClient

BROKER_URL = "https://broker.internal/token"


def _broker(handler, **kwargs) -> tuple[HttpCredentialBrokerClient, httpx.AsyncClient]:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpCredentialBrokerClient(client, url=BROKER_URL, **kwargs), client


@pytest.mark.asyncio
async def test_returns_token_on_success() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"success": True, "token": "tok-1"})

    broker, client = _broker(handler)
    async with client:
        credential = await broker.resolve_token("WABA1")

    assert credential is not None
    assert credential.token == "tok-1"
    assert "tok-1" not in repr(credential)
    assert seen[0].method == "POST"
    assert str(seen[0].url) == BROKER_URL
    assert json.loads(seen[0].content) == {"accountId": "WABA1"}
    assert "authorization" not in seen[0].headers


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json={"success": False}),
        httpx.Response(200, json={"success": True}),
        httpx.Response(200, json={"success": True, "token": ""}),
        httpx.Response(200, json={"success": "true", "token": "x"}),
        httpx.Response(200, json=["tok"]),
        httpx.Response(200, content=b"not json"),
        httpx.Response(500, json={"success": True, "token": "x"}),
        httpx.Response(403),
    ],
)
async def test_unusable_responses_return_none(response: httpx.Response) -> None:
    broker, client = _broker(lambda request: response)
    async with client:
        assert await broker.resolve_token("WABA1") is None


@pytest.mark.asyncio
async def test_transport_error_returns_none() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timeout", request=request)

    broker, client = _broker(handler)
    async with client:
        assert await broker.resolve_token("WABA1") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("account_id", [None, ""])
async def test_missing_account_id_does_not_invoke_broker(account_id: str | None) -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"success": True, "token": "x"})

    broker, client = _broker(handler)
    async with client:
        assert await broker.resolve_token(account_id) is None

    assert calls == []


@pytest.mark.asyncio
async def test_id_token_is_sent_for_audience() -> None:
    seen: list[httpx.Request] = []
    audiences: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"success": True, "token": "tok"})

    def id_token_provider(audience: str) -> str:
        audiences.append(audience)
        return "oidc-token"

    broker, client = _broker(handler, id_token_provider=id_token_provider)
    async with client:
        assert await broker.resolve_token("WABA1") is not None

    assert audiences == [BROKER_URL]
    assert seen[0].headers["authorization"] == "Bearer oidc-token"


@pytest.mark.asyncio
async def test_id_token_failure_returns_none() -> None:
    def id_token_provider(audience: str) -> str:
        raise RuntimeError("metadata server unavailable")

    broker, client = _broker(
        lambda request: httpx.Response(200, json={"success": True, "token": "x"}),
        id_token_provider=id_token_provider,
    )
    async with client:
        assert await broker.resolve_token("WABA1") is None
