"""Testes para o endpoint de webhook Crypto Pay."""

from __future__ import annotations

import json
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.routing import APIRoute
from fastapi.testclient import TestClient
from starlette.requests import Request

from api.connectors.crypto_pay.models import Update
from api.connectors.crypto_pay.signature import SIGNATURE_HEADER, compute_signature
from api.routes.crypto_pay import create_webhook_router
from api.routes.router import WEBHOOK_PREFIX, create_api_router
from app.infra.stores.memory_stores import MemoryDedupeStore
from app.observability import get_correlation_id
from app.use_cases.crypto_pay import WebhookPipeline
from utils.errors import RedisConnectionError

SECRET = "1234:AAtestAppToken"


def _build_request(*, body: bytes = b"", headers: dict[str, str] | None = None) -> Request:
    header_items = headers or {}
    raw_headers = [(k.lower().encode("utf-8"), v.encode("utf-8")) for k, v in header_items.items()]
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "POST",
        "path": "/",
        "raw_path": b"/",
        "query_string": b"",
        "headers": raw_headers,
    }
    sent = False

    async def _receive() -> dict[str, object]:
        nonlocal sent
        if sent:
            return {"type": "http.request", "body": b"", "more_body": False}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, _receive)


def _body() -> bytes:
    data: dict[str, Any] = {
        "update_id": 11,
        "update_type": "invoice_paid",
        "request_date": "2024-01-01T10:00:00Z",
        "payload": {
            "invoice_id": 5,
            "hash": "IVq",
            "asset": "TON",
            "amount": "2.5",
            "status": "paid",
            "created_at": "2024-01-01T09:00:00Z",
        },
    }
    return json.dumps(data).encode("utf-8")


def _endpoint(pipeline: Any) -> Any:
    router = create_webhook_router(lambda: pipeline)
    route = router.routes[0]
    assert isinstance(route, APIRoute)
    return route.endpoint


@pytest.mark.asyncio
async def test_webhook_dispatches_signed_update() -> None:
    received: list[int] = []

    async def on_paid(update: Update) -> None:
        received.append(update.update_id)

    pipeline = WebhookPipeline(secret=SECRET, dedupe=MemoryDedupeStore())
    pipeline.register(on_paid)
    body = _body()
    request = _build_request(
        body=body,
        headers={SIGNATURE_HEADER: compute_signature(SECRET, body), "x-correlation-id": "corr-1"},
    )

    response = await _endpoint(pipeline)(request)

    assert response.status_code == 200
    assert json.loads(response.body) == {"ok": True}
    assert received == [11]
    assert get_correlation_id() == ""


@pytest.mark.asyncio
async def test_webhook_invalid_signature() -> None:
    pipeline = WebhookPipeline(secret=SECRET, dedupe=MemoryDedupeStore())
    request = _build_request(body=_body(), headers={SIGNATURE_HEADER: "ab" * 32})

    response = await _endpoint(pipeline)(request)

    assert response.status_code == 401
    assert json.loads(response.body) == {"ok": False}


@pytest.mark.asyncio
async def test_webhook_invalid_payload() -> None:
    pipeline = WebhookPipeline(secret=SECRET, dedupe=MemoryDedupeStore())
    body = b"not-json"
    request = _build_request(
        body=body,
        headers={SIGNATURE_HEADER: compute_signature(SECRET, body)},
    )

    response = await _endpoint(pipeline)(request)

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_webhook_dedupe_unavailable_returns_503() -> None:
    class _BrokenStore:
        async def seen(self, key: str, ttl: int) -> bool:
            raise RedisConnectionError("redis fora")

    pipeline = WebhookPipeline(secret=SECRET, dedupe=_BrokenStore())  # type: ignore[arg-type]
    body = _body()
    request = _build_request(
        body=body,
        headers={SIGNATURE_HEADER: compute_signature(SECRET, body)},
    )

    response = await _endpoint(pipeline)(request)

    assert response.status_code == 503
    assert json.loads(response.body) == {"ok": False}


def test_api_router_mounts_webhook_prefix() -> None:
    received: list[int] = []

    async def on_paid(update: Update) -> None:
        received.append(update.update_id)

    pipeline = WebhookPipeline(secret=SECRET, dedupe=MemoryDedupeStore())
    pipeline.register(on_paid)
    app = FastAPI()
    app.include_router(create_api_router(lambda: pipeline))
    body = _body()

    with TestClient(app) as client:
        response = client.post(
            f"{WEBHOOK_PREFIX}/",
            content=body,
            headers={SIGNATURE_HEADER: compute_signature(SECRET, body)},
        )
        duplicate = client.post(
            f"{WEBHOOK_PREFIX}/",
            content=body,
            headers={SIGNATURE_HEADER: compute_signature(SECRET, body)},
        )

    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert duplicate.status_code == 200
    assert received == [11]
