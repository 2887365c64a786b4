"""Endpoints de health check para Cloud Run.

- GET /health: liveness
- GET /ready: pipeline montado e bucket de mídia acessível
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config.settings import get_base_settings

logger = logging.getLogger(__name__)

router = APIRouter()

BUCKET_CHECK_TIMEOUT_SECONDS = 3.0


class HealthResponse(BaseModel):
    """Resposta do liveness probe."""

    status: Literal["healthy"] = "healthy"
    service: str
    timestamp: str


@dataclass(frozen=True, slots=True)
class ReadinessCheck:
    """Estado de uma dependência no readiness probe."""

    status: Literal["ok", "degraded", "failed"]
    latency_ms: float | None = None
    error: str | None = None

    @property
    def usable(self) -> bool:
        return self.status != "failed"


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe: o processo responde."""
    return HealthResponse(
        service=get_base_settings().service_name,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe: 200 só se o pipeline pode processar eventos."""
    state = request.app.state
    checks = {
        "processor": _processor_check(getattr(state, "batch_processor", None)),
        "media_bucket": await _bucket_check(getattr(state, "media_bucket", None)),
    }
    ready = all(check.usable for check in checks.values())

    return JSONResponse(
        content={
            "status": "ready" if ready else "not_ready",
            "checks": {name: asdict(check) for name, check in checks.items()},
            "timestamp": datetime.now(UTC).isoformat(),
        },
        status_code=200 if ready else 503,
    )


def _processor_check(processor: Any | None) -> ReadinessCheck:
    if processor is None:
        return ReadinessCheck(status="failed", error="not_configured")
    return ReadinessCheck(status="ok")


async def _bucket_check(bucket: Any | None) -> ReadinessCheck:
    # Backend em memória não tem bucket
    if bucket is None:
        return ReadinessCheck(status="degraded", error="not_configured")

    started_at = time.perf_counter()
    try:
        exists = await asyncio.wait_for(
            asyncio.to_thread(bucket.exists),
            timeout=BUCKET_CHECK_TIMEOUT_SECONDS,
        )
    except TimeoutError:
        return ReadinessCheck(status="failed", error="timeout")
    except Exception as exc:
        logger.warning("readiness_bucket_check_failed", extra={"error_type": type(exc).__name__})
        return ReadinessCheck(status="failed", error=type(exc).__name__)

    latency_ms = round((time.perf_counter() - started_at) * 1000, 2)
    if not exists:
        return ReadinessCheck(status="failed", latency_ms=latency_ms, error="not_found")
    return ReadinessCheck(status="ok", latency_ms=latency_ms)
