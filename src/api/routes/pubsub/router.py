"""Router do Pub/Sub: agrega os endpoints de push."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.pubsub.push import router as push_router

router = APIRouter()

router.include_router(push_router)
