"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from slipstream.api.deps import get_context
from slipstream.context import AppContext

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}


@router.get("/ready")
async def ready(ctx: AppContext = Depends(get_context)) -> dict[str, str]:
    return {"status": "ready", "environment": ctx.settings.environment}
