"""System-level API endpoints."""

from __future__ import annotations

from typing import Dict

from fastapi import APIRouter

from ...core import utcnow

router = APIRouter(tags=["system"])


@router.get("/health")
def health() -> Dict[str, str]:
    """Simple readiness probe."""

    return {"status": "OK", "timestamp": utcnow().isoformat()}


__all__ = ["router"]
