"""
Liveness endpoint for the extension's connection check.
"""

import time

from fastapi import APIRouter

from ...models.api_models import HealthResponse
from ...options import PRESETS
from ...version import API_VERSION, CLEANER_VERSION

router = APIRouter()

_STARTED_AT = time.monotonic()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report liveness, versions and the presets this build serves."""
    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        cleaner_version=CLEANER_VERSION,
        presets=[preset.value for preset in PRESETS],
        uptime_seconds=round(time.monotonic() - _STARTED_AT, 3),
    )
