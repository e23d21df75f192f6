import time
from datetime import datetime, timezone

from fastapi import APIRouter

from app.platform.response import success_response

START_TIME = time.monotonic()

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check():
    return success_response(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        uptime=round(time.monotonic() - START_TIME, 3),
    )
