"""Health check router."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_class=PlainTextResponse)
async def health_check() -> PlainTextResponse:
    """
    Liveness probe.

    Does not touch the weather provider or validate credentials.
    """
    return PlainTextResponse("ok")
