"""Health check endpoint."""

from fastapi import APIRouter, Request
from pydantic import BaseModel

from smogmap import __version__

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    version: str
    authenticated: bool
    cached_descriptions: int


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Report service status and cache size."""
    infra = getattr(request.app.state, "infra", None)
    if infra is None:
        return HealthResponse(
            status="starting",
            version=__version__,
            authenticated=False,
            cached_descriptions=0,
        )

    return HealthResponse(
        status="ok",
        version=__version__,
        authenticated=infra.tokens.session.authenticated,
        cached_descriptions=len(infra.cache),
    )
