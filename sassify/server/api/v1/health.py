"""Liveness and version endpoints used by deploy checks and uptime probes."""

from fastapi import APIRouter

from sassify.server.core import constant

router = APIRouter()


@router.get(
    "/health",
    summary="Health Check",
    description="Answers as long as the server process is up; no dependency is checked.",
    response_description="Status object.",
)
async def health_check():
    return {"status": "ok"}


@router.get(
    "/version",
    summary="Get Version",
    description="API release and schema version of the running server.",
    response_description="Version object.",
)
async def version():
    """Current semantic version of the API and the supported schema version."""
    return {"version": constant.API_VERSION, "schema_version": constant.SCHEMA_VERSION}
