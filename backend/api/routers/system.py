import logging
import os
from datetime import UTC, datetime
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from fastapi import APIRouter, Depends, Query

from backend.api.dependencies import get_catalog_service, get_session_service
from backend.api.models.health import HealthIssue, HealthResponse
from backend.api.models.system import LogsResponse, VersionResponse
from backend.core.logging import get_ring_buffer
from backend.services.catalog_service import CatalogService
from backend.services.session_service import SessionService

logger = logging.getLogger("springyaml.api.system")
router = APIRouter(tags=["system"])

DISTRIBUTION_NAME = "spring-yaml-generator"


def _get_version() -> str:
    """Get version from environment, VERSION file, or installed package metadata."""

    def clean_v(s: str) -> str:
        s = s.strip()
        if s.lower().startswith("v"):
            return s[1:]
        return s

    # 1. Check environment variable (set by Docker/CI)
    env_version = os.getenv("SPRING_YAML_VERSION")
    if env_version:
        return clean_v(env_version)

    # 2. Read from VERSION file next to the project root
    version_file = Path(__file__).resolve().parents[3] / "VERSION"
    try:
        if version_file.exists():
            return clean_v(version_file.read_text())
    except OSError as e:
        logger.debug("Could not read %s: %s", version_file, e)

    # 3. Installed distribution metadata
    try:
        return clean_v(version(DISTRIBUTION_NAME))
    except PackageNotFoundError:
        pass

    from generator import __version__

    return __version__


@router.get(
    "/api/version",
    summary="Get Version",
    description="Returns the running version of the generator.",
    response_model=VersionResponse,
)
async def get_version() -> VersionResponse:
    return VersionResponse(version=_get_version())


@router.get(
    "/api/health",
    summary="Health Check",
    response_model=HealthResponse,
)
async def health_check(
    catalog: CatalogService = Depends(get_catalog_service),
    sessions: SessionService = Depends(get_session_service),
) -> HealthResponse:
    """Healthy as long as the catalog is loaded and non-empty."""
    issues: list[HealthIssue] = []
    if not catalog.entries:
        issues.append(
            HealthIssue(
                category="catalog",
                severity="critical",
                message="Property catalog is empty",
                guidance="Check catalog.path in config.yaml points at a non-empty JSON array.",
            )
        )
    healthy = not issues
    return HealthResponse(
        healthy=healthy,
        status="ok" if healthy else "unhealthy",
        issues=issues,
        checked_at=datetime.now(UTC).isoformat(),
        catalog_entries=len(catalog.entries),
        active_sessions=len(sessions),
    )


@router.get(
    "/api/system/logs",
    summary="Recent Logs",
    description="Returns the most recent log lines from the in-memory ring buffer.",
    response_model=LogsResponse,
)
async def get_logs(limit: int = Query(200, ge=0, le=1000)) -> LogsResponse:
    logs = get_ring_buffer().get_logs(limit)
    return LogsResponse(count=len(logs), logs=logs)  # type: ignore[arg-type]
