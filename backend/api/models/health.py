"""Pydantic models for health-related API responses."""

from pydantic import BaseModel


class HealthIssue(BaseModel):
    """A single health check issue."""

    category: str
    severity: str
    message: str
    guidance: str


class HealthResponse(BaseModel):
    """Response model for /api/health endpoint."""

    healthy: bool
    status: str
    issues: list[HealthIssue] = []
    checked_at: str | None = None
    catalog_entries: int = 0
    active_sessions: int = 0
