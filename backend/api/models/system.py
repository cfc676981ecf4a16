"""Pydantic models for system-related API responses."""

from pydantic import BaseModel


class VersionResponse(BaseModel):
    """Response model for /api/version endpoint."""

    version: str


class LogEntry(BaseModel):
    timestamp: str
    level: str
    logger: str
    message: str


class LogsResponse(BaseModel):
    """Response model for /api/system/logs endpoint."""

    count: int
    logs: list[LogEntry]
