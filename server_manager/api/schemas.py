"""
Pydantic schemas for the Server Manager API.
"""

from pydantic import BaseModel, Field
from typing import Optional


class HealthResponse(BaseModel):
    """Liveness payload."""
    status: str = "healthy"


class UpdateResult(BaseModel):
    """Outcome of a single update request.

    Success responses carry `details` (the script's stdout); failure
    responses carry `error`.
    """
    success: bool
    message: str
    details: Optional[str] = Field(None, description="Standard output of the update script")
    error: Optional[str] = Field(None, description="Failure description")


class UpdateRunInfo(BaseModel):
    """Most recent update run as recorded by the server."""
    started_at: str
    finished_at: Optional[str] = None
    success: Optional[bool] = None
    exit_code: Optional[int] = None
    error: Optional[str] = None


class UpdateStatusResponse(BaseModel):
    """Response for update status."""
    in_progress: bool
    last_run: Optional[UpdateRunInfo] = None
