"""Request and response models of the HTTP host."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ToolInvocationRequest(BaseModel):
    """Request model for invoking a tool."""

    arguments: dict[str, Any] = Field(default_factory=dict)
    session_id: str | None = None


class ToolInvocationResponse(BaseModel):
    """Response model for a tool invocation."""

    session_id: str
    content: list[dict[str, Any]]
    details: dict[str, Any]
    is_error: bool = False


class ToolSchemaResponse(BaseModel):
    """A tool with its JSON parameter schema."""

    name: str
    description: str
    parameters: dict[str, Any]


class CommandRequest(BaseModel):
    """Request model for running a text command."""

    args: str | None = None
    session_id: str | None = None


class CommandRunResponse(BaseModel):
    """Response model for a text command."""

    text: str
    session_id: str


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str
    timestamp: datetime
    version: str
