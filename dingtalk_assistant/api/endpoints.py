"""API endpoints exposing the assistant tools and command."""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from dingtalk_assistant import __version__
from dingtalk_assistant.models.api import (
    CommandRequest,
    CommandRunResponse,
    HealthResponse,
    ToolInvocationRequest,
    ToolInvocationResponse,
    ToolSchemaResponse,
)
from dingtalk_assistant.services.session_manager import InMemorySessionManager, session_manager
from dingtalk_assistant.tools.registry import ToolsRegistry, get_tools_registry
from dingtalk_assistant.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


def get_session_manager() -> InMemorySessionManager:
    """Session manager dependency."""
    return session_manager


RegistryDep = Annotated[ToolsRegistry, Depends(get_tools_registry)]
SessionManagerDep = Annotated[InMemorySessionManager, Depends(get_session_manager)]


@router.get("/tools", response_model=list[ToolSchemaResponse], tags=["Tools"])
async def list_tools(registry: RegistryDep) -> list[ToolSchemaResponse]:
    """List the available tools with their parameter schemas."""
    return [ToolSchemaResponse(**schema) for schema in registry.get_tool_schemas()]


@router.post("/tools/{tool_name}", response_model=ToolInvocationResponse, tags=["Tools"])
async def invoke_tool(
    tool_name: str, request: ToolInvocationRequest, registry: RegistryDep, sessions: SessionManagerDep
) -> ToolInvocationResponse:
    """Invoke a tool on behalf of the caller's session.

    Tool failures are reported in the result body, never as HTTP errors.
    """
    if not registry.has_tool(tool_name):
        raise HTTPException(status_code=404, detail=f"Unknown tool: {tool_name}")

    session = sessions.get_or_create_session(request.session_id)
    logger.info(f"Invoking {tool_name} for session {session.session_id}")

    result = await registry.invoke(tool_name, request.arguments, session)
    return ToolInvocationResponse(
        session_id=session.session_id,
        content=result["content"],
        details=result["details"],
        is_error="error" in result["details"],
    )


@router.post("/commands/{command_name}", response_model=CommandRunResponse, tags=["Commands"])
async def run_command(
    command_name: str, request: CommandRequest, registry: RegistryDep, sessions: SessionManagerDep
) -> CommandRunResponse:
    """Run a text command such as /dingtalk."""
    if not registry.has_command(command_name):
        raise HTTPException(status_code=404, detail=f"Unknown command: {command_name}")

    session = sessions.get_or_create_session(request.session_id)
    response = await registry.run_command(command_name, request.args, session)
    return CommandRunResponse(text=response.text, session_id=session.session_id)


@router.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(UTC),
        version=__version__,
    )
