"""Tools registry: the host side of the plugin."""

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from pydantic import ValidationError

from dingtalk_assistant.models.session import Session
from dingtalk_assistant.tools.base import (
    CommandContext,
    CommandDefinition,
    CommandResponse,
    ToolDefinition,
    ToolFailure,
    ToolSuccess,
    json_result,
)
from dingtalk_assistant.utils.logging import get_logger

logger = get_logger(__name__)

ShutdownHook = Callable[[], Awaitable[None]]


class ToolsRegistry:
    """Registry of tools and commands, invoked on behalf of caller sessions."""

    def __init__(self, plugin_config: Mapping[str, Any] | None = None):
        """Initialize registry with the plugin configuration handed to registrations."""
        self.plugin_config: Mapping[str, Any] = plugin_config or {}
        self.logger: logging.Logger = logger
        self._tools: dict[str, ToolDefinition] = {}
        self._commands: dict[str, CommandDefinition] = {}
        self._shutdown_hooks: list[ShutdownHook] = []

    def register_tool(self, tool: ToolDefinition) -> None:
        """Register a new tool in the registry."""
        self._tools[tool.name] = tool

    def register_command(self, command: CommandDefinition) -> None:
        """Register a new text command in the registry."""
        self._commands[command.name] = command

    def on_shutdown(self, hook: ShutdownHook) -> None:
        """Run `hook` when the registry is closed."""
        self._shutdown_hooks.append(hook)

    async def aclose(self) -> None:
        """Run shutdown hooks in reverse registration order."""
        while self._shutdown_hooks:
            await self._shutdown_hooks.pop()()

    async def invoke(self, name: str, arguments: dict[str, Any] | None, session: Session) -> dict[str, Any]:
        """Invoke a tool and return its host result.

        Every failure is converted into an error result so that one bad call
        cannot take the host down.

        Raises:
            KeyError: If no tool with that name is registered
        """
        tool = self._tools[name]
        outcome = await self._run(tool, arguments or {}, session)
        return json_result(outcome)

    async def _run(
        self, tool: ToolDefinition, arguments: dict[str, Any], session: Session
    ) -> ToolSuccess | ToolFailure:
        try:
            params = tool.parse_input(arguments)
        except ValidationError as e:
            logger.warning(f"[{tool.name}] invalid arguments: {e}")
            return ToolFailure(error=f"Invalid arguments: {e}", details={"receivedArgs": arguments})

        try:
            return await tool.handler(params, session)
        except Exception as e:
            logger.error(f"[{tool.name}] error: {e}")
            return ToolFailure(error=str(e))

    async def run_command(self, name: str, args: str | None, session: Session) -> CommandResponse:
        """Run a text command.

        Raises:
            KeyError: If no command with that name is registered
        """
        command = self._commands[name]
        return await command.handler(CommandContext(args=args, session=session))

    def get_tool_schemas(self) -> list[dict[str, Any]]:
        """Describe every tool with its JSON parameter schema."""
        return [
            {"name": tool.name, "description": tool.description, "parameters": tool.get_json_schema()}
            for tool in self._tools.values()
        ]

    def get_tool_names(self) -> list[str]:
        """Get list of all registered tool names."""
        return list(self._tools.keys())

    def has_tool(self, name: str) -> bool:
        """Check if a tool is registered."""
        return name in self._tools

    def has_command(self, name: str) -> bool:
        """Check if a command is registered."""
        return name in self._commands


_tools_registry: ToolsRegistry | None = None


def get_tools_registry() -> ToolsRegistry:
    """Get or create the registry with the developer assistant plugin registered."""
    global _tools_registry

    if _tools_registry is None:
        from dingtalk_assistant.plugin import plugin_config_from_env, register

        _tools_registry = ToolsRegistry(plugin_config_from_env())
        register(_tools_registry)

    return _tools_registry
