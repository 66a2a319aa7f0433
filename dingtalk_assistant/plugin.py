"""Plugin registration of the DingTalk developer assistant tools."""

import os
from typing import Any, Protocol

from dingtalk_assistant.clients.dingtalk import DingTalkClient, DingTalkConfig
from dingtalk_assistant.tools.ask import create_ask_tool
from dingtalk_assistant.tools.base import CommandDefinition, ToolDefinition
from dingtalk_assistant.tools.command import create_dingtalk_command
from dingtalk_assistant.tools.followup import create_followup_tool
from dingtalk_assistant.tools.history import create_history_tool
from dingtalk_assistant.tools.recommend import create_recommend_tool
from dingtalk_assistant.tools.registry import ShutdownHook

PLUGIN_ID = "dingtalk-assistant"


class PluginHost(Protocol):
    """What a host must offer for the plugin to register itself."""

    plugin_config: Any
    logger: Any

    def register_tool(self, tool: ToolDefinition) -> None: ...

    def register_command(self, command: CommandDefinition) -> None: ...

    def on_shutdown(self, hook: ShutdownHook) -> None: ...


def plugin_config_from_env() -> dict[str, Any]:
    """Read plugin settings from the environment; unset variables are left out."""
    env_keys = {
        "baseUrl": "DINGTALK_BASE_URL",
        "sseBaseUrl": "DINGTALK_SSE_BASE_URL",
        "timeout": "DINGTALK_TIMEOUT",
    }
    return {key: os.environ[var] for key, var in env_keys.items() if os.getenv(var)}


def register(host: PluginHost, client: DingTalkClient | None = None) -> DingTalkClient:
    """Register the assistant tools and the /dingtalk command with a host.

    The configuration is read once, here. The client is closed when the host shuts down.
    """
    if client is None:
        client = DingTalkClient(DingTalkConfig.from_plugin_config(host.plugin_config))

    for tool in (
        create_ask_tool(client),
        create_followup_tool(client),
        create_history_tool(client),
        create_recommend_tool(client),
    ):
        host.register_tool(tool)

    host.register_command(create_dingtalk_command(client))
    host.on_shutdown(client.aclose)

    host.logger.info(f"[{PLUGIN_ID}] Plugin registered successfully")
    return client
