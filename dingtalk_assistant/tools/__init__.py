"""Tools for the DingTalk developer assistant."""

from dingtalk_assistant.tools.registry import ToolsRegistry, get_tools_registry

__all__ = ["ToolsRegistry", "get_tools_registry"]
