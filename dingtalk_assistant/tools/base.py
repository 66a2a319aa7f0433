"""Base types and definitions for tools."""

import json
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dingtalk_assistant.models.session import Session


class ToolSuccess(BaseModel):
    """A tool call that produced a result."""

    status: Literal["success"] = "success"
    payload: dict[str, Any]


class ToolFailure(BaseModel):
    """A tool call that failed; never raised into the host."""

    status: Literal["error"] = "error"
    error: str
    details: dict[str, Any] = Field(default_factory=dict)


ToolHandler = Callable[[BaseModel, Session], Awaitable[ToolSuccess | ToolFailure]]


class ToolInput(BaseModel):
    """Base input schema: camelCase parameters, non-string text treated as absent."""

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> str | None:
        """Trim text arguments; anything that is not a string counts as missing."""
        return v.strip() if isinstance(v, str) else None


@dataclass
class ToolDefinition:
    """Definition of a tool exposed to the host."""

    name: str
    description: str
    input_schema_class: type[ToolInput]
    handler: ToolHandler

    def get_json_schema(self) -> dict[str, Any]:
        """Get JSON schema for this tool's input."""
        return self.input_schema_class.model_json_schema()

    def parse_input(self, raw_input: dict[str, Any]) -> ToolInput:
        """Parse and validate tool input."""
        return self.input_schema_class.model_validate(raw_input)


@dataclass
class CommandContext:
    """Invocation context of a text command."""

    args: str | None
    session: Session


class CommandResponse(BaseModel):
    """Text reply of a command."""

    text: str


CommandHandler = Callable[[CommandContext], Awaitable[CommandResponse]]


@dataclass
class CommandDefinition:
    """Definition of a slash-style text command."""

    name: str
    description: str
    handler: CommandHandler
    accepts_args: bool = True


def outcome_payload(outcome: ToolSuccess | ToolFailure) -> dict[str, Any]:
    """Flatten an outcome into the JSON object returned to the host."""
    if isinstance(outcome, ToolFailure):
        return {"error": outcome.error, **outcome.details}
    return outcome.payload


def json_result(outcome: ToolSuccess | ToolFailure) -> dict[str, Any]:
    """Render an outcome in the host's tool result shape."""
    payload = outcome_payload(outcome)
    return {
        "content": [{"type": "text", "text": json.dumps(payload, indent=2, ensure_ascii=False)}],
        "details": payload,
    }
