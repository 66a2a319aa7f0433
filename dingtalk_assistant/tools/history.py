"""History tool: read back a conversation."""

from pydantic import Field

from dingtalk_assistant.clients.dingtalk import DingTalkClient
from dingtalk_assistant.models.session import Session
from dingtalk_assistant.tools.base import ToolDefinition, ToolFailure, ToolInput, ToolSuccess
from dingtalk_assistant.tools.followup import NO_ACTIVE_CONVERSATION

HISTORY_TOOL_NAME = "dingtalk_history"


class HistoryInput(ToolInput):
    """Input schema for the history tool."""

    conversation_id: str | None = Field(
        default=None,
        alias="conversationId",
        description="The conversation ID. If omitted, uses the most recent conversation.",
    )


def create_history_tool(client: DingTalkClient) -> ToolDefinition:
    async def history_handler(params: HistoryInput, session: Session) -> ToolSuccess | ToolFailure:
        conversation_id = session.resolve_conversation(params.conversation_id)
        if not conversation_id:
            return ToolFailure(error=NO_ACTIVE_CONVERSATION)

        history = await client.get_history(conversation_id)

        return ToolSuccess(
            payload={
                "conversationId": conversation_id,
                "dialog": [
                    {"question": entry.question, "answer": entry.answer.answer, "time": entry.create_time}
                    for entry in history.dialog
                ],
            }
        )

    return ToolDefinition(
        name=HISTORY_TOOL_NAME,
        description="Retrieve the full conversation history from a DingTalk Developer Assistant session.",
        input_schema_class=HistoryInput,
        handler=history_handler,
    )
