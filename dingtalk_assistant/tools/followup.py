"""Follow-up tool: continue an existing conversation."""

from pydantic import ConfigDict, Field

from dingtalk_assistant.clients.dingtalk import DingTalkClient
from dingtalk_assistant.models.session import Session
from dingtalk_assistant.tools.base import ToolDefinition, ToolFailure, ToolInput, ToolSuccess
from dingtalk_assistant.utils.logging import get_logger

logger = get_logger(__name__)

FOLLOWUP_TOOL_NAME = "dingtalk_followup"

NO_ACTIVE_CONVERSATION = "No active conversation. Use dingtalk_ask first to start a conversation."


class FollowUpInput(ToolInput):
    """Input schema for the follow-up tool."""

    model_config = ConfigDict(json_schema_extra={"required": ["question"]})

    conversation_id: str | None = Field(
        default=None,
        alias="conversationId",
        description=(
            "The conversation ID returned by a previous dingtalk_ask call. "
            "If omitted, uses the most recent conversation."
        ),
    )
    question: str | None = Field(default=None, description="The follow-up question to ask.")


def create_followup_tool(client: DingTalkClient) -> ToolDefinition:
    async def followup_handler(params: FollowUpInput, session: Session) -> ToolSuccess | ToolFailure:
        if not params.question:
            return ToolFailure(error="question parameter is required")

        conversation_id = session.resolve_conversation(params.conversation_id)
        if not conversation_id:
            return ToolFailure(error=NO_ACTIVE_CONVERSATION)

        logger.info(f"[{FOLLOWUP_TOOL_NAME}] conversation {conversation_id}: {params.question[:50]}...")
        result = await client.follow_up(conversation_id, params.question)

        return ToolSuccess(
            payload={
                "conversationId": conversation_id,
                "answer": result.answer,
                "followUpQuestions": result.follow_up_questions,
            }
        )

    return ToolDefinition(
        name=FOLLOWUP_TOOL_NAME,
        description=(
            "Continue an existing conversation with the DingTalk Developer Assistant. "
            "Requires a conversationId from a previous dingtalk_ask call."
        ),
        input_schema_class=FollowUpInput,
        handler=followup_handler,
    )
