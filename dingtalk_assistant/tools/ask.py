"""Ask tool: start a new conversation with the developer assistant."""

from pydantic import ConfigDict, Field

from dingtalk_assistant.clients.dingtalk import DingTalkClient
from dingtalk_assistant.models.session import Session
from dingtalk_assistant.tools.base import ToolDefinition, ToolFailure, ToolInput, ToolSuccess
from dingtalk_assistant.utils.logging import get_logger

logger = get_logger(__name__)

ASK_TOOL_NAME = "dingtalk_ask"

FOLLOWUP_HINT = "Use dingtalk_followup with the conversationId to ask follow-up questions."


class AskInput(ToolInput):
    """Input schema for the ask tool."""

    model_config = ConfigDict(json_schema_extra={"required": ["question"]})

    question: str | None = Field(
        default=None,
        description=(
            "The question to ask, in Chinese or English. "
            "Examples: '如何创建钉钉机器人？', 'How to use the DingTalk OAuth API?'"
        ),
    )


def create_ask_tool(client: DingTalkClient) -> ToolDefinition:
    async def ask_handler(params: AskInput, session: Session) -> ToolSuccess | ToolFailure:
        logger.info(f"[{ASK_TOOL_NAME}] called with args: {params.model_dump_json(by_alias=True)}")
        if not params.question:
            logger.error(f"[{ASK_TOOL_NAME}] empty question")
            return ToolFailure(
                error="question parameter is required",
                details={"receivedArgs": params.model_dump(by_alias=True)},
            )

        logger.info(f"[{ASK_TOOL_NAME}] querying: {params.question[:50]}...")
        result = await client.query(params.question)
        session.set_conversation(result.conversation_id)
        logger.info(
            f"[{ASK_TOOL_NAME}] success, conversationId: {result.conversation_id}, "
            f"answer length: {len(result.answer)}"
        )

        return ToolSuccess(
            payload={
                "conversationId": result.conversation_id,
                "answer": result.answer,
                "followUpQuestions": result.follow_up_questions,
                "hint": FOLLOWUP_HINT,
            }
        )

    return ToolDefinition(
        name=ASK_TOOL_NAME,
        description=(
            "Ask the DingTalk Open Platform Developer Assistant a question about DingTalk APIs, SDKs, "
            "development guides, or best practices. Creates a new conversation and returns the answer "
            "with suggested follow-up questions. Use this tool whenever users ask about DingTalk development."
        ),
        input_schema_class=AskInput,
        handler=ask_handler,
    )
