"""Recommend tool: suggested questions for a documentation page."""

from pydantic import ConfigDict, Field

from dingtalk_assistant.clients.dingtalk import DingTalkClient
from dingtalk_assistant.models.session import Session
from dingtalk_assistant.tools.base import ToolDefinition, ToolFailure, ToolInput, ToolSuccess

RECOMMEND_TOOL_NAME = "dingtalk_recommend"


class RecommendInput(ToolInput):
    """Input schema for the recommend tool."""

    model_config = ConfigDict(json_schema_extra={"required": ["pageUrl"]})

    page_url: str | None = Field(
        default=None,
        alias="pageUrl",
        description=(
            "The DingTalk documentation page URL. "
            "Example: https://open.dingtalk.com/document/dingstart/start-overview"
        ),
    )


def create_recommend_tool(client: DingTalkClient) -> ToolDefinition:
    async def recommend_handler(params: RecommendInput, session: Session) -> ToolSuccess | ToolFailure:  # noqa: ARG001
        if not params.page_url:
            return ToolFailure(error="pageUrl parameter is required")

        questions = await client.get_recommended_questions(params.page_url)
        return ToolSuccess(payload={"recommendedQuestions": questions})

    return ToolDefinition(
        name=RECOMMEND_TOOL_NAME,
        description="Get AI-recommended questions for a specific DingTalk documentation page URL.",
        input_schema_class=RecommendInput,
        handler=recommend_handler,
    )
