"""The /dingtalk quick-ask command."""

from dingtalk_assistant.clients.dingtalk import DingTalkClient
from dingtalk_assistant.tools.base import CommandContext, CommandDefinition, CommandResponse
from dingtalk_assistant.utils.logging import get_logger

logger = get_logger(__name__)

COMMAND_NAME = "dingtalk"

USAGE = "Usage: /dingtalk <your question>\nExample: /dingtalk 如何创建钉钉机器人？"


def format_answer(answer: str, follow_ups: list[str]) -> str:
    """Append an enumerated list of suggested follow-ups to an answer."""
    if not follow_ups:
        return answer

    text = answer + "\n\n---\n**Suggested follow-ups:**\n"
    for index, question in enumerate(follow_ups, start=1):
        text += f"{index}. {question}\n"
    return text


def create_dingtalk_command(client: DingTalkClient) -> CommandDefinition:
    async def dingtalk_command_handler(ctx: CommandContext) -> CommandResponse:
        question = (ctx.args or "").strip()
        if not question:
            return CommandResponse(text=USAGE)

        try:
            result = await client.query(question)
        except Exception as e:
            logger.error(f"[/{COMMAND_NAME}] error: {e}")
            return CommandResponse(text=f"Error: {e}")

        ctx.session.set_conversation(result.conversation_id)
        return CommandResponse(text=format_answer(result.answer, result.follow_up_questions))

    return CommandDefinition(
        name=COMMAND_NAME,
        description="Quick-ask the DingTalk Developer Assistant (e.g. /dingtalk 如何获取access_token)",
        handler=dingtalk_command_handler,
    )
