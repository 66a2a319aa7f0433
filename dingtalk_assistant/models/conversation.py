"""Conversation, dialog and answer models for the developer assistant API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


class RemoteModel(BaseModel):
    """Base for payloads decoded from the remote API (camelCase on the wire).

    Ids and timestamps are opaque: numbers are kept as text and nulls fall back
    to the field default.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    @field_validator("*", mode="before")
    @classmethod
    def null_to_default(cls, v: Any, info: ValidationInfo) -> Any:
        field = cls.model_fields.get(info.field_name or "")
        if v is None and field is not None and not field.is_required():
            return field.get_default(call_default_factory=True)
        return v


class DialogAnswer(RemoteModel):
    """The assistant's answer inside a dialog entry."""

    answer_id: str = ""
    answer: str = ""
    message_type: str = ""
    ext_info: Any = None


class DialogEntry(RemoteModel):
    """One question/answer pair from the history endpoint."""

    question: str = ""
    question_id: str = ""
    answer: DialogAnswer = Field(default_factory=DialogAnswer)
    create_time: str = ""


class ConversationResult(RemoteModel):
    """Conversation metadata plus its ordered dialog entries."""

    conversation_id: str
    query: str = ""
    status: int | None = None
    created_at: str | None = None
    dialog: list[DialogEntry] = Field(default_factory=list)


class SSEMessage(RemoteModel):
    """A decoded `data:` event from the completions stream."""

    data: str = ""
    type: str = ""
    in_dialog: bool | None = None


class AnswerResult(BaseModel):
    """Cleaned answer for a conversation turn."""

    conversation_id: str
    answer: str
    follow_up_questions: list[str] = Field(default_factory=list)
