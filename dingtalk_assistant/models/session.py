"""Caller session state."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from dingtalk_assistant.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class Session:
    """Per-caller session holding the most recently used conversation."""

    session_id: str
    conversation_id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    last_activity: datetime = field(default_factory=lambda: datetime.now(UTC))

    def as_dict(self) -> dict[str, Any]:
        """Return the session as a dictionary."""
        return {
            "session_id": self.session_id,
            "conversation_id": self.conversation_id,
            "created_at": self.created_at.isoformat(),
            "last_activity": self.last_activity.isoformat(),
        }

    def update_activity(self) -> None:
        """Update the last activity timestamp."""
        self.last_activity = datetime.now(UTC)

    def set_conversation(self, conversation_id: str) -> None:
        """Make `conversation_id` the current conversation of this session."""
        logger.info(f"Session {self.session_id} now points at conversation {conversation_id}")
        self.conversation_id = conversation_id
        self.update_activity()

    def resolve_conversation(self, conversation_id: str | None) -> str | None:
        """Return the explicit conversation id, or the current one when omitted."""
        if conversation_id:
            return conversation_id
        return self.conversation_id
