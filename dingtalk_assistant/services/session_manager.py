"""In-memory storage of caller sessions."""

from datetime import UTC, datetime, timedelta

from cuid2 import cuid_wrapper

from dingtalk_assistant.models.session import Session

cuid = cuid_wrapper()


class InMemorySessionManager:
    """Keeps one session, and so one current conversation, per caller."""

    def __init__(self, session_timeout_minutes: int = 60):
        """Initialize session manager.

        Args:
            session_timeout_minutes: Minutes of inactivity before a session expires
        """
        self.sessions: dict[str, Session] = {}
        self.session_timeout = timedelta(minutes=session_timeout_minutes)

    def get_or_create_session(self, session_id: str | None = None) -> Session:
        """Get existing session or create new one.

        Args:
            session_id: Optional caller-supplied session ID

        Returns:
            Session object (existing or newly created)
        """
        self._cleanup_expired_sessions()

        if session_id and session_id in self.sessions:
            session = self.sessions[session_id]
            session.update_activity()
            return session

        new_session_id = session_id or self._generate_session_id()
        session = Session(session_id=new_session_id)
        self.sessions[new_session_id] = session
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get existing session by ID, or None if unknown or expired."""
        self._cleanup_expired_sessions()

        session = self.sessions.get(session_id)
        if session:
            session.update_activity()
        return session

    def delete_session(self, session_id: str) -> bool:
        """Delete a session, returning whether it existed."""
        return self.sessions.pop(session_id, None) is not None

    def get_session_count(self) -> int:
        """Get current number of active sessions."""
        self._cleanup_expired_sessions()
        return len(self.sessions)

    def _generate_session_id(self) -> str:
        """Generate a new CUID-based session ID."""
        return cuid()

    def _cleanup_expired_sessions(self) -> None:
        """Remove expired sessions from memory."""
        current_time = datetime.now(UTC)
        expired_sessions = [
            session_id
            for session_id, session in self.sessions.items()
            if current_time - session.last_activity > self.session_timeout
        ]

        for session_id in expired_sessions:
            del self.sessions[session_id]


session_manager = InMemorySessionManager()
