"""DingTalk Open Platform developer assistant API client.

Endpoints, as used by https://open.dingtalk.com:

1. POST /api/open/coding/conversation          create a conversation
2. GET  /api/open/sse/coding/completions (SSE) answer a question
3. GET  /api/open/coding/conversation/{id}     conversation history
4. GET  /api/open/coding/followup/recommend    recommended questions for a page
"""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

import httpx
from pydantic import ValidationError

from dingtalk_assistant.models.conversation import AnswerResult, ConversationResult
from dingtalk_assistant.utils.logging import get_logger
from dingtalk_assistant.utils.sse import parse_sse_response, split_follow_ups

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://open.dingtalk.com"
DEFAULT_RECOMMEND_SCENE = "ai_doc_recommend"

CONVERSATION_PATH = "/api/open/coding/conversation"
COMPLETIONS_PATH = "/api/open/sse/coding/completions"
RECOMMEND_PATH = "/api/open/coding/followup/recommend"


class DingTalkError(Exception):
    """Base error for developer assistant API failures."""


class TransportError(DingTalkError):
    """The remote service answered with a non-success HTTP status, or not at all."""

    def __init__(self, message: str, status_code: int | None = None, reason: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason


class ApiError(DingTalkError):
    """The HTTP call succeeded but the response envelope reports a failure."""

    def __init__(self, message: str, envelope: Any = None):
        super().__init__(message)
        self.envelope = envelope


@dataclass
class DingTalkConfig:
    """Configuration for the developer assistant client."""

    base_url: str = DEFAULT_BASE_URL
    sse_base_url: str = DEFAULT_BASE_URL
    timeout: float = 60.0
    recommend_scene: str = DEFAULT_RECOMMEND_SCENE

    @classmethod
    def from_plugin_config(cls, plugin_config: Mapping[str, Any] | None) -> "DingTalkConfig":
        """Build a config from host plugin settings, keeping defaults for absent keys."""
        config = cls()
        if not plugin_config:
            return config

        if plugin_config.get("baseUrl"):
            config = replace(config, base_url=str(plugin_config["baseUrl"]))
        if plugin_config.get("sseBaseUrl"):
            config = replace(config, sse_base_url=str(plugin_config["sseBaseUrl"]))
        if plugin_config.get("timeout"):
            config = replace(config, timeout=float(plugin_config["timeout"]))

        return config


class DingTalkClient:
    """Async client for the developer assistant API."""

    config: DingTalkConfig
    http: httpx.AsyncClient

    def __init__(self, config: DingTalkConfig | None = None, transport: httpx.AsyncBaseTransport | None = None):
        """Initialize the client.

        Args:
            config: Client configuration
            transport: Optional httpx transport, used to stub the remote service
        """
        self.config = config or DingTalkConfig()
        self.http = httpx.AsyncClient(timeout=self.config.timeout, transport=transport)

    async def __aenter__(self) -> "DingTalkClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self.http.aclose()

    async def create_conversation(self, query: str) -> str:
        """Create a conversation; the remote service requires the first question up front.

        Returns:
            The conversation id issued by the service

        Raises:
            TransportError: If the HTTP status is not successful
            ApiError: If the response envelope reports a failure
        """
        response = await self._request(
            "POST",
            f"{self.config.base_url}{CONVERSATION_PATH}",
            json={"query": query},
            headers={"Content-Type": "application/json"},
        )
        self._raise_for_status(response, "Failed to create conversation")

        envelope = self._decode_envelope(response, "API error creating conversation")
        result = envelope.get("result")
        conversation_id = result.get("conversationId") if isinstance(result, dict) else None
        if not isinstance(conversation_id, str) or not conversation_id:
            raise ApiError(f"API error creating conversation: {response.text}", envelope)

        logger.debug(f"Created conversation {conversation_id}")
        return conversation_id

    async def ask(self, conversation_id: str, query: str) -> str:
        """Ask a question and return the full answer text from the SSE stream.

        The stream is buffered completely before parsing. The returned text
        still carries the trailing follow-up array, if any.
        """
        response = await self._request(
            "GET",
            f"{self.config.sse_base_url}{COMPLETIONS_PATH}",
            params={"conversationId": conversation_id, "query": query},
            headers={"Accept": "text/event-stream"},
        )
        self._raise_for_status(response, "SSE request failed")

        answer = parse_sse_response(response.text)
        logger.debug(f"Conversation {conversation_id} answered with {len(answer)} chars")
        return answer

    async def get_history(self, conversation_id: str) -> ConversationResult:
        """Fetch the conversation metadata and its ordered dialog."""
        response = await self._request(
            "GET",
            f"{self.config.base_url}{CONVERSATION_PATH}/{conversation_id}",
            headers={"Content-Type": "application/json"},
        )
        self._raise_for_status(response, "Failed to get history")

        envelope = self._decode_envelope(response, "API error getting history")
        try:
            return ConversationResult.model_validate(envelope.get("result"))
        except ValidationError as e:
            raise ApiError(f"API error getting history: {response.text}", envelope) from e

    async def get_recommended_questions(self, page_url: str, scene: str | None = None) -> list[str]:
        """Fetch recommended questions for a documentation page.

        Recommendations are optional: a non-success status or an unreadable body yields an empty list.
        """
        response = await self._request(
            "GET",
            f"{self.config.base_url}{RECOMMEND_PATH}",
            params={"scene": scene or self.config.recommend_scene, "askPageUrl": page_url},
        )
        if not response.is_success:
            logger.warning(f"Recommendations unavailable for {page_url}: {response.status_code}")
            return []

        try:
            payload = response.json()
        except ValueError:
            logger.warning(f"Recommendations for {page_url} are not JSON: {response.text[:80]}")
            return []

        result = payload.get("result") if isinstance(payload, dict) else None
        return result if isinstance(result, list) else []

    async def query(self, question: str) -> AnswerResult:
        """Create a conversation, ask the question and split off follow-ups."""
        conversation_id = await self.create_conversation(question)
        return await self.follow_up(conversation_id, question)

    async def follow_up(self, conversation_id: str, question: str) -> AnswerResult:
        """Ask a question in an existing conversation."""
        raw_answer = await self.ask(conversation_id, question)
        answer, follow_ups = split_follow_ups(raw_answer)

        return AnswerResult(conversation_id=conversation_id, answer=answer, follow_up_questions=follow_ups)

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send a single request, wrapping network failures."""
        try:
            return await self.http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {url} failed: {e!r}")
            raise TransportError(f"Request to {url} failed: {e}") from e

    @staticmethod
    def _raise_for_status(response: httpx.Response, message: str) -> None:
        if not response.is_success:
            raise TransportError(
                f"{message}: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
                reason=response.reason_phrase,
            )

    @staticmethod
    def _decode_envelope(response: httpx.Response, message: str) -> dict[str, Any]:
        try:
            envelope = response.json()
        except ValueError as e:
            raise ApiError(f"{message}: {response.text}") from e

        if not isinstance(envelope, dict) or not envelope.get("success"):
            raise ApiError(f"{message}: {response.text}", envelope)

        return envelope
