"""Shared fixtures: a stubbed developer assistant API."""

import json
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest

from dingtalk_assistant.clients.dingtalk import DingTalkClient, DingTalkConfig

BASE_URL = "https://open.example.test"
SSE_BASE_URL = "https://power.example.test"


def sse_body(*fragments: str, follow_ups: list[str] | None = None) -> str:
    """Build an SSE body with one `data:` event per fragment."""
    lines = [f"data: {json.dumps({'data': fragment, 'type': 'text'}, ensure_ascii=False)}" for fragment in fragments]
    if follow_ups is not None:
        array = json.dumps(follow_ups, ensure_ascii=False, separators=(",", ":"))
        lines.append(f"data: {json.dumps({'data': array, 'type': 'followup'}, ensure_ascii=False)}")
    return "\n\n".join(lines) + "\n\n"


@dataclass
class StubAssistantAPI:
    """In-memory stand-in for the remote service, served through httpx.MockTransport."""

    conversation_id: str = "conv-123"
    answer_body: str = field(default_factory=lambda: sse_body("Hello ", "world"))
    create_status: int = 200
    create_envelope: dict[str, Any] | None = None
    ask_status: int = 200
    history_status: int = 200
    history_envelope: dict[str, Any] | None = None
    recommend_status: int = 200
    recommend_envelope: dict[str, Any] = field(default_factory=lambda: {"result": ["如何创建应用？"]})
    requests: list[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.method == "POST" and path == "/api/open/coding/conversation":
            envelope = self.create_envelope or {"success": True, "result": {"conversationId": self.conversation_id}}
            return httpx.Response(self.create_status, json=envelope)

        if path == "/api/open/sse/coding/completions":
            return httpx.Response(
                self.ask_status, text=self.answer_body, headers={"content-type": "text/event-stream"}
            )

        if path == "/api/open/coding/followup/recommend":
            return httpx.Response(self.recommend_status, json=self.recommend_envelope)

        if path.startswith("/api/open/coding/conversation/"):
            conversation_id = path.rsplit("/", 1)[-1]
            envelope = self.history_envelope or {
                "success": True,
                "result": {
                    "conversationId": conversation_id,
                    "query": "如何创建钉钉机器人？",
                    "status": 1,
                    "createdAt": "2024-05-01 10:00:00",
                    "dialog": [
                        {
                            "question": "如何创建钉钉机器人？",
                            "questionId": "q-1",
                            "answer": {
                                "answerId": "a-1",
                                "answer": "Open the developer console.",
                                "messageType": "markdown",
                                "extInfo": "{}",
                            },
                            "createTime": "2024-05-01 10:00:05",
                        }
                    ],
                },
            }
            return httpx.Response(self.history_status, json=envelope)

        return httpx.Response(404, json={"success": False})

    def requests_to(self, path: str) -> list[httpx.Request]:
        return [request for request in self.requests if request.url.path == path]


@pytest.fixture
def stub_api() -> StubAssistantAPI:
    """Stubbed remote service."""
    return StubAssistantAPI()


@pytest.fixture
def dingtalk_client(stub_api: StubAssistantAPI) -> DingTalkClient:
    """Client wired to the stubbed remote service."""
    config = DingTalkConfig(base_url=BASE_URL, sse_base_url=SSE_BASE_URL)
    return DingTalkClient(config, transport=httpx.MockTransport(stub_api.handler))
