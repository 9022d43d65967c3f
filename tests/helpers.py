import json

import httpx

from academicflow.core.config import Settings
from academicflow.core.security import create_access_token
from academicflow.services.llm import LLMClient


def completion(content: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def make_llm_client(handler, **overrides) -> LLMClient:
    settings = Settings(OPENAI_API_KEY="test-key", **overrides)
    return LLMClient(settings, transport=httpx.MockTransport(handler))


class RecordingHandler:
    """Replays canned chat-completion replies and records the requests sent."""

    def __init__(self, *replies: str, status_code: int = 200) -> None:
        self.replies = list(replies)
        self.status_code = status_code
        self.requests: list[dict] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(json.loads(request.content))
        if self.status_code >= 400:
            return httpx.Response(self.status_code, json={"error": {"message": "boom"}})
        content = self.replies.pop(0) if self.replies else ""
        return httpx.Response(200, json=completion(content))


def auth_headers(user_id: str, **claims: str) -> dict[str, str]:
    token, _ = create_access_token(user_id, **claims)
    return {"Authorization": f"Bearer {token}"}
