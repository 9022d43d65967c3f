from __future__ import annotations

from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from academicflow.core.config import Settings, get_settings
from academicflow.core.logging import get_logger

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class LLMError(Exception):
    pass


class LLMNotConfiguredError(LLMError):
    pass


class LLMRequestError(LLMError):
    pass


def _strip_code_fence(raw: str) -> str:
    text = raw.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]
    return text.strip()


def parse_json_payload(raw: str | None, model: type[ModelT], default: Any) -> ModelT | Any:
    """Validate a model completion against ``model``, returning ``default`` on failure."""
    if not raw:
        return default
    try:
        return model.model_validate_json(_strip_code_fence(raw))
    except ValidationError as exc:
        logger.warning(
            "llm_payload_unparseable",
            model=model.__name__,
            errors=exc.error_count(),
            preview=raw[:180],
        )
        return default


class LLMClient:
    def __init__(self, settings: Settings | None = None, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = settings or get_settings()
        self._transport = transport

    def is_configured(self) -> bool:
        return self.settings.llm_configured

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.settings.openai_base_url,
            timeout=httpx.Timeout(self.settings.openai_timeout_seconds),
            headers={
                "Accept": "application/json",
                "Authorization": f"Bearer {self.settings.openai_api_key}",
            },
            transport=self._transport,
        )

    async def complete(self, system: str, user: str, *, json_mode: bool = False) -> str:
        if not self.is_configured():
            raise LLMNotConfiguredError("OpenAI API key is not configured")

        payload: dict[str, Any] = {
            "model": self.settings.openai_model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user[: self.settings.openai_max_input_chars]},
            ],
        }
        if json_mode:
            payload["response_format"] = {"type": "json_object"}

        try:
            async with self._client() as client:
                response = await client.post("/chat/completions", json=payload)
        except httpx.HTTPError as exc:
            logger.warning("llm_request_failed", model=self.settings.openai_model, error=str(exc))
            raise LLMRequestError("Completion request failed") from exc

        if response.status_code >= 400:
            logger.warning(
                "llm_http_error",
                model=self.settings.openai_model,
                status_code=response.status_code,
                preview=response.text[:180],
            )
            raise LLMRequestError(f"Completion request returned HTTP {response.status_code}")

        try:
            body = response.json()
            content = body["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            logger.warning("llm_unparseable_response", preview=response.text[:180])
            raise LLMRequestError("Completion response was malformed") from exc

        return content or ""


llm_client = LLMClient()
