from __future__ import annotations

from typing import Literal

from academicflow.services.llm import LLMClient

AssistantAction = Literal["improve", "summarize", "grammar"]

_PROMPTS: dict[str, str] = {
    "improve": (
        "You are a writing assistant. Improve the following text for clarity, coherence, and "
        "professional academic tone. Return only the improved text."
    ),
    "summarize": (
        "You are a summarization assistant. Create a concise summary of the following text while "
        "preserving key points. Return only the summary."
    ),
    "grammar": (
        "You are a grammar checker. Fix all grammar, spelling, and punctuation errors in the "
        "following text. Return only the corrected text."
    ),
}


class WritingAssistant:
    def __init__(self, client: LLMClient) -> None:
        self.client = client

    async def run(self, action: AssistantAction, text: str) -> str:
        return await self.client.complete(_PROMPTS[action], text)

    async def improve(self, text: str) -> str:
        return await self.run("improve", text)

    async def summarize(self, text: str) -> str:
        return await self.run("summarize", text)

    async def grammar(self, text: str) -> str:
        return await self.run("grammar", text)
