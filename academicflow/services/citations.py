from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from academicflow.core.logging import get_logger
from academicflow.services.llm import LLMClient, parse_json_payload

logger = get_logger(__name__)

CitationStyle = Literal["APA", "MLA", "IEEE"]


class CitationCheck(BaseModel):
    citation: str
    status: Literal["verified", "suspicious", "fake"]
    details: str = ""


class CitationVerificationPayload(BaseModel):
    results: list[CitationCheck] = Field(default_factory=list)


class CitationService:
    def __init__(self, client: LLMClient) -> None:
        self.client = client

    async def generate(self, input_text: str, style: CitationStyle) -> str:
        system = (
            f"You are a citation generator. Generate a properly formatted {style} citation based on the "
            "user's input. The input might be a DOI, URL, book title, or description. "
            "Return ONLY the formatted citation, nothing else."
        )
        formatted = await self.client.complete(system, f"Generate a {style} citation for: {input_text}")
        return formatted.strip()

    async def verify(self, content: str, style: CitationStyle) -> list[CitationCheck]:
        system = (
            f"You are a citation verifier. Extract all {style} citations from the text and verify their "
            'authenticity. Respond in JSON format: {"results": [{"citation": string, '
            '"status": "verified"|"suspicious"|"fake", "details": string}]}'
        )
        raw = await self.client.complete(system, content, json_mode=True)
        payload = parse_json_payload(raw, CitationVerificationPayload, default=CitationVerificationPayload())
        logger.info("citations_verified", style=style, count=len(payload.results))
        return payload.results
