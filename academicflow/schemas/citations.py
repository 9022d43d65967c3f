from datetime import datetime

from pydantic import Field

from academicflow.schemas.common import APIModel
from academicflow.services.citations import CitationCheck, CitationStyle


class CitationGenerateRequest(APIModel):
    note_id: str
    input_text: str = Field(min_length=1)
    citation_style: CitationStyle = "APA"


class CitationResponse(APIModel):
    id: str
    note_id: str
    input_text: str
    formatted_citation: str
    citation_style: CitationStyle
    created_at: datetime | None = None


class VerifyCitationsRequest(APIModel):
    content: str = Field(min_length=1)
    style: CitationStyle = "APA"


class VerifyCitationsResponse(APIModel):
    results: list[CitationCheck]
