from pydantic import Field

from academicflow.schemas.common import APIModel


class AssistantRequest(APIModel):
    text: str = Field(min_length=1)


class AssistantResponse(APIModel):
    result: str
