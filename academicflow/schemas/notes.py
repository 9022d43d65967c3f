from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from academicflow.schemas.common import APIModel

NoteType = Literal["research", "code", "general"]


class NoteCreate(APIModel):
    title: str = Field(min_length=1, max_length=500)
    content: str = ""
    note_type: NoteType = "general"
    language: str | None = None
    is_public: bool = False


class NoteUpdate(APIModel):
    title: str | None = Field(default=None, min_length=1, max_length=500)
    content: str | None = None
    note_type: NoteType | None = None
    language: str | None = None
    is_public: bool | None = None

    @field_validator("title", "content", "note_type", "is_public")
    @classmethod
    def reject_null(cls, value: object) -> object:
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class NoteResponse(APIModel):
    id: str
    user_id: str
    title: str
    content: str
    note_type: NoteType
    language: str | None = None
    is_public: bool
    share_token: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ShareRequest(APIModel):
    is_public: bool


class ShareResponse(APIModel):
    share_url: str | None = None
