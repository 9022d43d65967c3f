from datetime import datetime

from pydantic import Field, field_validator

from academicflow.schemas.common import APIModel


class SubmissionCreate(APIModel):
    assignment_name: str = Field(min_length=1, max_length=500)
    content: str = Field(min_length=1)
    faculty_id: str | None = None
    file_urls: list[str] = Field(default_factory=list)


class SubmissionReview(APIModel):
    grade: str | None = Field(default=None, max_length=10)
    feedback: str | None = None
    citation_verified: bool | None = None
    ai_detection_score: int | None = Field(default=None, ge=0, le=100)

    @field_validator("citation_verified")
    @classmethod
    def reject_null(cls, value: object) -> object:
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class SubmissionResponse(APIModel):
    id: str
    student_id: str
    faculty_id: str | None = None
    assignment_name: str
    content: str
    file_urls: list[str]
    ai_detection_score: int | None = None
    citation_verified: bool | None = None
    grade: str | None = None
    feedback: str | None = None
    submitted_at: datetime | None = None
    reviewed_at: datetime | None = None
