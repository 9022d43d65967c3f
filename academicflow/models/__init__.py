from academicflow.models.entities import (
    Citation,
    DetectionEvent,
    Note,
    Submission,
    User,
)

__all__ = [
    "User",
    "Note",
    "Citation",
    "Submission",
    "DetectionEvent",
]
