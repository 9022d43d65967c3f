from __future__ import annotations

import json
from typing import Any

from fastapi import HTTPException, Request, status
from starlette.requests import ClientDisconnect


async def read_json_body(request: Request) -> dict[str, Any]:
    try:
        payload = await request.json()
    except ClientDisconnect as exc:
        raise HTTPException(status_code=499, detail="Client disconnected") from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid JSON body") from exc

    if not isinstance(payload, dict):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="JSON body must be an object")

    return payload


async def read_detection_request(request: Request, min_chars: int) -> tuple[str, str | None]:
    """Read a detect-ai body, returning the text to classify and an optional submission id."""
    payload = await read_json_body(request)

    content = payload.get("content")
    if not isinstance(content, str) or len(content.strip()) < min_chars:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Content must be at least {min_chars} characters",
        )

    submission_id = payload.get("submissionId") or payload.get("submission_id")
    if not isinstance(submission_id, str) or not submission_id:
        submission_id = None
    return content, submission_id
