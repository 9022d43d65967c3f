import pytest
from fastapi import HTTPException
from starlette.requests import Request

from academicflow.utils.request_body import read_detection_request, read_json_body


def _request_with_body(*chunks: bytes | None) -> Request:
    messages = [
        {"type": "http.disconnect"} if chunk is None else {"type": "http.request", "body": chunk, "more_body": False}
        for chunk in chunks
    ]

    async def receive() -> dict:
        if messages:
            return messages.pop(0)
        return {"type": "http.disconnect"}

    scope = {
        "type": "http",
        "asgi": {"version": "3.0", "spec_version": "2.3"},
        "http_version": "1.1",
        "method": "POST",
        "scheme": "http",
        "path": "/api/faculty/detect-ai",
        "raw_path": b"/api/faculty/detect-ai",
        "query_string": b"",
        "root_path": "",
        "headers": [(b"content-type", b"application/json")],
        "client": ("127.0.0.1", 12345),
        "server": ("testserver", 80),
    }
    return Request(scope, receive)


@pytest.mark.asyncio
async def test_read_json_body_returns_object():
    payload = await read_json_body(_request_with_body(b'{"content": "essay", "submissionId": "s-1"}'))

    assert payload == {"content": "essay", "submissionId": "s-1"}


@pytest.mark.parametrize("body", [b"{", b"\xff\xfe\xfd"])
@pytest.mark.asyncio
async def test_read_json_body_rejects_invalid_json(body):
    with pytest.raises(HTTPException) as exc:
        await read_json_body(_request_with_body(body))

    assert exc.value.status_code == 400
    assert exc.value.detail == "Invalid JSON body"


@pytest.mark.asyncio
async def test_read_json_body_client_disconnect():
    with pytest.raises(HTTPException) as exc:
        await read_json_body(_request_with_body(None))

    assert exc.value.status_code == 499


@pytest.mark.parametrize("body", [b"[]", b'"essay"', b"42"])
@pytest.mark.asyncio
async def test_read_json_body_rejects_non_object(body):
    with pytest.raises(HTTPException) as exc:
        await read_json_body(_request_with_body(body))

    assert exc.value.detail == "JSON body must be an object"


@pytest.mark.asyncio
async def test_read_detection_request_accepts_either_submission_key():
    camel = _request_with_body(b'{"content": "long enough text", "submissionId": "s-1"}')
    snake = _request_with_body(b'{"content": "long enough text", "submission_id": "s-2"}')

    assert await read_detection_request(camel, min_chars=10) == ("long enough text", "s-1")
    assert await read_detection_request(snake, min_chars=10) == ("long enough text", "s-2")


@pytest.mark.parametrize("submission", [b'""', b"7", b"null", b'["s-1"]'])
@pytest.mark.asyncio
async def test_read_detection_request_ignores_unusable_submission_id(submission):
    body = b'{"content": "long enough text", "submissionId": ' + submission + b"}"

    _, submission_id = await read_detection_request(_request_with_body(body), min_chars=10)

    assert submission_id is None


@pytest.mark.parametrize(
    "body",
    [b"{}", b'{"content": 12345678901}', b'{"content": "   short      "}'],
)
@pytest.mark.asyncio
async def test_read_detection_request_rejects_short_or_missing_content(body):
    with pytest.raises(HTTPException) as exc:
        await read_detection_request(_request_with_body(body), min_chars=10)

    assert exc.value.status_code == 400
    assert exc.value.detail == "Content must be at least 10 characters"
