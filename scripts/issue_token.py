from academicflow.core.security import create_access_token


if __name__ == "__main__":
    import sys

    if len(sys.argv) < 2:
        raise SystemExit("usage: issue_token.py USER_ID [EMAIL]")
    claims = {"email": sys.argv[2]} if len(sys.argv) > 2 else {}
    token, expires_at = create_access_token(sys.argv[1], **claims)
    print(token)
    print(f"expires: {expires_at.isoformat()}", file=sys.stderr)
