"""Optional shared-key guard for the engine routes."""

import secrets

from fastapi import HTTPException, Header

from fastplan.config import settings


def _bearer_token(authorization: str | None) -> str | None:
    if authorization and authorization.startswith("Bearer "):
        return authorization[7:].strip()
    return None


async def verify_api_key(
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
    authorization: str | None = Header(default=None),
) -> str:
    """Accept the key from X-API-Key, falling back to a bearer token.

    With ENGINE_API_KEY unset every request is let through.
    """
    expected = settings.engine_api_key
    if expected is None:
        return ""

    supplied = x_api_key if x_api_key is not None else _bearer_token(authorization)
    if supplied is None or not secrets.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8")):
        raise HTTPException(status_code=401, detail="Invalid or missing API key")

    return supplied
