"""FastAPI dependencies: the request principal and lenient body reading."""

import json

from fastapi import Header, Request

from orders.auth import Principal


def get_principal(request: Request, authorization: str | None = Header(default=None)) -> Principal:
    return request.app.state.tokens.resolve(authorization)


async def read_optional_json(request: Request):
    """Parsed JSON body, or ``None`` when it is missing or malformed.

    For routes that must authorize against the stored order before the body
    is validated.
    """
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
