"""Bearer token issuance and verification."""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Dict

import jwt

from .config import JWT_ALGORITHM, JWT_EXPIRATION, JWT_SECRET
from .errors import PermissionDeniedError
from .time import utcnow


def create_access_token(user_id: str) -> str:
    payload: Dict[str, Any] = {"id": user_id}
    if JWT_EXPIRATION > 0:
        payload["exp"] = utcnow() + timedelta(seconds=JWT_EXPIRATION)
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> str:
    """Return the user id carried by ``token``."""

    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError as exc:
        raise PermissionDeniedError("Token expired") from exc
    except jwt.InvalidTokenError as exc:
        raise PermissionDeniedError("Failed to authenticate token") from exc

    user_id = payload.get("id")
    if not isinstance(user_id, str) or not user_id:
        raise PermissionDeniedError("Failed to authenticate token")
    return user_id


__all__ = ["create_access_token", "decode_access_token"]
