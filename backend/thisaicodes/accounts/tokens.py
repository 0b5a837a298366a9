"""Signed bearer tokens handed out at login."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

import jwt
from django.conf import settings


class InvalidToken(Exception):
    pass


def issue_access_token(user, *, name: str = "") -> str:
    issued_at = datetime.now(timezone.utc)
    payload = {
        "userId": user.pk,
        "email": user.email,
        "name": name,
        "iat": issued_at,
        "exp": issued_at + settings.JWT_EXPIRATION,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    try:
        payload = jwt.decode(
            token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM]
        )
    except jwt.ExpiredSignatureError as exc:
        raise InvalidToken("Token has expired") from exc
    except jwt.InvalidTokenError as exc:
        raise InvalidToken("Invalid token") from exc
    if "userId" not in payload:
        raise InvalidToken("Token is missing the user claim")
    return payload
