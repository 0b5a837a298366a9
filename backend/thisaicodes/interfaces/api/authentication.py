from __future__ import annotations

from typing import Optional, Tuple

from django.contrib.auth import get_user_model
from rest_framework import authentication, exceptions

from thisaicodes.accounts.tokens import InvalidToken, decode_access_token


class BearerTokenAuthentication(authentication.BaseAuthentication):
    """Authenticates requests using an ``Authorization: Bearer <jwt>`` header."""

    keyword = "Bearer"

    def authenticate(self, request) -> Optional[Tuple[object, dict]]:
        header = authentication.get_authorization_header(request).split()
        if not header or header[0].lower() != self.keyword.lower().encode():
            return None
        if len(header) != 2:
            raise exceptions.AuthenticationFailed("Access token required")

        try:
            raw_token = header[1].decode()
            payload = decode_access_token(raw_token)
        except (UnicodeError, InvalidToken) as exc:
            raise exceptions.AuthenticationFailed("Invalid or expired token") from exc

        user_model = get_user_model()
        try:
            user = user_model.objects.get(pk=payload["userId"], is_active=True)
        except (user_model.DoesNotExist, ValueError, TypeError):
            raise exceptions.AuthenticationFailed("Invalid or expired token") from None
        return user, payload

    def authenticate_header(self, request) -> str:
        return self.keyword
