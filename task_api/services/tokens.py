"""Signed, stateless identity tokens.

A token is a JWT carrying ``userId`` and ``username``. It is valid iff its
signature verifies with the service's secret, so verification needs no
server-side lookup. An ``exp`` claim is only added when the service is built
with an expiry; by default tokens never expire.
"""

import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from jose.utils import base64url_decode, base64url_encode

logger = logging.getLogger(__name__)


def _is_canonical(token: str) -> bool:
    """True when the token has three segments, each in canonical unpadded base64url.

    The decoder ignores the spare low bits of a segment's last character, so
    a non-canonical spelling would decode to the same bytes as the original.
    """
    segments = token.split(".")
    if len(segments) != 3:
        return False
    for segment in segments:
        try:
            raw = segment.encode("ascii")
            if base64url_encode(base64url_decode(raw)) != raw:
                return False
        except (ValueError, TypeError):
            return False
    return True


class TokenService:
    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int | None = None):
        if not secret_key:
            raise ValueError("TokenService requires a non-empty secret key")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    def issue(self, user_id: str, username: str) -> str:
        payload = {"userId": user_id, "username": username}
        if self._expire_minutes:
            payload["exp"] = datetime.now(timezone.utc) + timedelta(minutes=self._expire_minutes)
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify(self, token) -> dict | None:
        """Return ``{"userId", "username"}`` for a valid token, otherwise None.

        Never raises: missing, malformed, tampered and expired tokens all come
        back as None so callers can treat them as unauthenticated.
        """
        if not token or not isinstance(token, str):
            return None
        if not _is_canonical(token):
            logger.debug("Token rejected: non-canonical encoding")
            return None
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError as e:
            logger.debug("Token rejected: %s", e.__class__.__name__)
            return None
        user_id = payload.get("userId")
        username = payload.get("username")
        if not isinstance(user_id, str) or not isinstance(username, str):
            return None
        return {"userId": user_id, "username": username}
