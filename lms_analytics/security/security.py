# -*- coding: utf-8 -*-
"""security.security
~~~~~~~~~~~~~~~~~~~~
Session token helpers and principal resolution.

Key points
==========
* Uses *python-jose* for compact JWS handling.
* The session identifier is a signed token carrying the principal
  (``sub``, ``username``, ``role``, ``org``). Issuing it belongs to the sign-in
  flow; this service only mints tokens for tooling and tests.
* :func:`resolve_principal` never raises: a missing, expired or malformed
  token simply means "no principal" and each operation decides what that
  returns.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Request
from jose import JWTError, jwt
from pydantic import ValidationError

from lms_analytics.config.logger import configure_logger
from lms_analytics.config.settings import settings
from lms_analytics.domain.principal import Principal

logger = configure_logger()

SESSION_HEADER = "x-session-id"

# ---------------------------------------------------------------------------
# Token helpers
# ---------------------------------------------------------------------------


def create_session_token(
    principal: Principal, expires_delta: timedelta | None = None
) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta if expires_delta is not None else timedelta(days=1)
    )
    to_encode = {
        "sub": str(principal.id),
        "username": principal.username,
        "role": principal.role.value,
        "org": principal.organization_id,
        "exp": expire,
        "token_type": "session",
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_session_token(token: str) -> Optional[Principal]:
    """Decode a session token into a :class:`Principal`, or ``None``."""
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except JWTError as exc:
        logger.debug(f"Rejected session token: {exc}")
        return None

    if payload.get("token_type") != "session":
        logger.debug(f"Unexpected token type: {payload.get('token_type')}")
        return None

    try:
        return Principal(
            id=int(payload["sub"]),
            username=payload["username"],
            role=payload["role"],
            organization_id=payload.get("org"),
        )
    except (KeyError, ValueError, ValidationError) as exc:
        logger.warning(f"Malformed session payload: {exc}")
        return None


# ---------------------------------------------------------------------------
# Request context
# ---------------------------------------------------------------------------


def extract_session_id(request: Request) -> Optional[str]:
    """
    Find the session identifier on a request.

    Order: the ``x-session-id`` header forwarded by the access gate, the
    session cookie, then an ``Authorization: Bearer`` header.
    """
    session_id = request.headers.get(SESSION_HEADER)
    if session_id:
        return session_id

    session_id = request.cookies.get(settings.auth_cookie_name)
    if session_id:
        return session_id

    auth: str | None = request.headers.get("Authorization")
    if auth and auth.startswith("Bearer "):
        return auth.split(" ", 1)[1]
    return None


def resolve_principal(request: Request) -> Optional[Principal]:
    session_id = extract_session_id(request)
    if not session_id:
        return None
    return decode_session_token(session_id)


def get_current_principal(request: Request) -> Optional[Principal]:
    """
    FastAPI dependency returning the calling principal or ``None``.

    Args:
        request: FastAPI request object

    Returns:
        The resolved principal, ``None`` for anonymous callers
    """
    return resolve_principal(request)
