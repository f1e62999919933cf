# -*- coding: utf-8 -*-

"""
lms_analytics/security/middleware.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Access gate for page requests.

Anonymous visitors are sent to the sign-in page, signed-in visitors are kept
away from the sign-in / sign-up pages, and the auth and API prefixes pass
through untouched because those endpoints check the principal themselves.
"""
import time
from typing import Optional

from fastapi import Request
from fastapi.responses import RedirectResponse

from lms_analytics.config.logger import get_request_logger
from lms_analytics.config.settings import settings
from lms_analytics.domain.enums import AccessDecision
from lms_analytics.security.security import SESSION_HEADER

PUBLIC_ROUTES = frozenset({"/sign-in", "/sign-up", "/forgot-password"})

BYPASS_PREFIXES = ("/api/auth", "/reset-password", "/api/trpc")

SIGN_IN_PATH = "/sign-in"
DASHBOARD_PATH = "/dashboard"

request_logger = get_request_logger()


def resolve_access(path: str, session_id: Optional[str]) -> AccessDecision:
    """
    Decide what to do with a request.

    Args:
        path: Request path
        session_id: Session identifier from the auth cookie, if any

    Returns:
        The gate decision for this request
    """
    if path.startswith(BYPASS_PREFIXES):
        return AccessDecision.ALLOW

    if session_id:
        if path in PUBLIC_ROUTES:
            return AccessDecision.REDIRECT_DASHBOARD
        return AccessDecision.ALLOW

    if path not in PUBLIC_ROUTES:
        return AccessDecision.REDIRECT_SIGN_IN
    return AccessDecision.ALLOW


def log_request(
    method: str, path: str, status: int, elapsed_ms: int, user: Optional[str]
) -> None:
    if not settings.is_production:
        return

    request_logger.info(
        f"=>[{method}] {path} - {status} - {elapsed_ms}ms - User: {user or 'anonymous'}"
    )
    if status in (302, 307):
        request_logger.info(f"Redirecting to: {path}")


def _forward_session(request: Request, session_id: str) -> None:
    # Downstream handlers build their Request from the same ASGI scope
    headers = [
        (key, value)
        for key, value in request.scope["headers"]
        if key != SESSION_HEADER.encode("latin-1")
    ]
    headers.append((SESSION_HEADER.encode("latin-1"), session_id.encode("latin-1")))
    request.scope["headers"] = headers


async def access_gate(request: Request, call_next):
    start = time.perf_counter()
    path = request.url.path

    if path.startswith(BYPASS_PREFIXES):
        return await call_next(request)

    session_id = request.cookies.get(settings.auth_cookie_name)
    decision = resolve_access(path, session_id)

    if decision is AccessDecision.REDIRECT_DASHBOARD:
        response = RedirectResponse(
            request.url.replace(path=DASHBOARD_PATH, query="")
        )
    elif decision is AccessDecision.REDIRECT_SIGN_IN:
        response = RedirectResponse(request.url.replace(path=SIGN_IN_PATH, query=""))
    else:
        if session_id:
            _forward_session(request, session_id)
        response = await call_next(request)

    elapsed_ms = int((time.perf_counter() - start) * 1000)
    log_request(
        request.method,
        path,
        response.status_code,
        elapsed_ms,
        "authenticated" if session_id else None,
    )
    return response
