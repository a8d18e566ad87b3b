"""JWT verification middleware for FastAPI.

Validates the token on every request (except public routes), extracts the
user id and sets ``request.state.auth`` for ``get_current_user``.

Tokens are HMAC-signed with ``JWT_SECRET`` by the account service and arrive
either as ``Authorization: Bearer <token>`` or in the ``x-auth-token``
header.  The user id is read from the ``user.id`` claim, falling back to
``sub``.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

import jwt as pyjwt
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from lunara.config import Settings, get_settings
from lunara.dependencies import AuthContext

logger = logging.getLogger("lunara.auth")

# Paths that do not require authentication
PUBLIC_PATHS: set[str] = {
    "/health",
    "/docs",
    "/openapi.json",
    "/redoc",
}


def _is_public(path: str) -> bool:
    return path in PUBLIC_PATHS or path.startswith("/docs") or path.startswith("/redoc")


def _unauthorized(detail: str) -> Response:
    return Response(
        content=f'{{"detail":"{detail}"}}',
        status_code=401,
        media_type="application/json",
    )


def _extract_token(request: Request) -> str | None:
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header.removeprefix("Bearer ").strip()
    return request.headers.get("x-auth-token")


def _user_id_from_claims(payload: dict[str, Any]) -> uuid.UUID:
    user_claim = payload.get("user")
    raw = user_claim.get("id") if isinstance(user_claim, dict) else None
    return uuid.UUID(str(raw or payload.get("sub", "")))


class JWTAuthMiddleware(BaseHTTPMiddleware):
    """Verify HMAC-signed JWTs and populate request.state.auth."""

    def __init__(self, app: Any, settings: Settings | None = None) -> None:
        super().__init__(app)
        self._settings = settings or get_settings()

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if _is_public(request.url.path):
            return await call_next(request)

        # OPTIONS requests pass through (CORS preflight)
        if request.method == "OPTIONS":
            return await call_next(request)

        token = _extract_token(request)
        if not token:
            return _unauthorized("No token, authorization denied")

        try:
            payload = pyjwt.decode(
                token,
                self._settings.jwt_secret,
                algorithms=[self._settings.jwt_algorithm],
            )
        except pyjwt.ExpiredSignatureError:
            return _unauthorized("Token expired")
        except pyjwt.InvalidTokenError as exc:
            logger.warning("JWT validation failed: %s", exc)
            return _unauthorized("Invalid token")

        try:
            user_id = _user_id_from_claims(payload)
        except ValueError:
            logger.warning("JWT carries no usable user id")
            return _unauthorized("Invalid token")

        request.state.auth = AuthContext(user_id=user_id, email=payload.get("email"))
        return await call_next(request)
