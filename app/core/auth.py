# app/core/auth.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.core.config import settings
from app.core.logging import get_logger
from app.core.tokens import TokenAuthority, token_authority

logger = get_logger(__name__)


def set_session_cookie(response: Response, token: str) -> None:
    max_age = settings.AUTH_COOKIE_MAX_AGE_SECONDS
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=max_age,
        expires=datetime.now(timezone.utc) + timedelta(seconds=max_age),
        path="/",
        secure=True,
        httponly=True,
        samesite="none",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.AUTH_COOKIE_NAME,
        path="/",
        secure=True,
        httponly=True,
        samesite="none",
    )


def read_token(request: Request) -> Optional[str]:
    # cookie primeiro; Authorization: Bearer só como alternativa (Swagger)
    token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if token:
        return token
    authorization = request.headers.get("Authorization")
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


class SessionCookieMiddleware(BaseHTTPMiddleware):
    """Valida o token de cada request e renova o cookie quando está perto de expirar.

    O payload validado fica em ``request.state.principal`` (``None`` se não
    autenticado); quem exige login são as dependências em ``app.api.deps``.
    """

    def __init__(self, app, authority: TokenAuthority | None = None):
        super().__init__(app)
        self.authority = authority or token_authority

    async def dispatch(self, request: Request, call_next):
        request.state.principal = None
        refreshed: Optional[str] = None

        token = read_token(request)
        if token:
            claims = self.authority.validate(token)
            if claims is not None:
                request.state.principal = claims
                refreshed = self.authority.maybe_refresh(claims)

        response = await call_next(request)
        # login/logout já escreveram o cookie: não sobrescreve
        if refreshed and not _writes_session_cookie(response):
            set_session_cookie(response, refreshed)
        return response


def _writes_session_cookie(response: Response) -> bool:
    prefix = f"{settings.AUTH_COOKIE_NAME}="
    return any(v.startswith(prefix) for v in response.headers.getlist("set-cookie"))
