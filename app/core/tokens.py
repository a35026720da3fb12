# app/core/tokens.py
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union

from jose import jwt, JWTError, ExpiredSignatureError
from jose.exceptions import JWTClaimsError
from pydantic import ValidationError

from app.core.config import settings
from app.core.logging import get_logger
from app.schemas.token import TokenPayload

logger = get_logger(__name__)

def _now() -> datetime:
    return datetime.now(timezone.utc)


class TokenAuthority:
    """Emite, valida e renova os tokens de sessão (HS256, cookie AuthToken).

    Toda falha de validação vira ``None`` para quem chama; o motivo só vai
    para o log.
    """

    def __init__(
        self,
        *,
        secret_key: str | None = None,
        algorithm: str | None = None,
        issuer: str | None = None,
        audience: str | None = None,
        lifetime: timedelta | None = None,
        refresh_threshold: timedelta | None = None,
    ) -> None:
        self.secret_key = secret_key or settings.SECRET_KEY
        self.algorithm = algorithm or settings.ALGORITHM
        self.issuer = issuer or settings.JWT_ISSUER
        self.audience = audience or settings.JWT_AUDIENCE
        self.lifetime = lifetime or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        self.refresh_threshold = refresh_threshold or timedelta(minutes=settings.TOKEN_REFRESH_THRESHOLD_MINUTES)

    def issue(self, *, sub: str, user_id: int, role: int, expires_delta: Optional[timedelta] = None) -> str:
        delta = expires_delta if expires_delta is not None else self.lifetime
        if delta <= timedelta(0):
            raise ValueError("token lifetime must be positive")
        now = _now()
        payload: Dict[str, Any] = {
            "sub": sub,
            "uid": int(user_id),
            "role": int(role),
            "iss": self.issuer,
            "aud": self.audience,
            "jti": uuid.uuid4().hex,
            "iat": int(now.timestamp()),
            "exp": int((now + delta).timestamp()),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def validate(self, token: str | None) -> Optional[TokenPayload]:
        if not token:
            return None
        try:
            claims = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
            )
        except ExpiredSignatureError:
            logger.info("token rejected", extra={"reason": "expired"})
            return None
        except JWTClaimsError as exc:
            logger.info("token rejected", extra={"reason": "claims", "error": str(exc)})
            return None
        except JWTError as exc:
            logger.info("token rejected", extra={"reason": "invalid", "error": str(exc)})
            return None

        try:
            return TokenPayload.model_validate(claims)
        except ValidationError:
            logger.info("token rejected", extra={"reason": "malformed"})
            return None

    def maybe_refresh(self, token: Union[str, TokenPayload, None]) -> Optional[str]:
        """Novo token se faltar menos que ``refresh_threshold`` para expirar."""
        claims = token if isinstance(token, TokenPayload) else self.validate(token)
        if claims is None:
            return None

        remaining = claims.expires_at - _now()
        if remaining <= timedelta(0) or remaining >= self.refresh_threshold:
            return None

        logger.info("token refreshed", extra={"sub": claims.sub, "remaining_s": int(remaining.total_seconds())})
        return self.issue(sub=claims.sub, user_id=claims.uid, role=claims.role)


token_authority = TokenAuthority()
