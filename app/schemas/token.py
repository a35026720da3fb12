# app/schemas/token.py
from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, Field, model_validator

class TokenPayload(BaseModel):
    sub: str = Field(min_length=1)  # e-mail do usuário
    uid: int
    role: int
    iat: int
    exp: int
    jti: Optional[str] = None

    @model_validator(mode="after")
    def _exp_after_iat(self) -> "TokenPayload":
        if self.exp <= self.iat:
            raise ValueError("exp must be after iat")
        return self

    @property
    def expires_at(self) -> datetime:
        return datetime.fromtimestamp(self.exp, tz=timezone.utc)

    @property
    def issued_at(self) -> datetime:
        return datetime.fromtimestamp(self.iat, tz=timezone.utc)
