# app/schemas/user.py
from __future__ import annotations
from pydantic import BaseModel, EmailStr, Field

class LoginIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)

class UserOut(BaseModel):
    id: int
    name: str
    email: str
    role: int
    role_name: str
    active: bool = True

    model_config = {"from_attributes": True}
