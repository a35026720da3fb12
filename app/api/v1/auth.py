# app/api/v1/auth.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.core.auth import clear_session_cookie, set_session_cookie
from app.core.logging import get_logger
from app.core.rbac import role_name
from app.core.tokens import token_authority
from app.crud.user import user_crud
from app.db.session import get_db
from app.models.user import User
from app.schemas.user import LoginIn, UserOut

logger = get_logger(__name__)

router = APIRouter()

def _user_out(user: User) -> UserOut:
    return UserOut(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role_id,
        role_name=role_name(user.role_id),
        active=user.active,
    )

@router.post("/login", response_model=UserOut)
def login(body: LoginIn, response: Response, db: Session = Depends(get_db)):
    user = user_crud.get_by_email(db, body.email)
    if not user or not user.active:
        logger.info("login failed", extra={"email": body.email, "reason": "unknown_or_inactive"})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Credenciales inválidas.")

    if not user_crud.authenticate(db, user, body.password):
        logger.info("login failed", extra={"email": body.email, "reason": "bad_password"})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Credenciales inválidas.")

    token = token_authority.issue(sub=user.email, user_id=user.id, role=user.role_id)
    set_session_cookie(response, token)
    logger.info("login ok", extra={"user_id": user.id})
    return _user_out(user)

@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(response: Response):
    # o token não tem estado no servidor: basta descartar o cookie
    clear_session_cookie(response)
    return None

@router.get("/me", response_model=UserOut)
def me(user: User = Depends(get_current_user)):
    return _user_out(user)
