from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.models.user import User
from app.schemas.token import TokenPayload

# Mesma resposta para token ausente, expirado, malformado ou forjado
_UNAUTHENTICATED = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Not authenticated",
    headers={"WWW-Authenticate": "Bearer"},
)

# ----------------------------------------------------------------------
# Payload já validado pelo SessionCookieMiddleware
# ----------------------------------------------------------------------
def get_current_principal(request: Request) -> TokenPayload:
    principal = getattr(request.state, "principal", None)
    if principal is None:
        raise _UNAUTHENTICATED
    return principal

# ----------------------------------------------------------------------
# Usuário atual (sub = e-mail); inativo conta como não autenticado
# ----------------------------------------------------------------------
def get_current_user(
    principal: TokenPayload = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> User:
    user = db.get(User, principal.uid)
    if not user or user.email != principal.sub.lower() or not user.active:
        raise _UNAUTHENTICATED
    return user
