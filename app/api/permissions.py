# app/api/permissions.py
from typing import Iterable, Callable
from fastapi import Depends, HTTPException, status
from app.api.deps import get_current_user
from app.core.rbac import Role, role_name
from app.models.user import User

def require_roles(allowed: Iterable[Role]) -> Callable[[User], User]:
    """
    Use: Depends(require_roles([Role.ADMIN]))
    Bloqueia quem não tiver uma das roles permitidas.
    """
    allowed_set = {int(r) for r in allowed}

    def _checker(user: User = Depends(get_current_user)) -> User:
        if user.role_id not in allowed_set:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Acceso denegado para el perfil '{role_name(user.role_id)}'.",
            )
        return user

    return _checker
