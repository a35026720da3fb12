# app/core/rbac.py
from enum import IntEnum

class Role(IntEnum):
    ADMIN = 1      # vê todas as ordens
    EMPLEADO = 2   # só as ordens atribuídas

ROLE_NAMES = {
    Role.ADMIN: "Administrador",
    Role.EMPLEADO: "Empleado",
}

def role_name(role_id: int) -> str:
    try:
        return ROLE_NAMES[Role(role_id)]
    except ValueError:
        return "Desconocido"
