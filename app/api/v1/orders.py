# app/api/v1/orders.py
from __future__ import annotations
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.api.permissions import require_roles
from app.core.rbac import Role
from app.crud.order import order_crud
from app.db.session import get_db
from app.models.order import OrderStatus
from app.models.user import User
from app.schemas.order import OrderCreate, OrderOut

router = APIRouter()

# GET /orders -> ordens do usuário autenticado (admin vê todas)
@router.get("", response_model=List[OrderOut])
def list_orders(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return [OrderOut.from_model(o) for o in order_crud.list_for_user(db, user)]

@router.get("/{order_id}", response_model=OrderOut)
def get_order(order_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    o = order_crud.get_for_user(db, order_id, user)
    if not o:
        raise HTTPException(status_code=404, detail="Orden no encontrada")
    return OrderOut.from_model(o)

# PUT /orders/{id}/status/{status_id}  (1=AGENDADO, 2=EN PROCESO, 3=REALIZADO)
@router.put("/{order_id}/status/{status_id}", response_model=OrderOut)
def change_status(
    order_id: int,
    status_id: int = Path(..., ge=1, le=3),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    o = order_crud.get_for_user(db, order_id, user)
    if not o:
        raise HTTPException(status_code=404, detail="Orden no encontrada")
    try:
        o = order_crud.change_status(db, order=o, target=OrderStatus(status_id))
    except ValueError as e:
        if str(e) == "INVALID_TRANSITION":
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail={"code": "INVALID_TRANSITION", "message": "Transición de estado no permitida."},
            )
        raise
    return OrderOut.from_model(o)

# POST /orders -> só admin agenda ordens novas (sempre nascem AGENDADO)
@router.post("", response_model=OrderOut, status_code=status.HTTP_201_CREATED)
def create_order(
    body: OrderCreate,
    db: Session = Depends(get_db),
    _admin: User = Depends(require_roles([Role.ADMIN])),
):
    data = body.model_dump()
    data["status_id"] = int(OrderStatus.AGENDADO)
    o = order_crud.create(db, data)
    return OrderOut.from_model(o)
