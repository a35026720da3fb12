from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import select
from app.crud.base import CRUDBase
from app.core.logging import get_logger
from app.core.rbac import Role
from app.models.order import Order, OrderStatus, next_status
from app.models.user import User

logger = get_logger(__name__)

class CRUDOrder(CRUDBase[Order]):
    def list_for_user(self, db: Session, user: User) -> List[Order]:
        stmt = select(Order).order_by(Order.scheduled_at.is_(None), Order.scheduled_at, Order.folio)
        # admin vê tudo; empleado só as atribuídas
        if user.role_id != Role.ADMIN:
            stmt = stmt.where(Order.assigned_user_id == user.id)
        return list(db.scalars(stmt).unique().all())

    def get_for_user(self, db: Session, order_id: int, user: User) -> Optional[Order]:
        o = self.get(db, order_id)
        if not o:
            return None
        if user.role_id != Role.ADMIN and o.assigned_user_id != user.id:
            return None
        return o

    def change_status(self, db: Session, *, order: Order, target: OrderStatus) -> Order:
        # só avança um passo: AGENDADO -> EN PROCESO -> REALIZADO
        if next_status(order.status) != target:
            raise ValueError("INVALID_TRANSITION")

        data = {"status_id": int(target)}
        if target == OrderStatus.REALIZADO:
            data["completed_at"] = datetime.now(timezone.utc)
        order = self.update(db, order, data)
        logger.info("order status changed", extra={"order_id": order.id, "status": int(target)})
        return order

order_crud = CRUDOrder(Order)
