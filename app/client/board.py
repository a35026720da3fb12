# app/client/board.py
from __future__ import annotations

from enum import Enum
from typing import Callable, List, Optional

from pydantic import BaseModel, ValidationError

from app.client.api import OrdersApiError, OrdersClient
from app.client.orders import (
    OrderStatus,
    OrderView,
    STATUS_CODES,
    filter_orders,
    is_forward_transition,
    next_status,
    normalize,
)
from app.core.logging import get_logger

logger = get_logger(__name__)


class Notice(BaseModel):
    message: str
    color: str
    duration_ms: int = 2000


class ChangeResult(str, Enum):
    ok = "ok"
    error = "error"
    ignored = "ignored"  # transição fora da cadeia: nada foi enviado


class OrdersBoard:
    """Estado da tela de ordens: lista carregada, filtro e avisos."""

    def __init__(self, client: OrdersClient, notify: Optional[Callable[[Notice], None]] = None):
        self.client = client
        self.notify = notify or (lambda notice: None)
        self.query = ""
        self.status: Optional[OrderStatus] = None
        self.loading = False
        self.data: List[OrderView] = []
        self.filtered: List[OrderView] = []

    def load(self) -> bool:
        self.loading = True
        try:
            rows = self.client.list()
            data = [normalize(r) for r in rows]
        except OrdersApiError as e:
            # mantém os dados anteriores na tela
            logger.error("orders.load_failed", extra={"error": str(e), "status_code": e.status_code})
            self.notify(Notice(message="Error al obtener órdenes", color="danger"))
            return False
        except (ValidationError, KeyError, TypeError, AttributeError) as e:
            # registro fora do formato: descarta a carga inteira
            logger.error("orders.load_invalid_row", extra={"error": str(e)})
            self.notify(Notice(message="Error al obtener órdenes", color="danger"))
            return False
        finally:
            self.loading = False

        self.data = data
        self.apply()
        return True

    def apply(self) -> List[OrderView]:
        self.filtered = filter_orders(self.data, self.query, self.status)
        return self.filtered

    def search(self, query: str = "", status: Optional[OrderStatus] = None) -> List[OrderView]:
        self.query = query
        self.status = status
        return self.apply()

    def find(self, order_id: int) -> Optional[OrderView]:
        return next((o for o in self.data if o.id == order_id), None)

    def change_status(self, order_id: int, target: OrderStatus) -> ChangeResult:
        order = self.find(order_id)
        if order is None or not is_forward_transition(order.status, target):
            return ChangeResult.ignored

        try:
            self.client.change_status(order.id, STATUS_CODES[target])
        except OrdersApiError as e:
            logger.error("orders.change_status_failed", extra={"order_id": order.id, "error": str(e)})
            self.notify(Notice(message="Error al cambiar el estado de la orden", color="danger"))
            return ChangeResult.error

        # só atualiza depois da resposta do servidor
        order.status = target
        self.apply()
        if target == OrderStatus.progress:
            self.notify(Notice(message="Orden marcada como En Proceso", color="tertiary"))
        else:
            self.notify(Notice(message="Orden completada exitosamente", color="success"))
        return ChangeResult.ok

    def advance(self, order_id: int) -> ChangeResult:
        order = self.find(order_id)
        if order is None:
            return ChangeResult.ignored
        target = next_status(order.status)
        if target is None:
            return ChangeResult.ignored
        return self.change_status(order_id, target)
