# app/client/orders.py
"""View models das ordens do lado do app e as regras locais da tela.

Normaliza os registros crus do ``GET /orders``, controla as transições de
estado permitidas (pending -> progress -> done) e faz o filtro local por texto
e estado.
"""
from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, Field


class OrderStatus(str, Enum):
    pending = "pending"
    progress = "progress"
    done = "done"


# "estado" do servidor -> estado da tela; o resto cai em pending
SERVER_STATUS = {
    "AGENDADO": OrderStatus.pending,
    "EN PROCESO": OrderStatus.progress,
    "REALIZADO": OrderStatus.done,
}

# código numérico enviado no PUT /orders/{id}/status/{code}
STATUS_CODES = {
    OrderStatus.pending: 1,
    OrderStatus.progress: 2,
    OrderStatus.done: 3,
}

_NEXT = {
    OrderStatus.pending: OrderStatus.progress,
    OrderStatus.progress: OrderStatus.done,
}

_LABELS = {
    OrderStatus.pending: "Pendiente",
    OrderStatus.progress: "En progreso",
    OrderStatus.done: "Completada",
}

_CHIP_COLORS = {
    OrderStatus.pending: "warning",
    OrderStatus.progress: "tertiary",
    OrderStatus.done: "success",
}

NO_CLIENT = "Sin cliente"
NO_REGION = "Sin región"
NO_ADDRESS = "Sin dirección"
NO_NOTES = "Sin observación"
NOT_RECORDED = "No registrada"


class Party(BaseModel):
    name: str


class OrderView(BaseModel):
    id: int
    code: str
    status: OrderStatus
    created_at: str = ""
    client: Party = Field(default_factory=lambda: Party(name=NO_CLIENT))
    company: Party = Field(default_factory=lambda: Party(name=NO_REGION))
    address: str = NO_ADDRESS
    description: str = NO_NOTES
    hours: float = 0
    scheduled_at: str = NOT_RECORDED
    finished_at: str = NOT_RECORDED

    def searchable_text(self) -> str:
        return f"{self.code} {self.client.name} {self.company.name} {self.address}"


def next_status(current: OrderStatus) -> Optional[OrderStatus]:
    return _NEXT.get(current)


def is_forward_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return _NEXT.get(current) == target


def label(status: OrderStatus) -> str:
    return _LABELS[status]


def chip_color(status: OrderStatus) -> str:
    return _CHIP_COLORS[status]


def _parse_datetime(value: Any) -> Optional[datetime]:
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def _iso_date(value: Any) -> str:
    dt = _parse_datetime(value)
    if dt is None:
        return ""
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.date().isoformat()


def _display_datetime(value: Any) -> str:
    dt = _parse_datetime(value)
    if dt is None:
        return NOT_RECORDED
    return dt.strftime("%d/%m/%Y %H:%M")


def normalize(raw: Dict[str, Any]) -> OrderView:
    """Converte um registro cru do servidor no view model da tela."""
    folio = raw.get("folio")
    region = raw.get("region") or {}
    return OrderView(
        id=raw["id"],
        code=str(folio) if folio not in (None, "") else "-",
        status=SERVER_STATUS.get(raw.get("estado"), OrderStatus.pending),
        created_at=_iso_date(raw.get("fechaRegistro")),
        client=Party(name=raw.get("cliente") or NO_CLIENT),
        company=Party(name=(region.get("nombre") if isinstance(region, dict) else None) or NO_REGION),
        address=raw.get("direccion") or NO_ADDRESS,
        description=raw.get("observaciones") or NO_NOTES,
        hours=raw.get("horasTrabajo") or 0,
        scheduled_at=_display_datetime(raw.get("fechaAgendada")),
        finished_at=_display_datetime(raw.get("fechaFinalizado")),
    )


def filter_orders(
    orders: Iterable[OrderView],
    query: str = "",
    status: Optional[OrderStatus] = None,
) -> List[OrderView]:
    q = (query or "").strip().lower()
    result = []
    for o in orders:
        if q and q not in o.searchable_text().lower():
            continue
        if status and o.status != status:
            continue
        result.append(o)
    return result
