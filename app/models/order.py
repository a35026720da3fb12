from enum import IntEnum
from typing import Optional
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Text, Integer, Numeric, ForeignKey, DateTime, func
from app.db.base import Base

class OrderStatus(IntEnum):
    AGENDADO = 1
    EN_PROCESO = 2
    REALIZADO = 3

# nomes como o front recebe em "estado"
STATUS_NAMES = {
    OrderStatus.AGENDADO: "AGENDADO",
    OrderStatus.EN_PROCESO: "EN PROCESO",
    OrderStatus.REALIZADO: "REALIZADO",
}

def next_status(current: OrderStatus) -> Optional[OrderStatus]:
    if current == OrderStatus.AGENDADO:
        return OrderStatus.EN_PROCESO
    if current == OrderStatus.EN_PROCESO:
        return OrderStatus.REALIZADO
    return None  # REALIZADO é terminal

class Order(Base):
    __tablename__ = "orders"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    folio: Mapped[int] = mapped_column(Integer, unique=True, index=True)
    status_id: Mapped[int] = mapped_column(Integer, default=int(OrderStatus.AGENDADO))
    client_name: Mapped[Optional[str]] = mapped_column(String(160), nullable=True)
    region_id: Mapped[Optional[int]] = mapped_column(ForeignKey("regions.id"), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text(), nullable=True)
    work_hours: Mapped[Optional[float]] = mapped_column(Numeric(6, 2, asdecimal=False), nullable=True)
    registered_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    scheduled_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    assigned_user_id: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id"), nullable=True)

    region = relationship("Region", back_populates="orders", lazy="joined")
    assigned_user = relationship("User", back_populates="orders")

    @property
    def status(self) -> OrderStatus:
        return OrderStatus(self.status_id)
