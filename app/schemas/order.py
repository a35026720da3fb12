# app/schemas/order.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from app.models.order import Order as OrderModel, STATUS_NAMES

# ---------------------------
# DTO de saída: chaves camelCase/espanhol que o app mobile consome
# ---------------------------

class RegionOut(BaseModel):
    id: int
    nombre: str

class OrderOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    folio: int
    estado: str
    id_estado: int = Field(alias="idEstado")
    cliente: Optional[str] = None
    region: Optional[RegionOut] = None
    direccion: Optional[str] = None
    observaciones: Optional[str] = None
    horas_trabajo: Optional[float] = Field(default=None, alias="horasTrabajo")
    fecha_registro: Optional[datetime] = Field(default=None, alias="fechaRegistro")
    fecha_agendada: Optional[datetime] = Field(default=None, alias="fechaAgendada")
    fecha_finalizado: Optional[datetime] = Field(default=None, alias="fechaFinalizado")

    @classmethod
    def from_model(cls, o: OrderModel) -> "OrderOut":
        return cls(
            id=o.id,
            folio=o.folio,
            estado=STATUS_NAMES[o.status],
            id_estado=o.status_id,
            cliente=o.client_name,
            region=RegionOut(id=o.region.id, nombre=o.region.name) if o.region else None,
            direccion=o.address,
            observaciones=o.notes,
            horas_trabajo=o.work_hours,
            fecha_registro=o.registered_at,
            fecha_agendada=o.scheduled_at,
            fecha_finalizado=o.completed_at,
        )

# ---------------------------
# Entrada: POST /orders (admin)
# ---------------------------

class OrderCreate(BaseModel):
    folio: int = Field(ge=1)
    client_name: Optional[str] = None
    region_id: Optional[int] = None
    address: Optional[str] = None
    notes: Optional[str] = None
    work_hours: Optional[float] = Field(default=None, ge=0)
    scheduled_at: Optional[datetime] = None
    assigned_user_id: Optional[int] = None
