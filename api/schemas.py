"""
api/schemas.py
───────────────
Modelos Pydantic del contrato JSON de la API.

El contrato habla en castellano (nombre, monto, vencimiento, estado
"por_pagar" | "pagado" | "vencido", ...); internamente los modelos usan
los nombres de columna en inglés. Las funciones de este módulo traducen
entre ambos.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from database.models import Payment, Service

ESTADOS = {"por_pagar": "pending", "pagado": "paid", "vencido": "overdue"}
PERIODICIDADES = {"mensual": "monthly", "anual": "yearly", "unico": "once"}

_ESTADOS_INV = {v: k for k, v in ESTADOS.items()}
_PERIODICIDADES_INV = {v: k for k, v in PERIODICIDADES.items()}

# campo del contrato → columna
_CAMPOS = {
    "nombre": "name",
    "monto": "amount",
    "vencimiento": "due_date",
    "periodicidad": "frequency",
    "estado": "status",
    "link_pago": "payment_link",
    "categoria": "category",
}


def estado_to_status(estado: Optional[str]) -> Optional[str]:
    """Valores desconocidos pasan sin traducir; los rechaza la capa de negocio."""
    if estado is None:
        return None
    return ESTADOS.get(estado, estado)


def periodicidad_to_frequency(periodicidad: Optional[str]) -> Optional[str]:
    if periodicidad is None:
        return None
    return PERIODICIDADES.get(periodicidad, periodicidad)


# ─────────────────────────────────────────────
#  Servicios
# ─────────────────────────────────────────────

class ServicioIn(BaseModel):
    """Cuerpo de POST y PUT/PATCH. En PUT solo cuentan los campos enviados."""

    model_config = ConfigDict(populate_by_name=True)

    nombre: Optional[str] = None
    monto: Optional[float] = None
    vencimiento: Optional[str] = None
    periodicidad: Optional[str] = None
    estado: Optional[str] = None
    link_pago: Optional[str] = Field(default=None, alias="linkPago")
    categoria: Optional[str] = None

    def to_fields(self) -> dict[str, Any]:
        """Campos enviados explícitamente, con nombres y valores internos."""
        fields = {}
        for campo, value in self.model_dump(exclude_unset=True).items():
            if campo == "estado":
                value = estado_to_status(value)
            elif campo == "periodicidad":
                value = periodicidad_to_frequency(value)
            fields[_CAMPOS[campo]] = value
        return fields


class EstadoIn(BaseModel):
    estado: Optional[str] = None


class ServicioOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    nombre: str
    monto: float
    vencimiento: datetime
    periodicidad: str
    estado: str
    link_pago: Optional[str] = Field(default=None, alias="linkPago")
    categoria: str
    user_id: str = Field(alias="userId")

    @classmethod
    def from_service(cls, service: Service) -> "ServicioOut":
        return cls(
            id=service.id,
            nombre=service.name,
            monto=service.amount,
            vencimiento=service.due_date,
            periodicidad=_PERIODICIDADES_INV.get(service.frequency, service.frequency),
            estado=_ESTADOS_INV.get(service.status, service.status),
            link_pago=service.payment_link,
            categoria=service.category,
            user_id=service.user_id,
        )


# ─────────────────────────────────────────────
#  Pagos
# ─────────────────────────────────────────────

class PagoIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    servicio_id: int = Field(alias="servicioId")
    monto_pagado: Optional[float] = Field(default=None, alias="montoPagado")
    fecha_pago: Optional[str] = Field(default=None, alias="fechaPago")


class PagoOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    servicio_id: int = Field(alias="servicioId")
    monto_pagado: float = Field(alias="montoPagado")
    fecha_pago: datetime = Field(alias="fechaPago")

    @classmethod
    def from_payment(cls, payment: Payment) -> "PagoOut":
        return cls(
            id=payment.id,
            servicio_id=payment.service_id,
            monto_pagado=payment.amount,
            fecha_pago=payment.paid_at,
        )
