"""
database/models.py
──────────────────
Modelos de datos (dataclasses) que representan las tablas de Supabase.
Sirven como contratos entre capas, sin ORM pesado.

Tablas esperadas en Supabase:
  - services       (id, user_id, name, amount, due_date timestamptz,
                    frequency, status, payment_link, category, created_at)
  - transactions   (id, user_id, type, amount, description, category,
                    date, is_recurring, frequency,
                    service_id → services.id ON DELETE SET NULL, created_at)
  - payments       (id, user_id, service_id → services.id, amount,
                    paid_at timestamptz)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Literal, Optional

from dateutil.parser import isoparse

# ─────────────────────────────────────────────
#  Helpers de parseo
# ─────────────────────────────────────────────

def parse_datetime(value) -> Optional[datetime]:
    """ISO string | datetime → datetime aware (UTC si viene sin zona)."""
    if value is None or value == "":
        return None
    parsed = isoparse(value) if isinstance(value, str) else value
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        return date.fromisoformat(value[:10])
    return value


# ─────────────────────────────────────────────
#  Services (servicios)
# ─────────────────────────────────────────────

ServiceStatus = Literal["pending", "paid", "overdue"]
Frequency = Literal["monthly", "yearly", "once"]

PENDING: ServiceStatus = "pending"
PAID: ServiceStatus = "paid"
OVERDUE: ServiceStatus = "overdue"

STATUSES: tuple[str, ...] = (PENDING, PAID, OVERDUE)
FREQUENCIES: tuple[str, ...] = ("monthly", "yearly", "once")


@dataclass
class Service:
    user_id: str
    name: str
    amount: float
    due_date: datetime                   # siempre aware, normalizada a DUE_HOUR_UTC
    frequency: Frequency
    status: ServiceStatus = PENDING
    category: str = "Otros"
    payment_link: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @property
    def is_monthly(self) -> bool:
        return self.frequency == "monthly"

    @classmethod
    def from_dict(cls, data: dict) -> "Service":
        return cls(
            id=data.get("id"),
            user_id=data["user_id"],
            name=data["name"],
            amount=float(data["amount"]),
            due_date=parse_datetime(data["due_date"]),
            frequency=data["frequency"],
            status=data.get("status") or PENDING,
            category=data.get("category") or "Otros",
            payment_link=data.get("payment_link"),
            created_at=parse_datetime(data.get("created_at")),
        )

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "name": self.name,
            "amount": self.amount,
            "due_date": self.due_date.isoformat(),
            "frequency": self.frequency,
            "status": self.status,
            "category": self.category,
            "payment_link": self.payment_link,
        }


# ─────────────────────────────────────────────
#  Transactions
# ─────────────────────────────────────────────

TransactionType = Literal["income", "expense"]


@dataclass
class Transaction:
    user_id: str
    amount: float                        # siempre positivo
    category: str
    description: str
    type: TransactionType                # "income" | "expense"
    date: date
    is_recurring: bool = False
    frequency: Literal["monthly", "once"] = "once"
    service_id: Optional[int] = None     # servicio que originó el gasto
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Transaction":
        return cls(
            id=data.get("id"),
            user_id=data["user_id"],
            amount=float(data["amount"]),
            category=data["category"],
            description=data.get("description", ""),
            type=data["type"],
            date=_parse_date(data["date"]),
            is_recurring=bool(data.get("is_recurring", False)),
            frequency=data.get("frequency") or "once",
            service_id=data.get("service_id"),
            created_at=parse_datetime(data.get("created_at")),
        )

    def to_dict(self) -> dict:
        d = {
            "user_id": self.user_id,
            "amount": self.amount,
            "category": self.category,
            "description": self.description,
            "type": self.type,
            "date": self.date.isoformat(),
            "is_recurring": self.is_recurring,
            "frequency": self.frequency,
        }
        if self.service_id is not None:
            d["service_id"] = self.service_id
        return d


# ─────────────────────────────────────────────
#  Payments (pagos)
# ─────────────────────────────────────────────

@dataclass
class Payment:
    user_id: str
    service_id: int
    amount: float
    paid_at: datetime
    id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Payment":
        return cls(
            id=data.get("id"),
            user_id=data["user_id"],
            service_id=data["service_id"],
            amount=float(data["amount"]),
            paid_at=parse_datetime(data["paid_at"]),
        )

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "service_id": self.service_id,
            "amount": self.amount,
            "paid_at": self.paid_at.isoformat(),
        }
