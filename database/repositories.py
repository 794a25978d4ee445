"""
database/repositories.py
─────────────────────────
Capa de acceso a datos (Repository Pattern).
Cada clase encapsula las operaciones CRUD de una tabla de Supabase.

Uso:
    from database.repositories import ServiceRepo, TransactionRepo

    servicios = ServiceRepo.list_by_user(user_id, start, end)
    gastos    = TransactionRepo.list_by_service(user_id, servicio.id)
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from database.client import get_client
from database.encryption import decrypt_or_plain, encrypt
from database.models import OVERDUE, Payment, Service, Transaction


# ─────────────────────────────────────────────
#  ServiceRepo
# ─────────────────────────────────────────────

class ServiceRepo:
    TABLE = "services"

    @classmethod
    def get(cls, service_id: int) -> Optional[Service]:
        db = get_client()
        result = (
            db.table(cls.TABLE)
            .select("*")
            .eq("id", service_id)
            .maybe_single()
            .execute()
        )
        if result is None or result.data is None:
            return None
        return Service.from_dict(result.data)

    @classmethod
    def list_by_user(
        cls,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[Service]:
        """Servicios del usuario ordenados por vencimiento, opcionalmente en [start, end]."""
        db = get_client()
        query = db.table(cls.TABLE).select("*").eq("user_id", user_id)
        if start is not None and end is not None:
            query = query.gte("due_date", start.isoformat()).lte("due_date", end.isoformat())
        result = query.order("due_date").execute()
        return [Service.from_dict(row) for row in result.data]

    @classmethod
    def create(cls, service: Service) -> Service:
        db = get_client()
        result = db.table(cls.TABLE).insert(service.to_dict()).execute()
        return Service.from_dict(result.data[0])

    @classmethod
    def create_many(cls, services: list[Service]) -> list[Service]:
        """Inserta varios servicios en una sola llamada."""
        if not services:
            return []
        db = get_client()
        result = db.table(cls.TABLE).insert([s.to_dict() for s in services]).execute()
        return [Service.from_dict(row) for row in result.data]

    @classmethod
    def update(cls, service_id: int, fields: dict) -> Service:
        db = get_client()
        payload = {
            key: value.isoformat() if isinstance(value, datetime) else value
            for key, value in fields.items()
        }
        result = (
            db.table(cls.TABLE)
            .update(payload)
            .eq("id", service_id)
            .execute()
        )
        return Service.from_dict(result.data[0])

    @classmethod
    def mark_overdue(cls, service_ids: list[int]) -> int:
        """Pasa a vencido todos los ids en un único UPDATE. Retorna filas afectadas."""
        if not service_ids:
            return 0
        db = get_client()
        result = (
            db.table(cls.TABLE)
            .update({"status": OVERDUE})
            .in_("id", service_ids)
            .execute()
        )
        return len(result.data)

    @classmethod
    def delete(cls, service_id: int) -> bool:
        db = get_client()
        result = db.table(cls.TABLE).delete().eq("id", service_id).execute()
        return len(result.data) > 0


# ─────────────────────────────────────────────
#  TransactionRepo
# ─────────────────────────────────────────────

class TransactionRepo:
    TABLE = "transactions"

    @classmethod
    def create(cls, tx: Transaction) -> Transaction:
        db = get_client()
        payload = tx.to_dict()
        # Encriptamos la descripción antes de guardar
        payload["description"] = encrypt(payload["description"])
        result = db.table(cls.TABLE).insert(payload).execute()
        return Transaction.from_dict(_decrypt_tx(result.data[0]))

    @classmethod
    def list_by_service(cls, user_id: str, service_id: int) -> list[Transaction]:
        """Gastos vinculados explícitamente a un servicio."""
        db = get_client()
        result = (
            db.table(cls.TABLE)
            .select("*")
            .eq("user_id", user_id)
            .eq("service_id", service_id)
            .eq("type", "expense")
            .execute()
        )
        return [Transaction.from_dict(_decrypt_tx(row)) for row in result.data]

    @classmethod
    def find_by_description(
        cls,
        user_id: str,
        description: str,
        start: date,
        end: date,
    ) -> list[Transaction]:
        """
        Gastos sin servicio vinculado cuya descripción coincide exactamente,
        con fecha en [start, end]. Las descripciones se comparan desencriptadas.
        """
        db = get_client()
        result = (
            db.table(cls.TABLE)
            .select("*")
            .eq("user_id", user_id)
            .eq("type", "expense")
            .is_("service_id", "null")
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .execute()
        )
        matches = []
        for row in result.data:
            row = _decrypt_tx(row)
            if row["description"] == description:
                matches.append(Transaction.from_dict(row))
        return matches

    @classmethod
    def delete_many(cls, transaction_ids: list[int]) -> int:
        if not transaction_ids:
            return 0
        db = get_client()
        result = (
            db.table(cls.TABLE)
            .delete()
            .in_("id", transaction_ids)
            .execute()
        )
        return len(result.data)


# ─────────────────────────────────────────────
#  PaymentRepo
# ─────────────────────────────────────────────

class PaymentRepo:
    TABLE = "payments"

    @classmethod
    def create(cls, payment: Payment) -> Payment:
        db = get_client()
        result = db.table(cls.TABLE).insert(payment.to_dict()).execute()
        return Payment.from_dict(result.data[0])

    @classmethod
    def list_by_service(cls, service_id: int) -> list[Payment]:
        db = get_client()
        result = (
            db.table(cls.TABLE)
            .select("*")
            .eq("service_id", service_id)
            .order("paid_at", desc=True)
            .execute()
        )
        return [Payment.from_dict(row) for row in result.data]

    @classmethod
    def delete_by_service(cls, service_id: int) -> int:
        db = get_client()
        result = db.table(cls.TABLE).delete().eq("service_id", service_id).execute()
        return len(result.data)


# ─────────────────────────────────────────────
#  Helpers privados
# ─────────────────────────────────────────────

def _decrypt_tx(row: dict) -> dict:
    """Desencripta descripción de una fila de transacciones."""
    row["description"] = decrypt_or_plain(row.get("description"))
    return row
