"""
services/lifecycle_service.py
──────────────────────────────
Ciclo de vida de los servicios (facturas y suscripciones):
listado con vencimiento automático, alta con expansión mensual,
edición, cambio de estado con su gasto asociado y baja.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta, timezone
from typing import Any

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

from config import DEFAULT_CATEGORY, DUE_HOUR_UTC, RECURRENCE_MONTHS
from database.models import FREQUENCIES, OVERDUE, PAID, PENDING, STATUSES, Service
from database.repositories import PaymentRepo, ServiceRepo
from services.exceptions import InvalidServiceData, ServiceNotFound
from services.transaction_service import TransactionService

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    "name", "amount", "due_date", "frequency", "status", "payment_link", "category",
)


class ServiceLifecycle:
    """Orquesta los servicios de un usuario y sus efectos sobre las transacciones."""

    # ── Consultas ─────────────────────────────────────────

    @classmethod
    def get(cls, user_id: str, service_id: int) -> Service:
        """Retorna el servicio si existe y es del usuario; si no, ServiceNotFound."""
        service = ServiceRepo.get(service_id)
        if service is None or service.user_id != user_id:
            raise ServiceNotFound(service_id)
        return service

    @classmethod
    def list_services(
        cls,
        user_id: str,
        month: int | None = None,
        year: int | None = None,
        now: datetime | None = None,
    ) -> list[Service]:
        """
        Lista los servicios del usuario, ordenados por vencimiento.

        Si se indican mes y año se filtra a ese mes; uno sin el otro es un
        error. Antes de devolverlos, los servicios impagos con vencimiento anterior a `now` pasan a vencido.
        """
        start = end = None
        if (month is None) != (year is None):
            raise InvalidServiceData("mes y año deben indicarse juntos")
        if month is not None:
            start, end = cls._month_window(year, month)

        services = ServiceRepo.list_by_user(user_id, start, end)

        now = now or datetime.now(timezone.utc)
        expired = [
            s.id for s in services
            if s.status not in (PAID, OVERDUE) and s.due_date < now
        ]
        if expired:
            ServiceRepo.mark_overdue(expired)
            logger.info("%d servicio(s) del usuario %s pasaron a vencido", len(expired), user_id)
            services = ServiceRepo.list_by_user(user_id, start, end)
        return services

    # ── Alta ──────────────────────────────────────────────

    @classmethod
    def create(
        cls,
        user_id: str,
        name: str | None,
        amount: Any,
        due_date: Any,
        frequency: str | None,
        status: str | None = None,
        payment_link: str | None = None,
        category: str | None = None,
    ) -> Service:
        """
        Crea un servicio. Si es mensual genera además las ocurrencias de los
        próximos RECURRENCE_MONTHS meses, todas pendientes.

        Returns:
            El servicio creado por el usuario (la primera ocurrencia).
        """
        if not name or amount is None or not due_date or not frequency:
            raise InvalidServiceData(
                "nombre, monto, vencimiento y periodicidad son obligatorios"
            )

        service = Service(
            user_id=user_id,
            name=name,
            amount=cls.parse_amount(amount),
            due_date=cls._normalize_due_date(due_date),
            frequency=cls._check_frequency(frequency),
            status=cls._check_status(status or PENDING),
            category=category or DEFAULT_CATEGORY,
            payment_link=payment_link or None,
        )
        created = ServiceRepo.create(service)
        logger.info("Servicio %s creado para el usuario %s", created.id, user_id)
        if created.status == PAID:
            cls._sync_payment_transaction(created)

        if created.is_monthly:
            occurrences = cls._monthly_occurrences(created, RECURRENCE_MONTHS)
            ServiceRepo.create_many(occurrences)
            logger.info(
                "Servicio %s: %d ocurrencias mensuales generadas", created.id, len(occurrences)
            )
        return created

    # ── Edición ───────────────────────────────────────────

    @classmethod
    def update(cls, user_id: str, service_id: int, fields: dict[str, Any]) -> Service:
        """
        Actualiza solo los campos presentes en `fields`.
        Un cambio de estado aplica los mismos efectos que change_status().
        """
        service = cls.get(user_id, service_id)
        changes = cls._validate_changes(fields)
        if not changes:
            return service

        updated = ServiceRepo.update(service_id, changes)
        if "status" in changes:
            cls._sync_payment_transaction(updated)
        return updated

    @classmethod
    def change_status(cls, user_id: str, service_id: int, status: str | None) -> Service:
        """
        Cambia el estado del servicio.
        pagado → registra el gasto (una sola vez); impago → lo elimina.
        """
        if not status:
            raise InvalidServiceData("estado es obligatorio")
        status = cls._check_status(status)
        cls.get(user_id, service_id)

        updated = ServiceRepo.update(service_id, {"status": status})
        cls._sync_payment_transaction(updated)
        logger.info("Servicio %s → %s", service_id, status)
        return updated

    # ── Baja ──────────────────────────────────────────────

    @classmethod
    def delete(cls, user_id: str, service_id: int) -> None:
        """Elimina el servicio junto con sus pagos registrados."""
        cls.get(user_id, service_id)
        removed = PaymentRepo.delete_by_service(service_id)
        ServiceRepo.delete(service_id)
        logger.info("Servicio %s eliminado (%d pago(s))", service_id, removed)

    # ── Helpers ───────────────────────────────────────────

    @staticmethod
    def _sync_payment_transaction(service: Service) -> None:
        if service.status == PAID:
            TransactionService.record_service_payment(service)
        else:
            TransactionService.remove_service_payment(service)

    @classmethod
    def _validate_changes(cls, fields: dict[str, Any]) -> dict[str, Any]:
        changes = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
        if "name" in changes and not changes["name"]:
            raise InvalidServiceData("nombre no puede estar vacío")
        if "amount" in changes:
            changes["amount"] = cls.parse_amount(changes["amount"])
        if "due_date" in changes:
            changes["due_date"] = cls._normalize_due_date(changes["due_date"])
        if "frequency" in changes:
            changes["frequency"] = cls._check_frequency(changes["frequency"])
        if "status" in changes:
            changes["status"] = cls._check_status(changes["status"])
        if "category" in changes and not changes["category"]:
            changes["category"] = DEFAULT_CATEGORY
        return changes

    @staticmethod
    def _normalize_due_date(value: Any) -> datetime:
        """
        Fija el vencimiento a las DUE_HOUR_UTC (UTC) del día calendario recibido.
        "2026-03-10", "2026-03-10T00:00:00Z" y "2026-03-10T21:00:00-03:00"
        quedan todos en 2026-03-10.
        """
        if isinstance(value, datetime):
            day = value.date()
        elif isinstance(value, date):
            day = value
        elif isinstance(value, str):
            try:
                day = isoparse(value.strip()).date()
            except (ValueError, OverflowError):
                raise InvalidServiceData(f"vencimiento inválido: {value!r}") from None
        else:
            raise InvalidServiceData(f"vencimiento inválido: {value!r}")
        return datetime(day.year, day.month, day.day, DUE_HOUR_UTC, tzinfo=timezone.utc)

    @staticmethod
    def _month_window(year: int, month: int) -> tuple[datetime, datetime]:
        """Desde el día 1 00:00:00 hasta el último día 23:59:59 (UTC)."""
        if not 1 <= month <= 12 or not 1 <= year <= 9998:
            raise InvalidServiceData("mes o año fuera de rango")
        start = datetime(year, month, 1, tzinfo=timezone.utc)
        end = start + relativedelta(months=1) - timedelta(seconds=1)
        return start, end

    @staticmethod
    def _monthly_occurrences(base: Service, count: int) -> list[Service]:
        """
        Ocurrencias 1..count, cada una `i` meses después de la base.
        Se calcula siempre desde la base: 31/01 → 28/02 → 31/03.
        """
        return [
            replace(
                base,
                id=None,
                created_at=None,
                status=PENDING,
                due_date=base.due_date + relativedelta(months=i),
            )
            for i in range(1, count + 1)
        ]

    @staticmethod
    def parse_amount(value: Any) -> float:
        try:
            amount = float(value)
        except (TypeError, ValueError):
            raise InvalidServiceData(f"monto inválido: {value!r}") from None
        return abs(amount)

    @staticmethod
    def _check_frequency(value: str) -> str:
        if value not in FREQUENCIES:
            raise InvalidServiceData(f"periodicidad desconocida: {value!r}")
        return value

    @staticmethod
    def _check_status(value: str) -> str:
        if value not in STATUSES:
            raise InvalidServiceData(f"estado desconocido: {value!r}")
        return value
