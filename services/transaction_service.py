"""
services/transaction_service.py
────────────────────────────────
Gastos generados por el pago de servicios.
Al marcar un servicio como pagado se registra un gasto vinculado;
al volver a un estado impago ese gasto se elimina.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone

from dateutil.relativedelta import relativedelta

from database.models import Service, Transaction
from database.repositories import TransactionRepo

logger = logging.getLogger(__name__)


class TransactionService:
    """Mantiene a lo sumo un gasto por servicio pagado."""

    DESCRIPTION_TEMPLATE = "Pago de servicio: {name}"

    # ── Búsqueda ──────────────────────────────────────────

    @classmethod
    def payment_description(cls, service: Service) -> str:
        return cls.DESCRIPTION_TEMPLATE.format(name=service.name)

    @classmethod
    def find_service_payments(cls, service: Service) -> list[Transaction]:
        """
        Gastos que corresponden al pago de `service`.

        Primero los vinculados por service_id; si no hay, los gastos sin
        vínculo con la descripción "Pago de servicio: <nombre>" fechados
        entre el inicio del mes de vencimiento y el fin del mes siguiente
        (registros anteriores al vínculo; se fechaban el día del pago).
        """
        linked = TransactionRepo.list_by_service(service.user_id, service.id)
        if linked:
            return linked
        start, end = cls._payment_window(service.due_date.date())
        return TransactionRepo.find_by_description(
            service.user_id, cls.payment_description(service), start, end
        )

    # ── Alta / baja ───────────────────────────────────────

    @classmethod
    def record_service_payment(
        cls, service: Service, on: date | None = None
    ) -> tuple[Transaction, bool]:
        """
        Crea el gasto del servicio si todavía no existe.

        Returns:
            (transaction, created). created=False si ya había uno.
        """
        existing = cls.find_service_payments(service)
        if existing:
            logger.info(
                "Servicio %s ya tiene gasto registrado (tx=%s), no se duplica",
                service.id, existing[0].id,
            )
            return existing[0], False

        tx = Transaction(
            user_id=service.user_id,
            amount=abs(service.amount),
            category=service.category,
            description=cls.payment_description(service),
            type="expense",
            date=on or datetime.now(timezone.utc).date(),
            is_recurring=False,
            frequency="monthly" if service.is_monthly else "once",
            service_id=service.id,
        )
        saved = TransactionRepo.create(tx)
        logger.info("Gasto %s registrado por pago del servicio %s", saved.id, service.id)
        return saved, True

    @classmethod
    def remove_service_payment(cls, service: Service) -> int:
        """Elimina los gastos asociados al servicio. Retorna cuántos se borraron."""
        ids = [tx.id for tx in cls.find_service_payments(service)]
        if not ids:
            return 0
        deleted = TransactionRepo.delete_many(ids)
        logger.info("Servicio %s: %d gasto(s) eliminado(s)", service.id, deleted)
        return deleted

    # ── Helpers ───────────────────────────────────────────

    @classmethod
    def _payment_window(cls, due: date) -> tuple[date, date]:
        """Mes de vencimiento más el siguiente: cubre pagos atrasados."""
        start, _ = cls._month_range(due)
        _, end = cls._month_range(start + relativedelta(months=1))
        return start, end

    @staticmethod
    def _month_range(day: date) -> tuple[date, date]:
        """Primer y último día del mes de `day`."""
        start = day.replace(day=1)
        return start, start + relativedelta(months=1, days=-1)
