"""
services/payment_service.py
────────────────────────────
Registro de pagos realizados sobre un servicio.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from database.models import Payment, parse_datetime
from database.repositories import PaymentRepo
from services.exceptions import InvalidServiceData
from services.lifecycle_service import ServiceLifecycle

logger = logging.getLogger(__name__)


class PaymentService:

    @classmethod
    def register(
        cls,
        user_id: str,
        service_id: int,
        amount: Any = None,
        paid_at: Any = None,
    ) -> Payment:
        """
        Registra un pago. Sin monto se usa el del servicio; sin fecha, ahora.
        No cambia el estado del servicio.
        """
        service = ServiceLifecycle.get(user_id, service_id)

        if amount is None:
            value = service.amount
        else:
            value = ServiceLifecycle.parse_amount(amount)

        try:
            when = parse_datetime(paid_at) or datetime.now(timezone.utc)
        except (ValueError, OverflowError):
            raise InvalidServiceData(f"fechaPago inválida: {paid_at!r}") from None

        payment = PaymentRepo.create(
            Payment(user_id=user_id, service_id=service.id, amount=value, paid_at=when)
        )
        logger.info("Pago %s registrado para el servicio %s", payment.id, service.id)
        return payment

    @classmethod
    def list_for_service(cls, user_id: str, service_id: int) -> list[Payment]:
        ServiceLifecycle.get(user_id, service_id)
        return PaymentRepo.list_by_service(service_id)
