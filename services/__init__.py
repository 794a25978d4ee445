"""
services/__init__.py
─────────────────────
Expone los servicios de negocio del proyecto.
"""

from .exceptions import InvalidServiceData, ServiceNotFound
from .lifecycle_service import ServiceLifecycle
from .payment_service import PaymentService
from .transaction_service import TransactionService

__all__ = [
    "ServiceLifecycle",
    "TransactionService",
    "PaymentService",
    "InvalidServiceData",
    "ServiceNotFound",
]
