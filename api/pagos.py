"""
api/pagos.py
─────────────
Endpoints de pagos (montados en /api/pagos).
"""

from fastapi import APIRouter, Depends, Query, status

from api.auth import get_current_user_id
from api.schemas import PagoIn, PagoOut
from services.payment_service import PaymentService

router = APIRouter()


@router.post("", response_model=PagoOut, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=PagoOut, status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_pago(
    body: PagoIn,
    user_id: str = Depends(get_current_user_id),
) -> PagoOut:
    payment = PaymentService.register(
        user_id,
        body.servicio_id,
        amount=body.monto_pagado,
        paid_at=body.fecha_pago,
    )
    return PagoOut.from_payment(payment)


@router.get("", response_model=list[PagoOut])
@router.get("/", response_model=list[PagoOut], include_in_schema=False)
def list_pagos(
    servicio_id: int = Query(..., alias="servicioId"),
    user_id: str = Depends(get_current_user_id),
) -> list[PagoOut]:
    payments = PaymentService.list_for_service(user_id, servicio_id)
    return [PagoOut.from_payment(p) for p in payments]
