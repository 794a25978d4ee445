"""
api/servicios.py
─────────────────
Endpoints REST de servicios (montados en /api/servicios).

  GET    "" o /         lista (filtro opcional ?mes=&anio= / ?año=)
  POST   "" o /         alta (mensual → 12 ocurrencias)
  PUT    /{id}          edición parcial
  PATCH  /{id}          edición parcial
  PATCH  /{id}/estado   cambio de estado con gasto asociado
  DELETE /{id}          baja con sus pagos
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from api.auth import get_current_user_id
from api.schemas import EstadoIn, ServicioIn, ServicioOut, estado_to_status
from services.lifecycle_service import ServiceLifecycle

router = APIRouter()


@router.get("", response_model=list[ServicioOut])
@router.get("/", response_model=list[ServicioOut], include_in_schema=False)
def list_servicios(
    mes: Optional[int] = Query(None),
    anio: Optional[int] = Query(None),
    ano: Optional[int] = Query(None, alias="año"),
    user_id: str = Depends(get_current_user_id),
) -> list[ServicioOut]:
    year = anio if anio is not None else ano
    services = ServiceLifecycle.list_services(user_id, month=mes, year=year)
    return [ServicioOut.from_service(s) for s in services]


@router.post("", response_model=ServicioOut, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=ServicioOut, status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_servicio(
    body: ServicioIn,
    user_id: str = Depends(get_current_user_id),
) -> ServicioOut:
    fields = body.to_fields()
    service = ServiceLifecycle.create(
        user_id,
        name=fields.get("name"),
        amount=fields.get("amount"),
        due_date=fields.get("due_date"),
        frequency=fields.get("frequency"),
        status=fields.get("status"),
        payment_link=fields.get("payment_link"),
        category=fields.get("category"),
    )
    return ServicioOut.from_service(service)


@router.put("/{service_id}", response_model=ServicioOut)
@router.patch("/{service_id}", response_model=ServicioOut)
def update_servicio(
    service_id: int,
    body: ServicioIn,
    user_id: str = Depends(get_current_user_id),
) -> ServicioOut:
    service = ServiceLifecycle.update(user_id, service_id, body.to_fields())
    return ServicioOut.from_service(service)


@router.patch("/{service_id}/estado", response_model=ServicioOut)
def change_estado(
    service_id: int,
    body: EstadoIn,
    user_id: str = Depends(get_current_user_id),
) -> ServicioOut:
    service = ServiceLifecycle.change_status(
        user_id, service_id, estado_to_status(body.estado)
    )
    return ServicioOut.from_service(service)


@router.delete("/{service_id}")
def delete_servicio(
    service_id: int,
    user_id: str = Depends(get_current_user_id),
) -> dict:
    ServiceLifecycle.delete(user_id, service_id)
    return {"ok": True}
