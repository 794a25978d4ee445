"""
api/auth.py
────────────
Identidad del usuario a partir del token Bearer.
La emisión y validación del JWT es responsabilidad de Supabase Auth;
aquí solo se pregunta a quién pertenece el token.
"""

import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from database.client import get_client

logger = logging.getLogger(__name__)

bearer = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> str:
    """Dependencia FastAPI: retorna el id (UUID) del usuario autenticado."""
    if credentials is None:
        raise _unauthorized("No autenticado")

    try:
        response = get_client().auth.get_user(credentials.credentials)
    except Exception as e:
        logger.warning("Token rechazado por Supabase Auth: %s", e)
        raise _unauthorized("Token inválido o expirado") from e

    if response is None or response.user is None:
        raise _unauthorized("Token inválido o expirado")
    return str(response.user.id)
