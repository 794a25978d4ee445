"""
api/app.py
───────────
Construye la aplicación FastAPI: routers, CORS y traducción de
errores de negocio a respuestas HTTP.

Todas las respuestas de error tienen la forma {"error": "<mensaje>"}.
Los detalles de un error inesperado solo van al log.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api import pagos, servicios
from config import CORS_ORIGINS, ENV
from services.exceptions import InvalidServiceData, ServiceNotFound

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


async def invalid_data_handler(request: Request, exc: InvalidServiceData) -> JSONResponse:
    return _error(status.HTTP_400_BAD_REQUEST, str(exc))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    where = ".".join(str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path"))
    message = f"{where}: {first.get('msg', 'dato inválido')}" if where else "Solicitud inválida"
    return _error(status.HTTP_400_BAD_REQUEST, message)


async def not_found_handler(request: Request, exc: ServiceNotFound) -> JSONResponse:
    return _error(status.HTTP_404_NOT_FOUND, str(exc))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Error no manejado en %s %s", request.method, request.url.path, exc_info=exc)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error")


async def catch_unhandled_errors(request: Request, call_next):
    """
    Convierte cualquier excepción no prevista en un 500 JSON. Corre dentro
    de CORSMiddleware para que la respuesta lleve las cabeceras CORS.
    """
    try:
        return await call_next(request)
    except Exception as exc:
        return await unhandled_error_handler(request, exc)


def create_app() -> FastAPI:
    """
    Crea y configura la aplicación.

    Returns:
        FastAPI lista para servir con uvicorn.
    """
    app = FastAPI(
        title="Servicios API",
        version="1.0.0",
        docs_url="/docs" if ENV != "production" else None,
    )

    app.middleware("http")(catch_unhandled_errors)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(servicios.router, prefix="/api/servicios", tags=["servicios"])
    app.include_router(pagos.router, prefix="/api/pagos", tags=["pagos"])

    app.add_exception_handler(InvalidServiceData, invalid_data_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(ServiceNotFound, not_found_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    @app.get("/health", include_in_schema=False)
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
