"""
config.py
─────────
Carga y valida todas las variables de entorno del proyecto.
Centraliza la configuración para que ningún otro módulo
acceda directamente a os.environ.
"""

import os
from dotenv import load_dotenv

# Carga .env si existe (útil en desarrollo)
load_dotenv()


def _require(key: str) -> str:
    """Retorna el valor de una variable de entorno obligatoria."""
    value = os.getenv(key)
    if not value:
        raise EnvironmentError(
            f"Variable de entorno requerida no encontrada: '{key}'. "
            f"Revisa tu archivo .env"
        )
    return value


# ── Supabase ──────────────────────────────────────────────
SUPABASE_URL: str = _require("SUPABASE_URL")
SUPABASE_SERVICE_KEY: str = _require("SUPABASE_SERVICE_KEY")

# ── Encriptación ──────────────────────────────────────────
ENCRYPTION_KEY: str = _require("ENCRYPTION_KEY")

# ── API ───────────────────────────────────────────────────
API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "4000"))
CORS_ORIGINS: list[str] = [
    o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",") if o.strip()
]

# ── Servicios ─────────────────────────────────────────────
# Hora UTC a la que se fija cada vencimiento (mediodía: ningún huso lo cambia de día)
DUE_HOUR_UTC: int = int(os.getenv("DUE_HOUR_UTC", "12"))
DEFAULT_CATEGORY: str = os.getenv("DEFAULT_CATEGORY", "Otros")
# Ocurrencias extra generadas al crear un servicio mensual
RECURRENCE_MONTHS: int = int(os.getenv("RECURRENCE_MONTHS", "11"))

# ── General ───────────────────────────────────────────────
ENV: str = os.getenv("ENV", "development")
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
