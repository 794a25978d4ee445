"""
main.py
────────
Punto de entrada de la API de servicios.
Inicializa el logging y levanta uvicorn.

Uso:
    python main.py
"""

import logging
import logging.handlers
import sys

import uvicorn

from config import API_HOST, API_PORT, ENV, LOG_LEVEL


def setup_logging() -> None:
    """Configura el sistema de logging con rotación automática de archivos."""
    level = getattr(logging, LOG_LEVEL.upper(), logging.INFO)
    fmt = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    formatter = logging.Formatter(fmt)

    # Handler a archivo con rotación: máx 5 MB por archivo, mantiene 3 backups
    file_handler = logging.handlers.RotatingFileHandler(
        "servicios.log",
        maxBytes=5 * 1024 * 1024,  # 5 MB
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)

    # Handler a consola
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    try:
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")
    except AttributeError:
        pass

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(file_handler)
    root.addHandler(console_handler)

    # Reducir verbosidad de librerías externas
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("hpack").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def main() -> None:
    setup_logging()
    logger = logging.getLogger(__name__)

    logger.info("🚀 Iniciando API de servicios (ENV=%s) en %s:%s", ENV, API_HOST, API_PORT)

    from api.app import app

    try:
        # log_config=None: uvicorn usa los handlers configurados arriba
        uvicorn.run(app, host=API_HOST, port=API_PORT, log_config=None)
    except Exception as e:
        logger.critical("💥 API detenida por excepción inesperada: %s", e, exc_info=True)
        raise


if __name__ == "__main__":
    main()
