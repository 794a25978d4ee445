"""
services/exceptions.py
───────────────────────
Errores de negocio. La API los traduce a códigos HTTP
(InvalidServiceData → 400, ServiceNotFound → 404).
"""


class InvalidServiceData(ValueError):
    """Datos faltantes o con formato inválido."""


class ServiceNotFound(LookupError):
    """El servicio no existe o pertenece a otro usuario."""

    def __init__(self, service_id=None):
        self.service_id = service_id
        super().__init__("Servicio no encontrado")
