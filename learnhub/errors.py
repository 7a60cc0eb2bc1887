# learnhub/errors.py
from typing import Optional


class LearnHubError(Exception):
    """Base de todos los errores de dominio de learnhub."""


class ValidationError(LearnHubError):
    """
    Query mal formada (categoría desconocida, page/pageSize fuera de rango).
    Se resuelve en el borde HTTP como 400, nunca llega al store.
    """


class NotFoundError(LearnHubError):
    """El id de módulo no existe. Se expone como 404 y no se reintenta."""

    def __init__(self, module_id: str, message: Optional[str] = None):
        self.module_id = module_id
        super().__init__(message or f"Módulo {module_id} no encontrado")


class TransportError(LearnHubError):
    """
    Falla de red o de (de)serialización del lado cliente.
    Dispara rollback en el cache y nunca se reintenta automáticamente.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
