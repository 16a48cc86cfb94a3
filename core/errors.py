# core/errors.py
from typing import Any, Optional

# ============================================================
# ❗ Jerarquía de errores del servicio
# ============================================================
class TracksServiceError(Exception):
    """Error base: conoce su código HTTP y el cuerpo que se expone al cliente."""

    status_code: int = 500

    def body(self) -> Optional[Any]:
        return None


class ValidationError(TracksServiceError):
    """Campo del cuerpo con formato inválido."""

    status_code = 400

    def __init__(self, ref: str, message: str):
        super().__init__(f"{ref}: {message}")
        self.ref = ref
        self.message = message

    def body(self):
        return {"ref": self.ref, "error": self.message}


class PathValidationError(TracksServiceError):
    """Parámetro de ruta con formato inválido."""

    status_code = 400

    def __init__(self, ref: str, message: str):
        super().__init__(f"{ref}: {message}")
        self.ref = ref
        self.message = message

    def body(self):
        return {"pathRef": self.ref, "error": self.message}


class InvalidBodyError(TracksServiceError):
    status_code = 400

    def body(self):
        return {"message": "invalid request body"}


class MissingReferenceError(TracksServiceError):
    """Una entidad referenciada (p. ej. un artista) no existe."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def body(self):
        return {"message": self.message}


class NotFoundError(TracksServiceError):
    status_code = 404


class DependencyResolutionError(TracksServiceError):
    status_code = 500


class StorageError(TracksServiceError):
    status_code = 500


# ------------------------------------------------------------
# 🔹 Errores fuera del ciclo petición/respuesta
# ------------------------------------------------------------
class TransformationError(Exception):
    """El router no puede mapear la petición sobre su plantilla de ruta."""


class ConfigurationError(Exception):
    """Configuración de arranque inválida o incompleta."""
