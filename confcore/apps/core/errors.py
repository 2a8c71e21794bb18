# confcore/apps/core/errors.py
"""
Errores del flujo de ponencias/evaluaciones.

Los servicios lanzan estas excepciones *antes* de escribir nada en la BD;
el decorador ``api_view`` (core/http.py) es el único que las traduce a JSON.
Cada clase declara:
  - kind: categoría estable que ve el cliente ("validation_error", ...)
  - status_code: código HTTP asociado
"""
from __future__ import annotations

from typing import Dict, List, Optional


class ReviewError(Exception):
    kind = "error"
    status_code = 400
    default_message = "Error en la operación."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def as_dict(self) -> Dict[str, object]:
        return {"error": self.kind, "message": self.message}


class BadRequest(ReviewError):
    kind = "bad_request"
    status_code = 400
    default_message = "Cuerpo de la petición inválido."


class ValidationFailed(ReviewError):
    kind = "validation_error"
    status_code = 422
    default_message = "Datos inválidos."

    def __init__(self, message: Optional[str] = None, errors: Optional[Dict[str, List[str]]] = None):
        super().__init__(message)
        self.errors = errors or {}

    @classmethod
    def from_form(cls, form) -> "ValidationFailed":
        errors = {field: [str(e) for e in errs] for field, errs in form.errors.items()}
        return cls(errors=errors)

    def as_dict(self) -> Dict[str, object]:
        data = super().as_dict()
        if self.errors:
            data["errors"] = self.errors
        return data


class NotEligible(ValidationFailed):
    kind = "not_eligible"
    default_message = "Este usuario no es miembro del comité científico del evento."


class Unauthorized(ReviewError):
    kind = "unauthorized"
    status_code = 403
    default_message = "No autorizado."


class NotFound(ReviewError):
    kind = "not_found"
    status_code = 404
    default_message = "Recurso no encontrado."


class Conflict(ReviewError):
    kind = "conflict"
    status_code = 409
    default_message = "Conflicto con el estado actual."


class AlreadyEvaluated(Conflict):
    default_message = "Ya evaluaste esta ponencia."


class AlreadyAssigned(Conflict):
    default_message = "Este evaluador ya está asignado o ya evaluó esta ponencia."


class SubmissionLocked(Conflict):
    default_message = "No se puede modificar una ponencia que ya está en evaluación."


class SubmissionWindowClosed(SubmissionLocked):
    # Es un SubmissionLocked (la edición también se bloquea por fecha),
    # pero el cliente lo ve con su propia categoría.
    kind = "submission_window_closed"
    status_code = 422
    default_message = "La fecha límite de envío está vencida."
