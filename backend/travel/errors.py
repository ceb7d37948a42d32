"""Error taxonomy shared by the planning core and the HTTP layer.

Every error carries a machine-usable ``code`` and the HTTP status it maps to.
The API registers one exception handler for ``TravelError`` so none of these
cross the boundary as a traceback.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """A single violating field, located by dotted path."""

    loc: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"loc": self.loc, "message": self.message}


class TravelError(Exception):
    """Base class for all domain errors."""

    code = "error"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, object]:
        return {"error": self.code, "message": self.message}


class ValidationError(TravelError):
    """Malformed plan or request body. Recoverable by correcting input."""

    code = "validation_error"
    status_code = 400

    def __init__(self, message: str, fields: list[FieldError] | None = None) -> None:
        super().__init__(message)
        self.fields = fields or []

    def to_dict(self) -> dict[str, object]:
        body = super().to_dict()
        body["fields"] = [f.to_dict() for f in self.fields]
        return body


class InvalidTransitionError(ValidationError):
    """Trip status change that is not the adjacent forward step."""

    code = "invalid_transition"


class AuthorizationError(TravelError):
    """Missing or foreign session."""

    code = "unauthorized"
    status_code = 401


class NotFoundError(TravelError):
    """Operation on a non-existent or non-owned record."""

    code = "not_found"
    status_code = 404


class StorageError(TravelError):
    """Persistence layer failure."""

    code = "storage_error"
    status_code = 500


class PlanGenerationError(TravelError):
    """The language model collaborator could not be reached."""

    code = "plan_generation_failed"
    status_code = 502
