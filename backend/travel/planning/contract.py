"""Itinerary schema contract - validation at every boundary crossing.

Used for model tool-call arguments, REST request bodies and records read back
from storage. Validation never raises: callers get either the parsed model or
a ``PlanValidationError`` enumerating every violating field.
"""

from dataclasses import dataclass
from typing import Any, TypeVar

import pydantic
from pydantic import BaseModel

from backend.travel.errors import FieldError, ValidationError
from backend.travel.models.trip import TripActivity, TripDay, TripPlan

M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class PlanValidationError:
    """Structured validation failure."""

    fields: list[FieldError]

    @property
    def locations(self) -> list[str]:
        return [f.loc for f in self.fields]

    def summary(self) -> str:
        return "; ".join(f"{f.loc}: {f.message}" for f in self.fields)

    def to_exception(self, message: str = "Invalid itinerary") -> ValidationError:
        return ValidationError(message, fields=self.fields)


def field_errors(exc: pydantic.ValidationError) -> list[FieldError]:
    """Flatten pydantic errors into dotted-location field errors."""
    errors = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"]) or "__root__"
        errors.append(FieldError(loc=loc, message=err["msg"]))
    return errors


def _validate(model: type[M], candidate: Any) -> M | PlanValidationError:
    if isinstance(candidate, model):
        candidate = candidate.model_dump()
    try:
        return model.model_validate(candidate)
    except pydantic.ValidationError as e:
        return PlanValidationError(fields=field_errors(e))


def validate_plan(candidate: Any) -> TripPlan | PlanValidationError:
    """Validate a candidate trip plan (e.g. tool-call arguments)."""
    if not isinstance(candidate, (dict, TripPlan)):
        return PlanValidationError(
            fields=[FieldError(loc="__root__", message="plan must be a JSON object")]
        )
    return _validate(TripPlan, candidate)


def validate_activity(candidate: Any) -> TripActivity | PlanValidationError:
    """Validate a single activity (REST body or catalog seed)."""
    return _validate(TripActivity, candidate)


def validate_day(candidate: Any) -> TripDay | PlanValidationError:
    """Validate a stored day record."""
    return _validate(TripDay, candidate)


def require_valid(result: M | PlanValidationError, message: str = "Invalid itinerary") -> M:
    """Unwrap a validation result, raising ``ValidationError`` on failure."""
    if isinstance(result, PlanValidationError):
        raise result.to_exception(message)
    return result
