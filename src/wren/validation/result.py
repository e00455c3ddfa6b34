"""Validation results — immutable findings for a rejected request."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ValidationFinding:
    """One reason a request does not conform to its operation.

    ``location`` is one of ``path``, ``query``, ``headers``, ``cookies``
    or ``body``; ``path`` names the parameter or body property::

        ValidationFinding(
            error_code="minLength.openapi.validation",
            location="path",
            message="Must be at least 3 characters",
            path="something",
        )
    """

    error_code: str
    location: str
    message: str
    path: str

    def to_dict(self) -> dict[str, str]:
        """JSON shape used in error responses."""
        return {
            "errorCode": self.error_code,
            "location": self.location,
            "message": self.message,
            "path": self.path,
        }


@dataclass(frozen=True, slots=True)
class RequestValidationResult:
    """Findings for one request plus the status to answer with."""

    errors: tuple[ValidationFinding, ...]
    status: int = 400
