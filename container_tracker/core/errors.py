"""Domain error taxonomy translated to HTTP responses at the request boundary."""

from __future__ import annotations

from typing import Any


class TrackerError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500
    detail: str = "Something went wrong"

    def __init__(self, detail: str | None = None) -> None:
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)

    def to_payload(self) -> dict[str, Any]:
        return {"detail": self.detail}


class ValidationError(TrackerError):
    """Malformed, missing or out-of-enum input."""

    status_code = 400
    detail = "Validation failed"

    def __init__(self, errors: list[dict[str, str]] | str) -> None:
        if isinstance(errors, str):
            errors = [{"field": "", "message": errors}]
        self.errors: list[dict[str, str]] = errors
        super().__init__("; ".join(error["message"] for error in errors))

    def to_payload(self) -> dict[str, Any]:
        return {"detail": self.detail, "errors": self.errors}


class ConflictError(TrackerError):
    """Uniqueness violation."""

    status_code = 400
    detail = "Conflict"


class ConcurrentUpdateError(ConflictError):
    """Row changed underneath an update; the whole unit was rolled back."""

    status_code = 409
    detail = "Container was modified concurrently, please retry"


class NotFoundError(TrackerError):
    status_code = 404
    detail = "Not found"


class AuthRequiredError(TrackerError):
    status_code = 401
    detail = "Authentication required"


class PermissionDeniedError(TrackerError):
    status_code = 403
    detail = "Not enough permissions"


class StorageError(TrackerError):
    """Underlying store failure. Never carries internals to the caller."""

    status_code = 500
    detail = "Something went wrong"

    def to_payload(self) -> dict[str, Any]:
        return {"detail": StorageError.detail}
