"""Domain error type shared by entities, value objects, stores and services.

Failure modes are told apart by ``kind`` and ``code``, not by subclassing:
the API layer maps ``kind`` to an HTTP status and echoes ``code`` to clients.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNAUTHORIZED = "unauthorized"
    INVARIANT = "invariant"


class DomainError(ValueError):
    def __init__(
        self,
        kind: ErrorKind,
        code: str,
        message: str,
        errors: dict[str, list[str]] | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.code = code
        self.message = message
        self.errors = errors or {}

    def __repr__(self) -> str:
        return f"DomainError({self.kind.value}, {self.code!r}, {self.message!r})"


def validation_error(code: str, message: str, field: str | None = None) -> DomainError:
    errors = {field: [message]} if field else None
    return DomainError(ErrorKind.VALIDATION, code, message, errors)


def invariant_error(code: str, message: str) -> DomainError:
    return DomainError(ErrorKind.INVARIANT, code, message)


def not_found(resource: str, resource_id) -> DomainError:
    return DomainError(
        ErrorKind.NOT_FOUND,
        "NotFound",
        f"{resource} '{resource_id}' was not found",
    )


def conflict(code: str, message: str) -> DomainError:
    return DomainError(ErrorKind.CONFLICT, code, message)
