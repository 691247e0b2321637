"""
Tagged operation results.

Service operations never raise storage errors to their callers.  They
return a :class:`Result` that is either a success carrying a value or a
failure tagged with a :class:`FailureKind`, so callers can tell a
missing record from a denied one from a transient outage (and offer a
retry only for the latter).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

from loguru import logger
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlmodel import Session

T = TypeVar("T")

# Postgres SQLSTATE for insufficient_privilege (raised by row-level security)
_PG_INSUFFICIENT_PRIVILEGE = "42501"


class FailureKind(str, Enum):
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    TRANSIENT = "transient"
    INVALID = "invalid"


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a service operation."""

    value: Optional[T] = None
    failure: Optional[FailureKind] = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def is_transient(self) -> bool:
        return self.failure is FailureKind.TRANSIENT

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, failure: FailureKind, detail: Optional[str] = None) -> "Result[T]":
        return cls(failure=failure, detail=detail)

    @classmethod
    def not_found(cls, detail: str) -> "Result[T]":
        return cls.fail(FailureKind.NOT_FOUND, detail)

    @classmethod
    def denied(cls, detail: str) -> "Result[T]":
        return cls.fail(FailureKind.PERMISSION_DENIED, detail)

    @classmethod
    def invalid(cls, detail: str) -> "Result[T]":
        return cls.fail(FailureKind.INVALID, detail)

    def value_or(self, default: T) -> T:
        """Return the value on success, *default* otherwise."""
        return self.value if self.ok else default


def classify_storage_error(exc: Exception) -> FailureKind:
    """Map a storage exception onto a :class:`FailureKind`.

    Integrity violations are the caller's fault (``INVALID``), a
    privilege error from the database is ``PERMISSION_DENIED``, and
    everything else (connection drops, timeouts, unknown driver errors)
    is ``TRANSIENT``.
    """
    if isinstance(exc, IntegrityError):
        return FailureKind.INVALID
    if isinstance(exc, DBAPIError) and getattr(exc.orig, "pgcode", None) == _PG_INSUFFICIENT_PRIVILEGE:
        return FailureKind.PERMISSION_DENIED
    return FailureKind.TRANSIENT


def storage_failure(session: Session, action: str, exc: Exception) -> Result:
    """Roll back *session*, log *exc* and turn it into a failed :class:`Result`."""
    session.rollback()
    kind = classify_storage_error(exc)
    logger.error(f"Error trying to {action} ({kind.value}): {exc}")
    message = f"Could not {action}"
    if kind is FailureKind.TRANSIENT:
        message += ", please retry"
    return Result.fail(kind, message)
