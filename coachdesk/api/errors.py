"""
HTTP mapping of service results.
"""

from typing import TypeVar

from fastapi import HTTPException, status

from coachdesk.core.result import FailureKind, Result

T = TypeVar("T")

RETRY_AFTER_SECONDS = 5

_STATUS_CODES = {
    FailureKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    FailureKind.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    FailureKind.INVALID: status.HTTP_422_UNPROCESSABLE_ENTITY,
    FailureKind.TRANSIENT: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def unwrap(result: Result[T]) -> T:
    """Return the value of a successful result or raise the matching ``HTTPException``."""
    if result.ok:
        return result.value
    headers = {"Retry-After": str(RETRY_AFTER_SECONDS)} if result.is_transient else None
    raise HTTPException(status_code=_STATUS_CODES[result.failure], detail=result.detail, headers=headers)
