"""Tests for tagged results and storage error classification."""

from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError, OperationalError, ProgrammingError

from coachdesk.api.errors import unwrap
from coachdesk.core.result import FailureKind, Result, classify_storage_error, storage_failure


class _PrivilegeError(Exception):
    pgcode = "42501"


# ======================================================================
# Result
# ======================================================================


class TestResult:
    def test_success(self):
        result = Result.success(3)
        assert result.ok
        assert result.value == 3
        assert result.value_or(0) == 3

    def test_failure(self):
        result = Result.not_found("gone")
        assert not result.ok
        assert result.failure is FailureKind.NOT_FOUND
        assert result.detail == "gone"
        assert result.value_or(0) == 0

    def test_only_transient_is_retryable(self):
        assert Result.fail(FailureKind.TRANSIENT).is_transient
        assert not Result.denied("no").is_transient


# ======================================================================
# Classification
# ======================================================================


class TestClassify:
    def test_integrity_error_is_invalid(self):
        exc = IntegrityError("INSERT", {}, Exception("duplicate key"))
        assert classify_storage_error(exc) is FailureKind.INVALID

    def test_privilege_error_is_denied(self):
        exc = ProgrammingError("SELECT", {}, _PrivilegeError("permission denied for table profiles"))
        assert classify_storage_error(exc) is FailureKind.PERMISSION_DENIED

    def test_connection_error_is_transient(self):
        exc = OperationalError("SELECT", {}, Exception("server closed the connection"))
        assert classify_storage_error(exc) is FailureKind.TRANSIENT

    def test_storage_failure_rolls_back(self):
        session = MagicMock()
        result = storage_failure(session, "save thing", OperationalError("UPDATE", {}, Exception("timeout")))
        session.rollback.assert_called_once()
        assert result.failure is FailureKind.TRANSIENT
        assert result.detail == "Could not save thing, please retry"


# ======================================================================
# HTTP mapping
# ======================================================================


class TestUnwrap:
    def test_returns_value(self):
        assert unwrap(Result.success("x")) == "x"

    @pytest.mark.parametrize("result,status_code", [
        (Result.not_found("x"), 404),
        (Result.denied("x"), 403),
        (Result.invalid("x"), 422),
        (Result.fail(FailureKind.TRANSIENT, "x"), 503),
    ])
    def test_failure_status_codes(self, result, status_code):
        with pytest.raises(HTTPException) as exc:
            unwrap(result)
        assert exc.value.status_code == status_code

    def test_transient_carries_retry_after(self):
        with pytest.raises(HTTPException) as exc:
            unwrap(Result.fail(FailureKind.TRANSIENT, "x"))
        assert "Retry-After" in exc.value.headers
