"""
Payroll Core - Error Handling Tests
"""

import pytest

from payroll_core.utils.error_handling import (
    CalculationResult,
    ComputationPreconditionError,
    EmployeeNotFoundException,
    ErrorCode,
    InvalidDayOfMonthException,
    NotFoundException,
    PersistenceException,
    SettlementConflictException,
    ValidationException,
)


class TestExceptionHierarchy:
    """Codes, status codes and payloads."""

    def test_day_of_month_is_a_validation_error(self):
        error = InvalidDayOfMonthException(31, 30)

        assert isinstance(error, ComputationPreconditionError)
        assert isinstance(error, ValidationException)
        assert error.status_code == 422
        assert error.details == {"provided_day": 31, "days_in_month": 30}

    def test_employee_not_found(self):
        error = EmployeeNotFoundException("EMP-9")

        assert isinstance(error, NotFoundException)
        assert error.code == ErrorCode.EMPLOYEE_NOT_FOUND
        assert error.status_code == 404
        assert "EMP-9" in error.message

    def test_conflict_payload(self):
        payload = SettlementConflictException("EMP-1", "active").to_dict()

        assert payload["code"] == "SETTLEMENT_CONFLICT"
        assert payload["details"]["expected_status"] == "active"
        assert "timestamp" in payload

    def test_persistence_keeps_original_error(self):
        cause = RuntimeError("disk full")
        error = PersistenceException(original_error=cause)

        assert error.original_error is cause
        assert error.status_code == 500


class TestCalculationResult:
    """Success/failure envelope."""

    def test_ok_unwraps(self):
        assert CalculationResult.ok(42).unwrap() == 42

    def test_fail_raises_on_unwrap(self):
        result = CalculationResult.fail(ValidationException("bad", field="hire_date"))

        assert not result.success
        assert result.data is None
        with pytest.raises(ValidationException):
            result.unwrap()
