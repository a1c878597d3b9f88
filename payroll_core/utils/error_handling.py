"""
Error Handling Module for Payroll Core

This module provides the centralized error taxonomy:
- Custom exception hierarchy rooted at ``AppException``
- Standardized error codes and dictionary payloads
- ``CalculationResult``: success/failure envelope returned by calculators
  for business-input errors

Only programmer-error preconditions (``ComputationPreconditionError``) are
raised directly out of the calculators. Store errors are raised by the
settlement store and propagated unchanged by the core.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from http import HTTPStatus
from typing import Any, Dict, Generic, Optional, TypeVar, Union
from uuid import UUID
import logging

logger = logging.getLogger("payroll_core.errors")

T = TypeVar("T")


class ErrorCode(str, Enum):
    """Standardized error codes"""

    # Validation Errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    MISSING_FIELD = "MISSING_FIELD"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    INVALID_DAY_OF_MONTH = "INVALID_DAY_OF_MONTH"
    MISSING_HIRE_DATE = "MISSING_HIRE_DATE"

    # Programmer errors
    COMPUTATION_PRECONDITION = "COMPUTATION_PRECONDITION"

    # Resource Errors
    NOT_FOUND = "NOT_FOUND"
    EMPLOYEE_NOT_FOUND = "EMPLOYEE_NOT_FOUND"
    RESOURCE_CONFLICT = "RESOURCE_CONFLICT"
    SETTLEMENT_CONFLICT = "SETTLEMENT_CONFLICT"

    # Persistence Errors
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"


class AppException(Exception):
    """Base exception for all payroll core exceptions"""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        field: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.code = code
        self.message = message
        self.status_code = int(status_code)
        self.details = details or {}
        self.field = field
        self.original_error = original_error
        self.timestamp = datetime.now(timezone.utc)
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a plain dictionary"""
        result = {
            "code": self.code.value,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.field:
            result["field"] = self.field
        if self.details:
            result["details"] = self.details
        return result


# ============================================================================
# Validation Exceptions
# ============================================================================

class ValidationException(AppException):
    """Base validation exception"""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
            details=details,
            field=field,
        )


class MissingHireDateException(ValidationException):
    """Employee has no hire date"""

    def __init__(self, employee_id: Optional[str] = None):
        super().__init__(
            message="Missing hire date for the employee.",
            field="hire_date",
            code=ErrorCode.MISSING_HIRE_DATE,
            details={"employee_id": employee_id} if employee_id else None,
        )


class InvalidDateRangeException(ValidationException):
    """Invalid date range"""

    def __init__(self, start_date: str, end_date: str, field: Optional[str] = None, message: Optional[str] = None):
        super().__init__(
            message=message or f"Invalid date range: {start_date} to {end_date}. Start date must not be after end date.",
            field=field,
            code=ErrorCode.INVALID_DATE_RANGE,
            details={"start_date": start_date, "end_date": end_date},
        )


class ComputationPreconditionError(ValidationException):
    """
    Caller bug: an argument is outside the domain of the computation.

    Raised immediately rather than wrapped in a ``CalculationResult``.
    """

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            field=field,
            details=details,
            code=ErrorCode.COMPUTATION_PRECONDITION,
        )


class InvalidDayOfMonthException(ComputationPreconditionError):
    """Day-of-month outside [1, days_in_month]"""

    def __init__(self, day: int, days_in_month: int, field: str = "start_day"):
        super().__init__(
            message="Start day must be between 1 and days in month",
            field=field,
            details={"provided_day": day, "days_in_month": days_in_month},
        )
        self.code = ErrorCode.INVALID_DAY_OF_MONTH


# ============================================================================
# Resource Exceptions
# ============================================================================

class NotFoundException(AppException):
    """Resource not found exception"""

    def __init__(
        self,
        resource_type: str,
        resource_id: Optional[Union[str, UUID]] = None,
        message: Optional[str] = None,
        code: ErrorCode = ErrorCode.NOT_FOUND,
    ):
        if message is None:
            if resource_id:
                message = f"{resource_type} with ID '{resource_id}' not found"
            else:
                message = f"{resource_type} not found"
        super().__init__(
            code=code,
            message=message,
            status_code=HTTPStatus.NOT_FOUND,
            details={"resource_type": resource_type, "resource_id": str(resource_id) if resource_id else None},
        )


class EmployeeNotFoundException(NotFoundException):
    """Employee not found"""

    def __init__(self, employee_id: Union[str, UUID]):
        super().__init__(
            resource_type="Employee",
            resource_id=employee_id,
            code=ErrorCode.EMPLOYEE_NOT_FOUND,
        )


class ConflictException(AppException):
    """Resource conflict exception"""

    def __init__(
        self,
        message: str,
        resource_type: Optional[str] = None,
        code: ErrorCode = ErrorCode.RESOURCE_CONFLICT,
        details: Optional[Dict[str, Any]] = None,
    ):
        _details = details or {}
        if resource_type:
            _details["resource_type"] = resource_type
        super().__init__(
            code=code,
            message=message,
            status_code=HTTPStatus.CONFLICT,
            details=_details,
        )


class SettlementConflictException(ConflictException):
    """Employee was not in the expected state when a settlement was applied"""

    def __init__(self, employee_id: str, expected_status: str):
        super().__init__(
            message=f"Employee '{employee_id}' is no longer '{expected_status}'; settlement was not applied",
            resource_type="Employee",
            code=ErrorCode.SETTLEMENT_CONFLICT,
            details={"employee_id": employee_id, "expected_status": expected_status},
        )


# ============================================================================
# Persistence Exceptions
# ============================================================================

class PersistenceException(AppException):
    """Settlement store error"""

    def __init__(
        self,
        message: str = "A persistence error occurred",
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            code=ErrorCode.PERSISTENCE_ERROR,
            message=message,
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            original_error=original_error,
        )


# ============================================================================
# Result envelope
# ============================================================================

@dataclass(frozen=True)
class CalculationResult(Generic[T]):
    """Success/failure envelope for calculator outputs."""
    success: bool
    data: Optional[T] = None
    error: Optional[AppException] = None

    @classmethod
    def ok(cls, data: T) -> "CalculationResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: AppException) -> "CalculationResult[T]":
        logger.warning(f"Calculation failed: {error.code.value} - {error.message}")
        return cls(success=False, error=error)

    def unwrap(self) -> T:
        """Return the data or raise the carried error."""
        if not self.success:
            raise self.error
        return self.data


__all__ = [
    "AppException",
    "ErrorCode",
    "ValidationException",
    "MissingHireDateException",
    "InvalidDateRangeException",
    "ComputationPreconditionError",
    "InvalidDayOfMonthException",
    "NotFoundException",
    "EmployeeNotFoundException",
    "ConflictException",
    "SettlementConflictException",
    "PersistenceException",
    "CalculationResult",
]
