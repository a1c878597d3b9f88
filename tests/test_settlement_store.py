"""
Payroll Core - Settlement Store Tests

Atomic application of settlement intents against an in-memory database.
"""

import pytest
from datetime import date, datetime, timezone
from decimal import Decimal

from payroll_core.schemas import (
    EmploymentStatus,
    SettlementType,
    TerminationReason,
)
from payroll_core.services import SettlementLedger, SettlementStore
from payroll_core.services.calculators import calculate_end_of_service, calculate_leave_balance
from payroll_core.utils.error_handling import (
    EmployeeNotFoundException,
    PersistenceException,
    SettlementConflictException,
)


@pytest.fixture
def leave_intent(employee):
    result = calculate_leave_balance(employee, as_of=date(2024, 1, 1)).unwrap()
    return SettlementLedger().leave_settlement(
        employee.employee_id, result,
        finalized_at=datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def eos_intent(employee):
    result = calculate_end_of_service(
        employee, date(2024, 6, 30), TerminationReason.EMPLOYER_TERMINATION_ART77,
        leave_as_of=date(2024, 6, 30),
    ).unwrap()
    return SettlementLedger().end_of_service(
        employee.employee_id, result, date(2024, 6, 30), TerminationReason.EMPLOYER_TERMINATION_ART77,
        hire_date=employee.hire_date,
        finalized_at=datetime(2024, 6, 30, 12, 0, tzinfo=timezone.utc),
    )


class TestEmployees:
    """Employee snapshots for fetch-then-compute."""

    @pytest.mark.asyncio
    async def test_round_trip(self, db_session, employee):
        store = SettlementStore(db_session)
        await store.add_employee(employee)

        loaded = await store.get_employee(employee.employee_id)

        assert loaded.hire_date == date(2020, 1, 1)
        assert loaded.status == EmploymentStatus.ACTIVE
        assert loaded.compensation.monthly_salary_basis().to_decimal() == Decimal("12750.00")

    @pytest.mark.asyncio
    async def test_unknown_employee(self, db_session):
        with pytest.raises(EmployeeNotFoundException):
            await SettlementStore(db_session).get_employee("EMP-404")


class TestApply:
    """Both writes happen together or not at all."""

    @pytest.mark.asyncio
    async def test_leave_settlement_resets_period(self, db_session, employee, leave_intent):
        store = SettlementStore(db_session)
        await store.add_employee(employee)

        await store.apply(leave_intent)

        loaded = await store.get_employee(employee.employee_id)
        assert loaded.last_settlement_date == date(2024, 1, 1)
        assert loaded.status == EmploymentStatus.ACTIVE

        history = await store.list_history(employee.employee_id)
        assert len(history) == 1
        assert history[0].id == leave_intent.record.id
        assert history[0].total_amount == Decimal("35700.00")
        assert history[0].details["accrued_days"] == "84.00"

    @pytest.mark.asyncio
    async def test_next_accrual_starts_at_settlement(self, db_session, employee, leave_intent):
        store = SettlementStore(db_session)
        await store.add_employee(employee)
        await store.apply(leave_intent)

        loaded = await store.get_employee(employee.employee_id)
        result = calculate_leave_balance(loaded, as_of=date(2024, 1, 1)).unwrap()

        assert result.accrued_days == Decimal("0.00")

    @pytest.mark.asyncio
    async def test_end_of_service_terminates(self, db_session, employee, eos_intent):
        store = SettlementStore(db_session)
        await store.add_employee(employee)

        await store.apply(eos_intent)

        loaded = await store.get_employee(employee.employee_id)
        assert loaded.status == EmploymentStatus.TERMINATED
        assert loaded.termination_date == date(2024, 6, 30)

        history = await store.list_history(employee.employee_id)
        assert history[0].reason_for_termination == TerminationReason.EMPLOYER_TERMINATION_ART77

    @pytest.mark.asyncio
    async def test_second_termination_conflicts(self, db_session, employee, eos_intent):
        store = SettlementStore(db_session)
        await store.add_employee(employee)
        await store.apply(eos_intent)

        with pytest.raises(SettlementConflictException):
            await store.apply(eos_intent)

        history = await store.list_history(employee.employee_id)
        assert len(history) == 1

    @pytest.mark.asyncio
    async def test_leave_settlement_after_termination_conflicts(
        self, db_session, employee, eos_intent, leave_intent,
    ):
        store = SettlementStore(db_session)
        await store.add_employee(employee)
        await store.apply(eos_intent)

        with pytest.raises(SettlementConflictException):
            await store.apply(leave_intent)

        loaded = await store.get_employee(employee.employee_id)
        assert loaded.last_settlement_date is None

    @pytest.mark.asyncio
    async def test_same_leave_period_settled_once(self, db_session, employee):
        """Two finalizers working from the same snapshot: only the first wins."""
        store = SettlementStore(db_session)
        await store.add_employee(employee)
        ledger = SettlementLedger()

        first_snapshot = await store.get_employee(employee.employee_id)
        second_snapshot = await store.get_employee(employee.employee_id)
        first = ledger.leave_settlement(
            employee.employee_id,
            calculate_leave_balance(first_snapshot, as_of=date(2024, 1, 1)).unwrap(),
        )
        second = ledger.leave_settlement(
            employee.employee_id,
            calculate_leave_balance(second_snapshot, as_of=date(2024, 1, 1)).unwrap(),
        )

        await store.apply(first)
        with pytest.raises(SettlementConflictException):
            await store.apply(second)

        history = await store.list_history(employee.employee_id)
        assert len(history) == 1
        assert history[0].total_amount == Decimal("35700.00")

    @pytest.mark.asyncio
    async def test_next_period_settles_from_fresh_snapshot(self, db_session, employee, leave_intent):
        store = SettlementStore(db_session)
        await store.add_employee(employee)
        await store.apply(leave_intent)

        snapshot = await store.get_employee(employee.employee_id)
        result = calculate_leave_balance(snapshot, as_of=date(2024, 7, 1)).unwrap()
        await store.apply(SettlementLedger().leave_settlement(employee.employee_id, result))

        loaded = await store.get_employee(employee.employee_id)
        assert loaded.last_settlement_date == date(2024, 7, 1)
        assert len(await store.list_history(employee.employee_id)) == 2

    @pytest.mark.asyncio
    async def test_failed_history_insert_leaves_employee_unchanged(self, db_session, employee, leave_intent):
        """The employee update is rolled back when the history row cannot be written."""
        store = SettlementStore(db_session)
        await store.add_employee(employee)
        await store.apply(leave_intent)

        # Same record id as the stored row, so the insert fails after the update
        duplicate = leave_intent.model_copy(update={
            "record": leave_intent.record.model_copy(update={"calculation_date": date(2024, 6, 30)}),
            "transition": leave_intent.transition.model_copy(update={
                "last_settlement_date": date(2024, 6, 30),
                "expected_last_settlement_date": date(2024, 1, 1),
            }),
        })
        with pytest.raises(PersistenceException):
            await store.apply(duplicate)

        loaded = await store.get_employee(employee.employee_id)
        assert loaded.last_settlement_date == date(2024, 1, 1)

        history = await store.list_history(employee.employee_id)
        assert [r.calculation_date for r in history] == [date(2024, 1, 1)]

    @pytest.mark.asyncio
    async def test_unknown_employee(self, db_session, leave_intent):
        with pytest.raises(EmployeeNotFoundException):
            await SettlementStore(db_session).apply(leave_intent)

        assert await SettlementStore(db_session).list_history("EMP-001") == []


class TestHistory:
    """History queries."""

    @pytest.mark.asyncio
    async def test_newest_first_and_filter(self, db_session, employee, leave_intent, eos_intent):
        store = SettlementStore(db_session)
        await store.add_employee(employee)
        await store.apply(leave_intent)
        await store.apply(eos_intent)

        history = await store.list_history(employee.employee_id)
        assert [r.settlement_type for r in history] == [
            SettlementType.END_OF_SERVICE,
            SettlementType.LEAVE_SETTLEMENT,
        ]

        leave_only = await store.list_history(employee.employee_id, SettlementType.LEAVE_SETTLEMENT)
        assert [r.id for r in leave_only] == [leave_intent.record.id]
