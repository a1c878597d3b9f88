"""
Payroll Core - Services Package

Calculators, settlement ledger and the reference settlement store.
"""

from payroll_core.services.settlement_ledger import SettlementLedger
from payroll_core.services.settlement_store import SettlementStore

__all__ = ["SettlementLedger", "SettlementStore"]
