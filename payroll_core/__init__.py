"""
Payroll Core

Saudi payroll, leave accrual and end-of-service settlement calculations.
"""

__version__ = "1.0.0"
