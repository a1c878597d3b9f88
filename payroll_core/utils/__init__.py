"""
Payroll Core - Utilities

Money arithmetic, date helpers and the error taxonomy.
"""
