"""
Engine module for FuelBank.

Contains the compliance accounting core: balance computation, baseline
comparison, banking ledger rules and pool allocation.
"""

from fuelbank.engine.balance import (
    compute_balance,
    compute_balances,
    compute_energy_mj,
)
from fuelbank.engine.banking import (
    apply_banked,
    bank_surplus,
    get_total,
    running_totals,
)
from fuelbank.engine.comparison import compare, compute_percent_diff
from fuelbank.engine.pooling import allocate, pool_total

__all__ = [
    # Compliance balance
    "compute_energy_mj",
    "compute_balance",
    "compute_balances",
    # Comparison
    "compute_percent_diff",
    "compare",
    # Banking ledger
    "bank_surplus",
    "apply_banked",
    "get_total",
    "running_totals",
    # Pooling
    "pool_total",
    "allocate",
]
