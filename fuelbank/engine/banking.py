"""
Banking ledger rules for FuelBank.

This module defines the arithmetic and validation for banking a surplus and
applying banked surplus to a deficit. Persistence is delegated to a
LedgerStore; each successful call appends exactly one entry, and a failed
call appends nothing.

The functions do not compute compliance balances themselves: the caller
re-derives current_balance_g from fuelbank.engine.balance immediately before
calling. Read-total-then-append is not atomic here; callers must hold
ledger.key_lock(vessel_id, year) across the whole sequence (see
fuelbank.service.ComplianceService).
"""

import math
from itertools import accumulate

from fuelbank.exceptions import NoDeficitError, NoFundsAvailableError, NoSurplusError
from fuelbank.models import ApplyResult, BankEntry, BankEntryCreate
from fuelbank.stores import LedgerStore


# =============================================================================
# Totals
# =============================================================================


def running_totals(entries: list[BankEntry]) -> list[float]:
    """
    Prefix sums of entry amounts in creation order.

    Entries are ordered by sequence, never by amount, so each value is the
    bank balance as it stood after that entry.
    """
    ordered = sorted(entries, key=lambda e: e.sequence)
    return list(accumulate(e.amount_g for e in ordered))


def get_total(ledger: LedgerStore, vessel_id: str, year: int) -> float:
    """Ordered sum of all ledger entries for a vessel-year (0.0 if none)."""
    totals = running_totals(ledger.list_entries(vessel_id, year))
    return totals[-1] if totals else 0.0


# =============================================================================
# Bank
# =============================================================================


def bank_surplus(
    ledger: LedgerStore,
    vessel_id: str,
    year: int,
    current_balance_g: float,
) -> BankEntry:
    """
    Deposit a surplus compliance balance into the ledger.

    Args:
        ledger: Store receiving the new entry
        vessel_id: Vessel whose surplus is banked
        year: Reporting year of the ledger account
        current_balance_g: Freshly computed compliance balance

    Returns:
        The appended BankEntry (amount_g = current_balance_g)

    Raises:
        NoSurplusError: If current_balance_g is not a finite positive number
    """
    if not math.isfinite(current_balance_g) or current_balance_g <= 0:
        raise NoSurplusError(
            f"Vessel {vessel_id} ({year}) has no surplus to bank "
            f"(balance {current_balance_g} g)"
        )

    return ledger.append(
        BankEntryCreate(vessel_id=vessel_id, year=year, amount_g=current_balance_g)
    )


# =============================================================================
# Apply
# =============================================================================


def apply_banked(
    ledger: LedgerStore,
    vessel_id: str,
    year: int,
    current_balance_g: float,
    banked_total_g: float,
) -> ApplyResult:
    """
    Offset a deficit with banked surplus.

    applied = min(banked_total_g, |current_balance_g|), so the withdrawal never
    exceeds either the deficit or the available bank and the ledger total for
    the vessel-year cannot go negative.

    Args:
        ledger: Store receiving the withdrawal entry
        vessel_id: Vessel with the deficit
        year: Reporting year of the ledger account
        current_balance_g: Freshly computed compliance balance (must be < 0)
        banked_total_g: Current ledger total for the vessel-year (must be > 0)

    Returns:
        ApplyResult with before/after balances and the remaining bank

    Raises:
        NoDeficitError: If current_balance_g is not negative (checked first)
        NoFundsAvailableError: If banked_total_g is not positive
    """
    if not math.isfinite(current_balance_g) or current_balance_g >= 0:
        raise NoDeficitError(
            f"Vessel {vessel_id} ({year}) has no deficit; nothing to apply "
            f"(balance {current_balance_g} g)"
        )
    if not math.isfinite(banked_total_g) or banked_total_g <= 0:
        raise NoFundsAvailableError(
            f"Vessel {vessel_id} ({year}) has no banked surplus available "
            f"(bank total {banked_total_g} g)"
        )

    deficit = abs(current_balance_g)
    applied = min(banked_total_g, deficit)

    entry = ledger.append(BankEntryCreate(vessel_id=vessel_id, year=year, amount_g=-applied))

    return ApplyResult(
        vessel_id=vessel_id,
        year=year,
        cb_before_g=current_balance_g,
        applied_g=applied,
        cb_after_g=current_balance_g + applied,
        remaining_bank_g=banked_total_g - applied,
        entry=entry,
    )
