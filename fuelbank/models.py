"""
Pydantic models for FuelBank.

This module contains all data models for routes, compliance balances, the
banking ledger and pools. Models handle validation and serialization only -
no business logic. All balance quantities are grams of CO2-equivalent;
conversion to tonnes is a presentation concern left to clients.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field


# =============================================================================
# Enums
# =============================================================================


class BalanceStatus(str, Enum):
    """Sign of a compliance balance."""

    SURPLUS = "surplus"
    DEFICIT = "deficit"
    NEUTRAL = "neutral"


# =============================================================================
# Route Models
# =============================================================================


class RouteRecord(BaseModel):
    """
    One voyage/reporting period for one vessel.

    Created and updated by route management; read-only to the engine.
    fuel_consumption_t carries no bound here: the calculator accepts any value
    and fuelbank.validation reports negative consumption.
    """

    # Required fields
    vessel_id: str = Field(..., description="Stable vessel identifier")
    year: int = Field(..., description="Reporting year")
    ghg_intensity: float = Field(..., description="Actual GHG intensity (gCO2eq/MJ)")
    fuel_consumption_t: float = Field(..., description="Fuel consumed (tonnes)")
    is_baseline: bool = Field(False, description="At most one route may be the baseline")

    # Optional descriptive fields
    vessel_type: Optional[str] = Field(None, description="e.g. 'Container', 'Tanker'")
    fuel_type: Optional[str] = Field(None, description="e.g. 'HFO', 'LNG', 'MGO'")
    distance_km: Optional[float] = Field(None, ge=0, description="Distance sailed (km)")
    total_emissions_t: Optional[float] = Field(
        None, ge=0, description="Reported total emissions (tonnes)"
    )


# =============================================================================
# Engine Output Models
# =============================================================================


class ComplianceBalance(BaseModel):
    """
    Compliance balance for one vessel-year, recomputed on demand.

    Invariants:
        energy_mj = fuel_consumption_t * MJ_PER_TONNE
        balance_g = (target_intensity - actual_intensity) * energy_mj
    """

    vessel_id: str
    year: int
    target_intensity: float = Field(..., description="Target intensity used (gCO2eq/MJ)")
    actual_intensity: float = Field(..., description="Route intensity (gCO2eq/MJ)")
    energy_mj: float = Field(..., description="Energy in scope (MJ)")
    balance_g: float = Field(..., description="Signed balance: + surplus, - deficit")

    @computed_field
    @property
    def status(self) -> BalanceStatus:
        if self.balance_g > 0:
            return BalanceStatus.SURPLUS
        if self.balance_g < 0:
            return BalanceStatus.DEFICIT
        return BalanceStatus.NEUTRAL


class ComparisonRow(BaseModel):
    """Deviation of one route's intensity from the baseline route."""

    vessel_id: str
    baseline_intensity: float
    comparison_intensity: float
    percent_diff: float = Field(..., description="(comparison / baseline - 1) * 100")
    compliant: bool = Field(..., description="comparison_intensity <= target intensity")


class ComplianceSnapshot(BaseModel):
    """A compliance balance as recorded at computation time."""

    vessel_id: str
    year: int
    cb_g: float
    recorded_at: datetime


class AdjustedBalance(BaseModel):
    """Compliance balance adjusted by the vessel-year's banked total."""

    vessel_id: str
    year: int
    cb_g: float = Field(..., description="Raw compliance balance")
    banked_g: float = Field(..., description="Ledger total for the vessel-year")
    adjusted_cb_g: float = Field(..., description="cb_g + banked_g")


# =============================================================================
# Banking Ledger Models
# =============================================================================


class BankEntryCreate(BaseModel):
    """Draft ledger row handed to LedgerStore.append."""

    vessel_id: str
    year: int
    amount_g: float = Field(..., description="+ deposit, - withdrawal")


class BankEntry(BaseModel):
    """
    Append-only ledger row, one per bank or apply action.

    sequence is the ordering key; created_at is informational only.
    """

    entry_id: str
    vessel_id: str
    year: int
    amount_g: float = Field(..., description="+ deposit, - withdrawal")
    sequence: int = Field(..., ge=0, description="Monotonic creation order")
    created_at: datetime


class BankResult(BaseModel):
    """Outcome of banking a surplus."""

    vessel_id: str
    year: int
    amount_banked_g: float
    entry: BankEntry


class ApplyResult(BaseModel):
    """Outcome of applying banked surplus to a deficit."""

    vessel_id: str
    year: int
    cb_before_g: float = Field(..., description="Deficit before application")
    applied_g: float = Field(..., ge=0, description="min(bank total, deficit)")
    cb_after_g: float = Field(..., description="cb_before_g + applied_g")
    remaining_bank_g: float = Field(..., ge=0, description="Bank total after application")
    entry: BankEntry


class BankRecords(BaseModel):
    """Ledger view for one vessel-year."""

    vessel_id: str
    year: int
    total_banked_g: float
    entries: list[BankEntry] = Field(default_factory=list)
    running_totals_g: list[float] = Field(
        default_factory=list, description="Prefix sums in sequence order"
    )


# =============================================================================
# Pool Models
# =============================================================================


class PoolMemberInput(BaseModel):
    """A vessel's balance as submitted for pooling."""

    ship_id: str
    cb_before_g: float


class PoolAllocation(BaseModel):
    """A vessel's balance after pool redistribution."""

    ship_id: str
    cb_after_g: float


class PoolMember(BaseModel):
    """A recorded pool member with before/after snapshots."""

    ship_id: str
    cb_before_g: float
    cb_after_g: float


class Pool(BaseModel):
    """
    A point-in-time allocation event.

    Immutable history: pools do not feed back into the banking ledger or
    into future balance calculations.
    """

    pool_id: str
    year: int
    created_at: datetime
    members: list[PoolMember] = Field(default_factory=list)


# =============================================================================
# API Request/Response Models
# =============================================================================


class BankRequest(BaseModel):
    """Request body for POST /api/banking/bank."""

    vessel_id: str = Field(..., min_length=1)
    year: int


class ApplyRequest(BaseModel):
    """Request body for POST /api/banking/apply."""

    vessel_id: str = Field(..., min_length=1)
    year: int


class PoolRequest(BaseModel):
    """Request body for POST /api/pools."""

    year: int
    members: list[PoolMemberInput]


class ComparisonResponse(BaseModel):
    """Baseline route plus one comparison row per other route."""

    baseline: RouteRecord
    target_intensity: float
    rows: list[ComparisonRow]


class ErrorResponse(BaseModel):
    """Standard error response envelope."""

    error: str = Field(..., description="Error type")
    detail: Optional[str] = Field(None, description="Detailed error message")
    code: Optional[str] = Field(None, description="Machine-readable error code")
