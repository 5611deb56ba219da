"""
Custom exceptions for FuelBank.

Every accounting failure is a local, synchronous caller-input problem: none
is retried and none leaves a partial effect (no ledger entry, no pool).
The engine raises these; presenting them to a user is the caller's job.
"""


class ComplianceError(Exception):
    """
    Base class for all compliance accounting failures.

    Attributes:
        code: Stable machine-readable identifier, used in API error envelopes
    """

    code = "COMPLIANCE_ERROR"


class NoSurplusError(ComplianceError):
    """Raised when banking is attempted on a non-positive compliance balance."""

    code = "NO_SURPLUS"


class NoDeficitError(ComplianceError):
    """Raised when applying banked surplus to a vessel with no deficit."""

    code = "NO_DEFICIT"


class NoFundsAvailableError(ComplianceError):
    """Raised when applying banked surplus but the bank total is not positive."""

    code = "NO_FUNDS_AVAILABLE"


class PoolInfeasibleError(ComplianceError):
    """
    Raised when a pool cannot cover its own deficits.

    Either the members' balances sum to a negative total, or a residual deficit
    above tolerance remains after greedy allocation.
    """

    code = "POOL_INFEASIBLE"


class NotFoundError(ComplianceError):
    """Raised when a store has no record for the requested key."""

    code = "NOT_FOUND"


class NoBaselineError(ComplianceError):
    """Raised when a comparison is requested but no route is marked as baseline."""

    code = "NO_BASELINE"


class ZeroBaselineIntensityError(ComplianceError, ZeroDivisionError):
    """
    Raised when comparing against a baseline whose GHG intensity is zero.

    Percentage deviation from a zero baseline is undefined. The comparison
    engine raises instead of returning NaN or infinity.
    """

    code = "ZERO_BASELINE_INTENSITY"
