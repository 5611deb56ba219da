"""
Input validation for FuelBank.

All validate_* functions are pure and return lists of error messages.
validate_and_raise converts a non-empty list into a ValidationError.
"""

import math
from typing import Optional

from fuelbank.models import PoolMemberInput, RouteRecord


class ValidationError(Exception):
    """
    Raised when input validation fails.

    Attributes:
        errors: List of validation error messages
    """

    code = "VALIDATION_FAILED"

    def __init__(self, errors: list[str]):
        self.errors = errors
        message = "; ".join(errors) if errors else "Validation failed"
        super().__init__(message)


# =============================================================================
# Route Validation
# =============================================================================


def validate_route(route: RouteRecord) -> list[str]:
    """
    Validate a single route record. Returns list of errors.

    The calculator accepts any numeric input; these checks guard the
    caller side (negative fuel, non-finite intensity, blank ids).
    """
    errors: list[str] = []

    if not route.vessel_id or not route.vessel_id.strip():
        errors.append("Route has empty vessel_id")

    if not math.isfinite(route.ghg_intensity):
        errors.append(
            f"Route {route.vessel_id}: ghg_intensity must be finite (got {route.ghg_intensity})"
        )
    elif route.ghg_intensity < 0:
        errors.append(
            f"Route {route.vessel_id}: ghg_intensity must be >= 0 (got {route.ghg_intensity})"
        )

    if not math.isfinite(route.fuel_consumption_t):
        errors.append(
            f"Route {route.vessel_id}: fuel_consumption_t must be finite "
            f"(got {route.fuel_consumption_t})"
        )
    elif route.fuel_consumption_t < 0:
        errors.append(
            f"Route {route.vessel_id}: fuel_consumption_t must be >= 0 "
            f"(got {route.fuel_consumption_t})"
        )

    return errors


def validate_routes(routes: list[RouteRecord]) -> list[str]:
    """
    Validate a route list. Returns list of errors.

    Checks:
    - Vessel ids are unique
    - At most one route is marked as baseline
    - Each individual route is valid
    """
    errors: list[str] = []

    ids = [r.vessel_id for r in routes]
    if len(ids) != len(set(ids)):
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        errors.append(f"Vessel ids must be unique; duplicates: {duplicates}")

    baselines = [r.vessel_id for r in routes if r.is_baseline]
    if len(baselines) > 1:
        errors.append(f"At most one baseline route allowed; got {baselines}")

    for route in routes:
        errors.extend(validate_route(route))

    return errors


# =============================================================================
# Pool Validation
# =============================================================================


def validate_pool_members(members: list[PoolMemberInput]) -> list[str]:
    """
    Validate pool members. Returns list of errors.

    Pool feasibility (non-negative total) is not checked here; the allocator
    reports that as PoolInfeasibleError.
    """
    errors: list[str] = []

    if not members:
        errors.append("Pool must have at least one member")
        return errors

    ids = [m.ship_id for m in members]
    if len(ids) != len(set(ids)):
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        errors.append(f"Pool ship ids must be unique; duplicates: {duplicates}")

    for member in members:
        if not member.ship_id or not member.ship_id.strip():
            errors.append("Pool member has empty ship_id")
        if not math.isfinite(member.cb_before_g):
            errors.append(
                f"Pool member {member.ship_id}: cb_before_g must be finite "
                f"(got {member.cb_before_g})"
            )

    return errors


# =============================================================================
# Combined Validation
# =============================================================================


def validate_and_raise(
    routes: Optional[list[RouteRecord]] = None,
    pool_members: Optional[list[PoolMemberInput]] = None,
) -> None:
    """
    Validate inputs and raise ValidationError if any errors found.

    This is a convenience function for service and API boundary validation.
    """
    all_errors: list[str] = []

    if routes is not None:
        all_errors.extend(validate_routes(routes))

    if pool_members is not None:
        all_errors.extend(validate_pool_members(pool_members))

    if all_errors:
        raise ValidationError(all_errors)
