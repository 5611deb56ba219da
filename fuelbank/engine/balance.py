"""
Compliance balance computation for FuelBank.

All functions are:
- Pure (no side effects, no configuration or environment reads)
- Deterministic (same inputs → same outputs)
- Unrounded (rounding is a presentation concern of the caller)
"""

from fuelbank.config import DEFAULT_TARGET_INTENSITY, MJ_PER_TONNE
from fuelbank.models import ComplianceBalance, RouteRecord


def compute_energy_mj(fuel_consumption_t: float) -> float:
    """Energy in scope (MJ) for a fuel mass in tonnes."""
    return fuel_consumption_t * MJ_PER_TONNE


def compute_balance(
    route: RouteRecord,
    target_intensity: float = DEFAULT_TARGET_INTENSITY,
) -> ComplianceBalance:
    """
    Compute the compliance balance for a single route.

    balance_g = (target_intensity - actual_intensity) * energy_mj

    Zero fuel consumption yields a zero balance. Negative consumption is
    computed as-is; rejecting it is the caller's input validation concern.

    Args:
        route: Route record for one vessel-year
        target_intensity: Regulatory ceiling in gCO2eq/MJ

    Returns:
        ComplianceBalance (positive balance_g = surplus, negative = deficit)
    """
    energy_mj = compute_energy_mj(route.fuel_consumption_t)
    balance_g = (target_intensity - route.ghg_intensity) * energy_mj

    return ComplianceBalance(
        vessel_id=route.vessel_id,
        year=route.year,
        target_intensity=target_intensity,
        actual_intensity=route.ghg_intensity,
        energy_mj=energy_mj,
        balance_g=balance_g,
    )


def compute_balances(
    routes: list[RouteRecord],
    target_intensity: float = DEFAULT_TARGET_INTENSITY,
) -> list[ComplianceBalance]:
    """Compute balances for several routes, preserving input order."""
    return [compute_balance(route, target_intensity) for route in routes]
