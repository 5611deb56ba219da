"""
Baseline comparison for FuelBank.

Expresses each route's GHG intensity as a percentage deviation from the
baseline route and flags whether it meets the target intensity.
"""

from fuelbank.config import DEFAULT_TARGET_INTENSITY
from fuelbank.exceptions import ZeroBaselineIntensityError
from fuelbank.models import ComparisonRow, RouteRecord


def compute_percent_diff(baseline_intensity: float, comparison_intensity: float) -> float:
    """
    Percentage deviation of comparison_intensity from baseline_intensity.

    Raises:
        ZeroBaselineIntensityError: If baseline_intensity is zero
    """
    if baseline_intensity == 0:
        raise ZeroBaselineIntensityError(
            "Baseline GHG intensity is zero; percentage deviation is undefined"
        )
    return (comparison_intensity / baseline_intensity - 1) * 100


def compare(
    baseline: RouteRecord,
    candidates: list[RouteRecord],
    target_intensity: float = DEFAULT_TARGET_INTENSITY,
) -> list[ComparisonRow]:
    """
    Compare candidate routes against a baseline route.

    Args:
        baseline: The reference route
        candidates: Routes to compare; output order matches this order
        target_intensity: Ceiling for the compliant flag (gCO2eq/MJ)

    Returns:
        One ComparisonRow per candidate

    Raises:
        ZeroBaselineIntensityError: If baseline.ghg_intensity is zero. Raised
            before any row is produced, even for an empty candidate list.
    """
    if baseline.ghg_intensity == 0:
        raise ZeroBaselineIntensityError(
            f"Baseline route {baseline.vessel_id} has zero GHG intensity; "
            "percentage deviation is undefined"
        )

    return [
        ComparisonRow(
            vessel_id=candidate.vessel_id,
            baseline_intensity=baseline.ghg_intensity,
            comparison_intensity=candidate.ghg_intensity,
            percent_diff=compute_percent_diff(baseline.ghg_intensity, candidate.ghg_intensity),
            compliant=candidate.ghg_intensity <= target_intensity,
        )
        for candidate in candidates
    ]
