"""
Engine configuration for FuelBank.

Regulatory constants and the EngineConfig model live here - no magic numbers
in engine code. Engine functions take these values as explicit parameters;
nothing in fuelbank.engine reads configuration or the environment itself.
"""

from pydantic import BaseModel, Field


# =============================================================================
# Regulatory Constants
# =============================================================================

# Target GHG intensity (gCO2eq/MJ) for the 2025 reporting period
DEFAULT_TARGET_INTENSITY: float = 89.3368

# Lower calorific value used to convert fuel mass to energy in scope
MJ_PER_TONNE: float = 41_000

# Residual deficit (grams) treated as fully covered after pool allocation
POOL_TOLERANCE_G: float = 1e-6


# =============================================================================
# Engine Configuration
# =============================================================================


class EngineConfig(BaseModel):
    """
    Configurable parameters threaded through the service into the engine.

    Built once by the caller (see fuelbank.api) and passed explicitly, so the
    calculators stay pure and can be tested with controlled parameters.
    """

    target_intensity: float = Field(
        default=DEFAULT_TARGET_INTENSITY,
        gt=0,
        description="Regulatory ceiling in gCO2eq/MJ against which routes are measured",
    )

    pool_tolerance_g: float = Field(
        default=POOL_TOLERANCE_G,
        gt=0,
        description="Residual deficit (grams) accepted as covered after pooling",
    )


DEFAULT_ENGINE_CONFIG = EngineConfig()
