"""
Reference route data for FuelBank.

Five routes across 2024-2025 used to populate the in-memory route store
for demos and API tests. R001 is the initial baseline.
"""

from fuelbank.models import RouteRecord


SEED_ROUTES: list[RouteRecord] = [
    RouteRecord(
        vessel_id="R001",
        vessel_type="Container",
        fuel_type="HFO",
        year=2024,
        ghg_intensity=91.0,
        fuel_consumption_t=5000,
        distance_km=12000,
        total_emissions_t=4500,
        is_baseline=True,
    ),
    RouteRecord(
        vessel_id="R002",
        vessel_type="BulkCarrier",
        fuel_type="LNG",
        year=2024,
        ghg_intensity=88.0,
        fuel_consumption_t=4800,
        distance_km=11500,
        total_emissions_t=4200,
    ),
    RouteRecord(
        vessel_id="R003",
        vessel_type="Tanker",
        fuel_type="MGO",
        year=2024,
        ghg_intensity=93.5,
        fuel_consumption_t=5100,
        distance_km=12500,
        total_emissions_t=4700,
    ),
    RouteRecord(
        vessel_id="R004",
        vessel_type="RoRo",
        fuel_type="HFO",
        year=2025,
        ghg_intensity=89.2,
        fuel_consumption_t=4900,
        distance_km=11800,
        total_emissions_t=4300,
    ),
    RouteRecord(
        vessel_id="R005",
        vessel_type="Container",
        fuel_type="LNG",
        year=2025,
        ghg_intensity=90.5,
        fuel_consumption_t=4950,
        distance_km=11900,
        total_emissions_t=4400,
    ),
]


def seed_routes() -> list[RouteRecord]:
    """Fresh copies of the reference routes."""
    return [route.model_copy() for route in SEED_ROUTES]
