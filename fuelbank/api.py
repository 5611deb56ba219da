"""
FastAPI Application for FuelBank.

This module provides the HTTP API layer. It is a thin layer that delegates
all business logic to ComplianceService.

Endpoints:
    GET  /health - Health check
    GET  /api/routes - List routes
    POST /api/routes/{vessel_id}/baseline - Mark a route as baseline
    GET  /api/routes/comparison - Compare routes against the baseline
    GET  /api/compliance/cb - Compliance balance for a vessel
    GET  /api/compliance/adjusted-cb - Balances adjusted by banked totals
    GET  /api/banking/records - Ledger entries for a vessel-year
    POST /api/banking/bank - Bank a surplus
    POST /api/banking/apply - Apply banked surplus to a deficit
    POST /api/pools - Create a pool
    GET  /api/pools - List pools
"""

import logging
import os
from pathlib import Path

# Load .env file if it exists
from dotenv import load_dotenv

env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)
from typing import NoReturn, Optional

from fastapi import FastAPI, HTTPException, Query, status

from fuelbank.config import DEFAULT_TARGET_INTENSITY, EngineConfig
from fuelbank.exceptions import ComplianceError, NotFoundError
from fuelbank.models import (
    AdjustedBalance,
    ApplyRequest,
    ApplyResult,
    BankRecords,
    BankRequest,
    BankResult,
    ComparisonResponse,
    ComplianceBalance,
    ErrorResponse,
    Pool,
    PoolRequest,
    RouteRecord,
)
from fuelbank.seed import seed_routes
from fuelbank.service import ComplianceService, create_in_memory_service
from fuelbank.validation import ValidationError


logger = logging.getLogger(__name__)


def get_engine_config() -> EngineConfig:
    """
    Build the engine configuration from the environment.

    TARGET_INTENSITY overrides the regulatory default. Read once at startup
    and passed explicitly to the service; the engine never reads it.
    """
    raw = os.environ.get("TARGET_INTENSITY")
    if raw:
        logger.info(f"Using TARGET_INTENSITY={raw} from environment")
        return EngineConfig(target_intensity=float(raw))
    return EngineConfig(target_intensity=DEFAULT_TARGET_INTENSITY)


# Singleton service backed by in-memory stores seeded with reference routes
service: ComplianceService = create_in_memory_service(seed_routes(), get_engine_config())


# =============================================================================
# Error Mapping
# =============================================================================

_ERRORS = {
    400: {"model": ErrorResponse, "description": "Invalid request"},
    404: {"model": ErrorResponse, "description": "Not found"},
}


def raise_http_error(e: Exception) -> NoReturn:
    """
    Translate a domain exception into an HTTPException with ErrorResponse.

    NotFoundError → 404; ValidationError and other ComplianceErrors → 400.
    """
    if isinstance(e, NotFoundError):
        error_response = ErrorResponse(error="Not found", detail=str(e), code=e.code)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error_response.model_dump())
    if isinstance(e, ValidationError):
        error_response = ErrorResponse(
            error="Validation failed", detail=str(e.errors), code=e.code
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=error_response.model_dump()
        )
    if isinstance(e, ComplianceError):
        error_response = ErrorResponse(error="Invalid request", detail=str(e), code=e.code)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=error_response.model_dump()
        )
    raise e


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title="FuelBank API",
    version="1.0.0",
    description="Vessel GHG compliance balance, banking and pooling",
)


@app.get(
    "/health",
    summary="Health check",
    description="Returns service health status",
    tags=["System"],
)
def health_check() -> dict:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "FuelBank API",
        "version": "1.0.0",
    }


# =============================================================================
# Routes
# =============================================================================


@app.get("/api/routes", response_model=list[RouteRecord], tags=["Routes"])
def list_routes(
    year: Optional[int] = Query(None, description="Filter by reporting year"),
) -> list[RouteRecord]:
    return service.list_routes(year)


@app.get(
    "/api/routes/comparison",
    response_model=ComparisonResponse,
    responses=_ERRORS,
    tags=["Routes"],
)
def compare_routes() -> ComparisonResponse:
    """
    Compare every route against the baseline route.

    Status Codes:
        200: Success
        400: No baseline defined, or baseline intensity is zero
    """
    try:
        return service.compare_to_baseline()
    except ComplianceError as e:
        raise_http_error(e)


@app.post(
    "/api/routes/{vessel_id}/baseline",
    response_model=RouteRecord,
    responses=_ERRORS,
    tags=["Routes"],
)
def set_baseline(vessel_id: str) -> RouteRecord:
    try:
        return service.set_baseline(vessel_id)
    except ComplianceError as e:
        raise_http_error(e)


# =============================================================================
# Compliance
# =============================================================================


@app.get(
    "/api/compliance/cb",
    response_model=ComplianceBalance,
    responses=_ERRORS,
    tags=["Compliance"],
)
def get_compliance_balance(
    vessel_id: str = Query(..., min_length=1, description="Vessel identifier"),
) -> ComplianceBalance:
    try:
        return service.compute_balance(vessel_id)
    except ComplianceError as e:
        raise_http_error(e)


@app.get(
    "/api/compliance/adjusted-cb",
    response_model=list[AdjustedBalance],
    tags=["Compliance"],
)
def get_adjusted_balances(
    year: int = Query(..., description="Reporting year"),
    vessel_id: Optional[str] = Query(None, description="Restrict to one vessel"),
) -> list[AdjustedBalance]:
    return service.adjusted_balances(year, vessel_id)


# =============================================================================
# Banking
# =============================================================================


@app.get("/api/banking/records", response_model=BankRecords, tags=["Banking"])
def get_bank_records(
    vessel_id: str = Query(..., min_length=1, description="Vessel identifier"),
    year: int = Query(..., description="Reporting year"),
) -> BankRecords:
    return service.bank_records(vessel_id, year)


@app.post(
    "/api/banking/bank",
    response_model=BankResult,
    responses=_ERRORS,
    tags=["Banking"],
)
def bank_surplus(request: BankRequest) -> BankResult:
    """
    Bank the vessel's current surplus.

    Status Codes:
        200: Surplus banked
        400: Balance is not positive (NO_SURPLUS)
        404: Unknown vessel
    """
    try:
        return service.bank(request.vessel_id, request.year)
    except ComplianceError as e:
        logger.info(f"Bank rejected for {request.vessel_id} ({request.year}): {e}")
        raise_http_error(e)


@app.post(
    "/api/banking/apply",
    response_model=ApplyResult,
    responses=_ERRORS,
    tags=["Banking"],
)
def apply_banked(request: ApplyRequest) -> ApplyResult:
    """
    Apply banked surplus to the vessel's current deficit.

    Status Codes:
        200: Surplus applied
        400: No deficit (NO_DEFICIT) or empty bank (NO_FUNDS_AVAILABLE)
        404: Unknown vessel
    """
    try:
        return service.apply(request.vessel_id, request.year)
    except ComplianceError as e:
        logger.info(f"Apply rejected for {request.vessel_id} ({request.year}): {e}")
        raise_http_error(e)


# =============================================================================
# Pools
# =============================================================================


@app.post("/api/pools", response_model=Pool, responses=_ERRORS, tags=["Pools"])
def create_pool(request: PoolRequest) -> Pool:
    """
    Create a pool and record the redistributed balances.

    Status Codes:
        200: Pool created
        400: Invalid members (VALIDATION_FAILED) or infeasible pool (POOL_INFEASIBLE)
    """
    try:
        return service.create_pool(request.year, request.members)
    except (ComplianceError, ValidationError) as e:
        logger.info(f"Pool rejected for {request.year}: {e}")
        raise_http_error(e)


@app.get("/api/pools", response_model=list[Pool], tags=["Pools"])
def list_pools(
    year: Optional[int] = Query(None, description="Filter by reporting year"),
) -> list[Pool]:
    return service.list_pools(year)
