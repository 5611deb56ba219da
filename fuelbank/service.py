"""
Compliance service for FuelBank.

The service is a thin coordination layer between the stores and the engine:
- Balances: fuelbank.engine.balance (compute_balance)
- Comparison: fuelbank.engine.comparison (compare)
- Banking: fuelbank.engine.banking (bank_surplus, apply_banked, get_total)
- Pooling: fuelbank.engine.pooling (allocate)
- Validation: fuelbank.validation

Its job is coordination only: read from stores, call the engine with the
configured target intensity, persist results.

Concurrency: bank and apply read the ledger, validate, then append. The
service holds the ledger's per-(vessel_id, year) lock across that whole
sequence; without it two concurrent applies could both pass the
funds-available check against the same stale total and over-draw the bank.
"""

import logging
from typing import Optional

from fuelbank.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from fuelbank.engine.balance import compute_balance
from fuelbank.engine.banking import apply_banked, bank_surplus, get_total, running_totals
from fuelbank.engine.comparison import compare
from fuelbank.engine.pooling import allocate
from fuelbank.exceptions import NoBaselineError
from fuelbank.models import (
    AdjustedBalance,
    ApplyResult,
    BankRecords,
    BankResult,
    ComparisonResponse,
    ComplianceBalance,
    Pool,
    PoolMember,
    PoolMemberInput,
    RouteRecord,
)
from fuelbank.stores import (
    ComplianceStore,
    InMemoryComplianceStore,
    InMemoryLedgerStore,
    InMemoryPoolStore,
    InMemoryRouteStore,
    LedgerStore,
    PoolStore,
    RouteStore,
)
from fuelbank.validation import validate_and_raise


logger = logging.getLogger(__name__)


class ComplianceService:
    """
    Coordinates route, ledger, pool and compliance stores with the engine.

    Args:
        routes: Route store
        ledger: Bank ledger store
        pools: Pool history store
        compliance: Compliance snapshot store
        config: Engine configuration; target_intensity is passed explicitly
            to every engine call
    """

    def __init__(
        self,
        routes: RouteStore,
        ledger: LedgerStore,
        pools: PoolStore,
        compliance: ComplianceStore,
        config: EngineConfig = DEFAULT_ENGINE_CONFIG,
    ) -> None:
        self.routes = routes
        self.ledger = ledger
        self.pools = pools
        self.compliance = compliance
        self.config = config

    # -------------------------------------------------------------------------
    # Routes
    # -------------------------------------------------------------------------

    def list_routes(self, year: Optional[int] = None) -> list[RouteRecord]:
        return self.routes.list_routes(year)

    def set_baseline(self, vessel_id: str) -> RouteRecord:
        route = self.routes.set_baseline(vessel_id)
        logger.info(f"Baseline set to route {vessel_id}")
        return route

    def compare_to_baseline(self) -> ComparisonResponse:
        """
        Compare every non-baseline route against the baseline route.

        Raises:
            NoBaselineError: If no route is marked as baseline
            ZeroBaselineIntensityError: If the baseline intensity is zero
        """
        baseline = self.routes.get_baseline()
        if baseline is None:
            raise NoBaselineError("No baseline route defined")

        candidates = [r for r in self.routes.list_routes() if r.vessel_id != baseline.vessel_id]
        rows = compare(baseline, candidates, self.config.target_intensity)

        return ComparisonResponse(
            baseline=baseline,
            target_intensity=self.config.target_intensity,
            rows=rows,
        )

    # -------------------------------------------------------------------------
    # Compliance balances
    # -------------------------------------------------------------------------

    def compute_balance(self, vessel_id: str) -> ComplianceBalance:
        """Compute and record the compliance balance for a vessel's route."""
        route = self.routes.get_route(vessel_id)
        balance = compute_balance(route, self.config.target_intensity)
        self.compliance.record(route.vessel_id, route.year, balance.balance_g)
        return balance

    def adjusted_balances(
        self,
        year: int,
        vessel_id: Optional[str] = None,
    ) -> list[AdjustedBalance]:
        """
        Compliance balances for a year, each adjusted by its ledger total.

        Args:
            year: Reporting year
            vessel_id: If provided, restrict to this vessel

        Returns:
            One AdjustedBalance per matching route (empty if none match)
        """
        routes = self.routes.list_routes(year)
        if vessel_id is not None:
            routes = [r for r in routes if r.vessel_id == vessel_id]

        results: list[AdjustedBalance] = []
        for route in routes:
            cb_g = compute_balance(route, self.config.target_intensity).balance_g
            banked_g = get_total(self.ledger, route.vessel_id, year)
            results.append(
                AdjustedBalance(
                    vessel_id=route.vessel_id,
                    year=year,
                    cb_g=cb_g,
                    banked_g=banked_g,
                    adjusted_cb_g=cb_g + banked_g,
                )
            )
        return results

    # -------------------------------------------------------------------------
    # Banking
    # -------------------------------------------------------------------------

    def bank_records(self, vessel_id: str, year: int) -> BankRecords:
        entries = self.ledger.list_entries(vessel_id, year)
        totals = running_totals(entries)
        return BankRecords(
            vessel_id=vessel_id,
            year=year,
            total_banked_g=totals[-1] if totals else 0.0,
            entries=sorted(entries, key=lambda e: e.sequence),
            running_totals_g=totals,
        )

    def bank(self, vessel_id: str, year: int) -> BankResult:
        """
        Bank the vessel's current surplus for the given year.

        The balance is re-derived from the route immediately before banking.

        Raises:
            NotFoundError: If the vessel has no route
            NoSurplusError: If the current balance is not positive
        """
        route = self.routes.get_route(vessel_id)

        with self.ledger.key_lock(vessel_id, year):
            cb_g = compute_balance(route, self.config.target_intensity).balance_g
            entry = bank_surplus(self.ledger, vessel_id, year, cb_g)

        self.compliance.record(vessel_id, year, cb_g)
        logger.info(f"Banked {cb_g:.0f} g for {vessel_id} ({year}), entry {entry.entry_id}")

        return BankResult(vessel_id=vessel_id, year=year, amount_banked_g=cb_g, entry=entry)

    def apply(self, vessel_id: str, year: int) -> ApplyResult:
        """
        Apply banked surplus to the vessel's current deficit.

        Raises:
            NotFoundError: If the vessel has no route
            NoDeficitError: If the current balance is not negative
            NoFundsAvailableError: If the ledger total is not positive
        """
        route = self.routes.get_route(vessel_id)

        with self.ledger.key_lock(vessel_id, year):
            cb_g = compute_balance(route, self.config.target_intensity).balance_g
            banked_total_g = get_total(self.ledger, vessel_id, year)
            result = apply_banked(self.ledger, vessel_id, year, cb_g, banked_total_g)

        logger.info(
            f"Applied {result.applied_g:.0f} g to {vessel_id} ({year}); "
            f"remaining bank {result.remaining_bank_g:.0f} g"
        )
        return result

    # -------------------------------------------------------------------------
    # Pooling
    # -------------------------------------------------------------------------

    def create_pool(self, year: int, members: list[PoolMemberInput]) -> Pool:
        """
        Allocate balances across members and record the pool.

        Pools are history only; they do not write to the banking ledger.

        Raises:
            ValidationError: If members are empty, duplicated or non-finite
            PoolInfeasibleError: If the pool cannot cover its deficits
        """
        validate_and_raise(pool_members=members)

        allocations = allocate(members, self.config.pool_tolerance_g)
        after = {a.ship_id: a.cb_after_g for a in allocations}

        pool = self.pools.create_pool(
            year,
            [
                PoolMember(
                    ship_id=m.ship_id,
                    cb_before_g=m.cb_before_g,
                    cb_after_g=after[m.ship_id],
                )
                for m in members
            ],
        )
        logger.info(f"Created pool {pool.pool_id} for {year} with {len(members)} members")
        return pool

    def list_pools(self, year: Optional[int] = None) -> list[Pool]:
        return self.pools.list_pools(year)


def create_in_memory_service(
    routes: Optional[list[RouteRecord]] = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> ComplianceService:
    """Build a ComplianceService backed by fresh in-memory stores."""
    if routes is not None:
        validate_and_raise(routes=routes)

    return ComplianceService(
        routes=InMemoryRouteStore(routes),
        ledger=InMemoryLedgerStore(),
        pools=InMemoryPoolStore(),
        compliance=InMemoryComplianceStore(),
        config=config,
    )
