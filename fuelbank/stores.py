"""
Store interfaces and in-memory implementations for FuelBank.

The Protocols are the narrow ports the service depends on; the in-memory
classes are thread-safe implementations used by the API and the tests.

Note: In-memory implementations lose their data on restart. For production,
provide persistent implementations of the same Protocols.
"""

import threading
from datetime import datetime, timezone
from typing import Optional, Protocol, runtime_checkable
from uuid import uuid4

from fuelbank.exceptions import NotFoundError
from fuelbank.models import (
    BankEntry,
    BankEntryCreate,
    ComplianceSnapshot,
    Pool,
    PoolMember,
    RouteRecord,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# Store Protocols
# =============================================================================


@runtime_checkable
class RouteStore(Protocol):
    """Read access to route records plus the single-baseline flag."""

    def list_routes(self, year: Optional[int] = None) -> list[RouteRecord]:
        ...

    def get_route(self, vessel_id: str) -> RouteRecord:
        """Raises NotFoundError for an unknown vessel."""
        ...

    def get_baseline(self) -> Optional[RouteRecord]:
        ...

    def set_baseline(self, vessel_id: str) -> RouteRecord:
        """Mark one route as baseline and clear the flag on all others."""
        ...

    def upsert(self, route: RouteRecord) -> RouteRecord:
        ...


@runtime_checkable
class LedgerStore(Protocol):
    """
    Append-only bank ledger keyed by (vessel_id, year).

    key_lock returns a lock that callers hold across read-then-append
    sequences so that writes to one key are serialized.
    """

    def list_entries(self, vessel_id: str, year: int) -> list[BankEntry]:
        """Entries for the key, in creation order."""
        ...

    def append(self, entry: BankEntryCreate) -> BankEntry:
        ...

    def key_lock(self, vessel_id: str, year: int) -> threading.Lock:
        ...


@runtime_checkable
class PoolStore(Protocol):
    """Immutable history of pool allocations."""

    def create_pool(self, year: int, members: list[PoolMember]) -> Pool:
        ...

    def get_pool(self, pool_id: str) -> Pool:
        """Raises NotFoundError for an unknown pool."""
        ...

    def list_pools(self, year: Optional[int] = None) -> list[Pool]:
        ...


@runtime_checkable
class ComplianceStore(Protocol):
    """Snapshots of computed compliance balances."""

    def record(self, vessel_id: str, year: int, cb_g: float) -> ComplianceSnapshot:
        ...

    def latest(self, vessel_id: str, year: int) -> Optional[ComplianceSnapshot]:
        ...


# =============================================================================
# In-Memory Implementations
# =============================================================================


class InMemoryRouteStore:
    """
    Thread-safe in-memory route store keyed by vessel_id.

    set_baseline clears and sets the flag under one lock, so at most one
    route is ever the baseline.
    """

    def __init__(self, routes: Optional[list[RouteRecord]] = None) -> None:
        self._routes: dict[str, RouteRecord] = {}
        self._lock = threading.Lock()
        for route in routes or []:
            self.upsert(route)

    def list_routes(self, year: Optional[int] = None) -> list[RouteRecord]:
        with self._lock:
            routes = list(self._routes.values())

        if year is not None:
            routes = [r for r in routes if r.year == year]
        return routes

    def get_route(self, vessel_id: str) -> RouteRecord:
        with self._lock:
            route = self._routes.get(vessel_id)
        if route is None:
            raise NotFoundError(f"Route not found for vessel {vessel_id}")
        return route

    def get_baseline(self) -> Optional[RouteRecord]:
        with self._lock:
            for route in self._routes.values():
                if route.is_baseline:
                    return route
        return None

    def set_baseline(self, vessel_id: str) -> RouteRecord:
        with self._lock:
            if vessel_id not in self._routes:
                raise NotFoundError(f"Route not found for vessel {vessel_id}")
            for key, route in self._routes.items():
                self._routes[key] = route.model_copy(update={"is_baseline": key == vessel_id})
            return self._routes[vessel_id]

    def upsert(self, route: RouteRecord) -> RouteRecord:
        """
        Insert or replace a route.

        A route arriving with is_baseline=True takes the baseline flag from
        whichever route held it.
        """
        with self._lock:
            if route.is_baseline:
                for key, existing in self._routes.items():
                    if existing.is_baseline and key != route.vessel_id:
                        self._routes[key] = existing.model_copy(update={"is_baseline": False})
            self._routes[route.vessel_id] = route
            return route

    def clear(self) -> None:
        """Remove all routes. Useful for testing."""
        with self._lock:
            self._routes.clear()


class InMemoryLedgerStore:
    """
    Thread-safe append-only ledger.

    Entries are stored in one list per (vessel_id, year) key and stamped with
    a store-wide monotonic sequence number. Nothing is ever mutated or removed
    except by clear().
    """

    def __init__(self) -> None:
        self._entries: dict[tuple[str, int], list[BankEntry]] = {}
        self._key_locks: dict[tuple[str, int], threading.Lock] = {}
        self._sequence = 0
        self._lock = threading.Lock()

    def list_entries(self, vessel_id: str, year: int) -> list[BankEntry]:
        with self._lock:
            return list(self._entries.get((vessel_id, year), []))

    def append(self, entry: BankEntryCreate) -> BankEntry:
        with self._lock:
            self._sequence += 1
            stored = BankEntry(
                entry_id=str(uuid4()),
                vessel_id=entry.vessel_id,
                year=entry.year,
                amount_g=entry.amount_g,
                sequence=self._sequence,
                created_at=_utcnow(),
            )
            self._entries.setdefault((entry.vessel_id, entry.year), []).append(stored)
            return stored

    def key_lock(self, vessel_id: str, year: int) -> threading.Lock:
        with self._lock:
            return self._key_locks.setdefault((vessel_id, year), threading.Lock())

    def clear(self) -> None:
        """Clear all entries. Useful for testing."""
        with self._lock:
            self._entries.clear()
            self._sequence = 0


class InMemoryPoolStore:
    """Thread-safe in-memory pool history, in creation order."""

    def __init__(self) -> None:
        self._pools: dict[str, Pool] = {}
        self._lock = threading.Lock()

    def create_pool(self, year: int, members: list[PoolMember]) -> Pool:
        pool = Pool(
            pool_id=str(uuid4()),
            year=year,
            created_at=_utcnow(),
            members=list(members),
        )
        with self._lock:
            self._pools[pool.pool_id] = pool
        return pool

    def get_pool(self, pool_id: str) -> Pool:
        with self._lock:
            pool = self._pools.get(pool_id)
        if pool is None:
            raise NotFoundError(f"Pool {pool_id} not found")
        return pool

    def list_pools(self, year: Optional[int] = None) -> list[Pool]:
        with self._lock:
            pools = list(self._pools.values())

        if year is not None:
            pools = [p for p in pools if p.year == year]
        return pools

    def clear(self) -> None:
        """Clear all pools. Useful for testing."""
        with self._lock:
            self._pools.clear()


class InMemoryComplianceStore:
    """Thread-safe in-memory compliance snapshots."""

    def __init__(self) -> None:
        self._snapshots: dict[tuple[str, int], list[ComplianceSnapshot]] = {}
        self._lock = threading.Lock()

    def record(self, vessel_id: str, year: int, cb_g: float) -> ComplianceSnapshot:
        snapshot = ComplianceSnapshot(
            vessel_id=vessel_id, year=year, cb_g=cb_g, recorded_at=_utcnow()
        )
        with self._lock:
            self._snapshots.setdefault((vessel_id, year), []).append(snapshot)
        return snapshot

    def latest(self, vessel_id: str, year: int) -> Optional[ComplianceSnapshot]:
        with self._lock:
            snapshots = self._snapshots.get((vessel_id, year))
            return snapshots[-1] if snapshots else None

    def clear(self) -> None:
        """Clear all snapshots. Useful for testing."""
        with self._lock:
            self._snapshots.clear()
