"""
Pool allocation for FuelBank.

Greedy, deterministic redistribution of compliance balance among pooled
vessels. All functions are pure.

Key components:
- pool_total: Aggregate balance of a member set
- allocate: Greedy transfer from largest surplus to most negative deficit
"""

from fuelbank.config import POOL_TOLERANCE_G
from fuelbank.exceptions import PoolInfeasibleError
from fuelbank.models import PoolAllocation, PoolMemberInput


def pool_total(members: list[PoolMemberInput]) -> float:
    """Sum of cb_before_g across members."""
    return sum(m.cb_before_g for m in members)


def allocate(
    members: list[PoolMemberInput],
    tolerance: float = POOL_TOLERANCE_G,
) -> list[PoolAllocation]:
    """
    Redistribute surplus to cover deficits within a pool.

    Algorithm:
    1. Reject the pool if the members' balances sum below zero
    2. Surplus members sorted descending, deficit members ascending (most
       negative first); ties keep input order; zero members pass through
    3. Each deficit member draws min(available, need) from each surplus
       member in sorted order until its need is met
    4. Any residual need above tolerance means the pool is infeasible

    Transfers move grams between members without creating or destroying
    any, so sum(cb_after_g) == sum(cb_before_g).

    Args:
        members: Pool members with their pre-pool balances; ship ids are
            assumed unique (see fuelbank.validation.validate_pool_members)
        tolerance: Residual deficit (grams) accepted as covered

    Returns:
        One PoolAllocation per member, in input order

    Raises:
        PoolInfeasibleError: If the total is negative (before any transfer) or a
            deficit remains above tolerance after allocation
    """
    total = pool_total(members)
    if total < 0:
        raise PoolInfeasibleError(f"Pool invalid: total compliance balance {total} g is below zero")

    after = {m.ship_id: m.cb_before_g for m in members}

    surpluses = sorted((m for m in members if m.cb_before_g > 0), key=lambda m: -m.cb_before_g)
    deficits = sorted((m for m in members if m.cb_before_g < 0), key=lambda m: m.cb_before_g)

    for deficit in deficits:
        need = -after[deficit.ship_id]

        for surplus in surpluses:
            if need <= 0:
                break
            available = after[surplus.ship_id]
            if available <= 0:
                continue

            transfer = min(available, need)
            after[surplus.ship_id] = available - transfer
            if transfer == need:
                # Fully covered: pin to exact zero
                after[deficit.ship_id] = 0.0
                need = 0.0
            else:
                after[deficit.ship_id] += transfer
                need -= transfer

        if need > tolerance:
            raise PoolInfeasibleError(
                f"Could not cover deficit of ship {deficit.ship_id}: {need} g remaining"
            )

    return [PoolAllocation(ship_id=m.ship_id, cb_after_g=after[m.ship_id]) for m in members]
