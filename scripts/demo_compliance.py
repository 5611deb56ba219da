"""
Demo: Compliance workflow on the reference routes

Walks the seeded routes through the full accounting pipeline:
- Compliance balance per route
- Comparison against the baseline route
- Banking a surplus (R002) and a rejected apply on an empty bank (R001)
- Pooling the 2024 fleet

Usage:
    python -m scripts.demo_compliance
"""

from fuelbank.exceptions import ComplianceError
from fuelbank.models import PoolMemberInput
from fuelbank.seed import seed_routes
from fuelbank.service import create_in_memory_service


def tonnes(grams: float) -> str:
    return f"{grams / 1e6:,.2f} t"


def main() -> None:
    service = create_in_memory_service(seed_routes())

    print("=" * 80)
    print("COMPLIANCE BALANCES")
    print("=" * 80)
    for route in service.list_routes():
        cb = service.compute_balance(route.vessel_id)
        print(
            f"{route.vessel_id} ({route.year}, {route.fuel_type}): "
            f"{cb.balance_g:>16,.0f} g  ({tonnes(cb.balance_g)})  {cb.status.value}"
        )

    print("\n" + "=" * 80)
    print("COMPARISON AGAINST BASELINE")
    print("=" * 80)
    comparison = service.compare_to_baseline()
    print(f"Baseline: {comparison.baseline.vessel_id} @ {comparison.baseline.ghg_intensity}")
    for row in comparison.rows:
        flag = "compliant" if row.compliant else "non-compliant"
        print(f"{row.vessel_id}: {row.percent_diff:+.2f}%  {flag}")

    print("\n" + "=" * 80)
    print("BANKING")
    print("=" * 80)
    banked = service.bank("R002", 2024)
    print(f"R002 banked {tonnes(banked.amount_banked_g)}")
    try:
        service.apply("R001", 2024)
    except ComplianceError as e:
        print(f"R001 apply rejected [{e.code}]: {e}")

    print("\n" + "=" * 80)
    print("POOLING 2024")
    print("=" * 80)
    members = [
        PoolMemberInput(ship_id=a.vessel_id, cb_before_g=a.adjusted_cb_g)
        for a in service.adjusted_balances(2024)
    ]
    try:
        pool = service.create_pool(2024, members)
    except ComplianceError as e:
        print(f"Pool rejected [{e.code}]: {e}")
        return

    for member in pool.members:
        print(f"{member.ship_id}: {tonnes(member.cb_before_g)} -> {tonnes(member.cb_after_g)}")


if __name__ == "__main__":
    main()
