"""Pure functions for the virtual reserve.

The reserve is never stored. It is recomputed from the full ledger every
time it is needed, so it always reflects the latest mutation.
"""

from ridecalc.domain.ledger import Ledger
from ridecalc.domain.models import Money


def committed_savings(ledger: Ledger) -> Money:
    """Savings from profitable days that have been committed to the reserve.

    A record whose flag is None predates the flag and counts as committed.
    """
    pct = ledger.config.savings_percentage
    return Money(
        sum(
            r.savings_amount(pct)
            for r in ledger.records.values()
            if r.profit > 0 and r.saved_to_reserve is not False
        )
    )


def pending_savings(ledger: Ledger) -> Money:
    """Savings earmarked by profitable days that are not yet committed."""
    pct = ledger.config.savings_percentage
    return Money(
        sum(r.savings_amount(pct) for r in ledger.records.values() if r.profit > 0 and r.saved_to_reserve is False)
    )


def maintenance_spent(ledger: Ledger) -> Money:
    """Total cost of completed maintenance, debited from the reserve."""
    return Money(sum(m.cost for m in ledger.maintenance if m.is_completed))


def reserve_balance(ledger: Ledger) -> Money:
    """Calculate the virtual reserve balance.

    Args:
        ledger: Current ledger.

    Returns:
        Committed savings minus completed maintenance costs (can be negative).
    """
    return Money(committed_savings(ledger) - maintenance_spent(ledger))
