"""Recurring-pattern summary over transactions read back from the ledger"""

from typing import Dict, Iterable, List

from ledger_seeder.domain.models import LedgerTransaction, RecurringPattern

SUGGESTED = "suggested"


def summarize_recurring(transactions: Iterable[LedgerTransaction]) -> List[RecurringPattern]:
    """
    Group suggested recurring transactions by recurring id.

    Patterns are returned in the order their first transaction appears.
    """
    counts: Dict[int, int] = {}
    first_seen: Dict[int, LedgerTransaction] = {}

    for txn in transactions:
        if txn.recurring_type != SUGGESTED or not txn.recurring_id:
            continue
        if txn.recurring_id not in first_seen:
            first_seen[txn.recurring_id] = txn
            counts[txn.recurring_id] = 0
        counts[txn.recurring_id] += 1

    return [
        RecurringPattern(payee=txn.recurring_payee, amount=txn.recurring_amount, count=counts[recurring_id])
        for recurring_id, txn in first_seen.items()
    ]
