"""Dry-run summary of what a seeding run would create"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Sequence

from ledger_seeder.domain.amortization import payment_schedule
from ledger_seeder.domain.catalog import ACCOUNT_TEMPLATES, LIABILITY_PAYMENTS, RECURRING_ITEMS
from ledger_seeder.domain.currency import format_currency, normalize_code
from ledger_seeder.domain.generation import select_international_items, validate_run_request
from ledger_seeder.domain.models import AccountSpec, RecurringItemTemplate
from ledger_seeder.utils.date_utils import ordinal_suffix


@dataclass(frozen=True)
class PreviewLine:
    description: str
    amount: str
    schedule: str  # "on the 15th of each month"


@dataclass
class Preview:
    income: List[PreviewLine] = field(default_factory=list)
    expenses: List[PreviewLine] = field(default_factory=list)
    total_income: str = ""
    total_expenses: str = ""
    net_per_month: str = ""
    total_transactions: int = 0
    accounts: List[str] = field(default_factory=list)
    automatic_payments: List[str] = field(default_factory=list)
    international: List[PreviewLine] = field(default_factory=list)


def _line(template: RecurringItemTemplate, currency: str) -> PreviewLine:
    return PreviewLine(
        description=template.notes,
        amount=format_currency(abs(template.amount), currency),
        schedule=f"on the {template.day}{ordinal_suffix(template.day)} of each month",
    )


def build_preview(
    months: int,
    item_count: int,
    accounts: Sequence[AccountSpec],
    base_currency: str = "usd",
    catalog: Sequence[RecurringItemTemplate] = RECURRING_ITEMS,
) -> Preview:
    """
    Summarise a run without touching the ledger.

    Totals cover the selected catalog items in the base currency; automatic
    payments show the most recent month's amount per liability account.
    """
    validate_run_request(months, item_count, accounts, catalog)
    base_currency = normalize_code(base_currency)
    selected = list(catalog[:item_count])

    preview = Preview()
    total_income = Decimal("0")
    total_expenses = Decimal("0")
    for template in selected:
        currency = template.currency or base_currency
        if template.amount > 0:
            total_income += template.amount
            preview.income.append(_line(template, currency))
        else:
            total_expenses += abs(template.amount)
            preview.expenses.append(_line(template, currency))

    preview.total_income = format_currency(total_income, base_currency)
    preview.total_expenses = format_currency(total_expenses, base_currency)
    preview.net_per_month = format_currency(total_income - total_expenses, base_currency)

    payments = 0
    for spec in accounts:
        name = ACCOUNT_TEMPLATES[spec.type]["name"]
        preview.accounts.append(f"{name}: {format_currency(spec.balance, spec.currency)}")
        schedule = payment_schedule(spec, 1)
        if schedule:
            payee, day, _, _ = LIABILITY_PAYMENTS[spec.type]
            amount = format_currency(schedule[0].payment, spec.currency)
            preview.automatic_payments.append(f"{payee}: {amount}/month on the {day}{ordinal_suffix(day)}")
            payments += 1

    extra = select_international_items(accounts, item_count, base_currency)
    preview.international = [_line(t, t.currency or base_currency) for t in extra]

    preview.total_transactions = (len(selected) + payments + len(extra)) * months
    return preview
