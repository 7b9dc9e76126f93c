"""Transaction generation - recurring items, liability payments and currency routing per month"""

import logging
from datetime import date
from decimal import Decimal
from typing import List, Mapping, Optional, Sequence, Tuple

from ledger_seeder.domain.amortization import ORDER_CHRONOLOGICAL, ORDER_OFFSET, format_term, payment_schedule
from ledger_seeder.domain.catalog import INTERNATIONAL_ITEMS, LIABILITY_PAYMENTS, RECURRING_ITEMS
from ledger_seeder.domain.currency import format_currency, normalize_code, quantize, to_decimal
from ledger_seeder.domain.exceptions import ResolutionError, ValidationError
from ledger_seeder.domain.models import (
    ACCOUNT_TYPES,
    CREDIT,
    AccountSpec,
    Diagnostic,
    GeneratedTransaction,
    GenerationResult,
    PaymentSplit,
    RecurringItemTemplate,
)
from ledger_seeder.domain.progress import NullProgress, ProgressObserver
from ledger_seeder.domain.registries import AccountRegistry, CategoryRegistry
from ledger_seeder.utils.date_utils import month_for_offset, resolve_date

logger = logging.getLogger(__name__)

MAX_INTERNATIONAL_ITEMS = 3

# Upper bounds on account input
MAX_BALANCE = Decimal("1000000000000000")
MAX_INTEREST_RATE = Decimal("100")
MAX_TERM_MONTHS = 1200


def validate_template(template: RecurringItemTemplate) -> None:
    if not 1 <= template.day <= 31:
        raise ValidationError(f"{template.payee}: day-of-month must be 1-31, got {template.day}")
    if not template.category:
        raise ValidationError(f"{template.payee}: category is required")
    if template.currency is not None:
        normalize_code(template.currency)


def validate_account(spec: AccountSpec) -> None:
    """
    Reject account input the ledger or the payment math cannot handle.

    Bounds keep every quantized amount (payment, interest, balance) well
    inside Decimal's 28-digit precision.
    """
    if spec.type not in ACCOUNT_TYPES:
        raise ValidationError(f"Unknown account type: {spec.type!r}")
    normalize_code(spec.currency)

    balance = to_decimal(spec.balance)
    if not balance.is_finite() or abs(balance) >= MAX_BALANCE:
        raise ValidationError(f"{spec.type}: balance must be a finite amount below {MAX_BALANCE:,}, got {spec.balance}")
    if spec.interest_rate is not None:
        rate = to_decimal(spec.interest_rate)
        if not rate.is_finite() or rate < 0:
            raise ValidationError(f"{spec.type}: interest rate must be a non-negative number, got {spec.interest_rate}")
        if rate > MAX_INTEREST_RATE:
            raise ValidationError(f"{spec.type}: interest rate must be at most {MAX_INTEREST_RATE}%, got {rate}")
    if spec.term_months is not None:
        if spec.term_months < 1:
            raise ValidationError(f"{spec.type}: remaining term must be at least one month")
        if spec.term_months > MAX_TERM_MONTHS:
            raise ValidationError(
                f"{spec.type}: remaining term must be at most {MAX_TERM_MONTHS} months, got {spec.term_months}"
            )


def validate_run_request(
    months_back: int,
    item_count: int,
    accounts: Sequence[AccountSpec],
    catalog: Sequence[RecurringItemTemplate] = RECURRING_ITEMS,
    max_months_back: Optional[int] = None,
) -> None:
    """
    Reject malformed run input before anything talks to the ledger.

    Raises:
        ValidationError: months_back < 1 (or above max_months_back),
            item_count outside 0..len(catalog), or an invalid account/template
    """
    if isinstance(months_back, bool) or not isinstance(months_back, int) or months_back < 1:
        raise ValidationError(f"months_back must be a positive integer, got {months_back!r}")
    if max_months_back is not None and months_back > max_months_back:
        raise ValidationError(f"months_back must be at most {max_months_back}, got {months_back}")
    if isinstance(item_count, bool) or not isinstance(item_count, int) or not 0 <= item_count <= len(catalog):
        raise ValidationError(f"item_count must be between 0 and {len(catalog)}, got {item_count!r}")

    for template in catalog:
        validate_template(template)
    for spec in accounts:
        validate_account(spec)


def select_international_items(
    accounts: Sequence[AccountSpec],
    item_count: int,
    base_currency: str,
    international: Mapping[str, Sequence[RecurringItemTemplate]] = INTERNATIONAL_ITEMS,
) -> List[RecurringItemTemplate]:
    """Up to min(3, item_count // 3) items per non-base currency that has a template set"""
    limit = min(MAX_INTERNATIONAL_ITEMS, item_count // 3)
    if limit <= 0:
        return []

    selected: List[RecurringItemTemplate] = []
    seen = set()
    for spec in accounts:
        code = normalize_code(spec.currency)
        if code == base_currency or code in seen or code not in international:
            continue
        seen.add(code)
        selected.extend(international[code][:limit])
    return selected


def _payment_notes(spec: AccountSpec, split: PaymentSplit, label: str) -> str:
    if spec.type == CREDIT:
        return f"{label} (interest {format_currency(split.interest, spec.currency)})"
    notes = (
        f"{label}: principal {format_currency(split.principal, spec.currency)}, "
        f"interest {format_currency(split.interest, spec.currency)}"
    )
    if split.remaining_months is not None:
        notes += f", {format_term(split.remaining_months)} remaining"
    return notes


def liability_payment_items(
    accounts: Sequence[AccountSpec],
    months_back: int,
    order: str = ORDER_OFFSET,
) -> List[List[RecurringItemTemplate]]:
    """
    Payment item per liability account for every month offset.

    Returns a list indexed by month offset; each entry holds the payments
    of that month in account order.
    """
    per_month: List[List[RecurringItemTemplate]] = [[] for _ in range(months_back)]

    for spec in accounts:
        if not spec.is_liability:
            continue
        payee, day, category, label = LIABILITY_PAYMENTS[spec.type]
        currency = normalize_code(spec.currency)
        for offset, split in enumerate(payment_schedule(spec, months_back, order)):
            per_month[offset].append(
                RecurringItemTemplate(
                    payee=payee,
                    amount=-split.payment,
                    day=day,
                    category=category,
                    notes=_payment_notes(spec, split, label),
                    currency=currency,
                    kind=f"{spec.type}_payment",
                )
            )
    return per_month


def _emit(
    template: RecurringItemTemplate,
    year: int,
    month: int,
    base_currency: str,
    categories: CategoryRegistry,
    routing: AccountRegistry,
) -> GeneratedTransaction:
    currency = template.currency or base_currency
    return GeneratedTransaction(
        date=resolve_date(year, month, template.day),
        amount=quantize(template.amount, currency),
        payee=template.payee,
        category_id=categories.resolve(template.category, template.payee),
        asset_id=routing.resolve(currency, template.payee),
        notes=template.notes,
        currency=currency,
    )


def generate_transactions(
    months_back: int,
    item_count: int,
    accounts: Sequence[AccountSpec],
    categories: CategoryRegistry,
    routing: AccountRegistry,
    today: date,
    catalog: Sequence[RecurringItemTemplate] = RECURRING_ITEMS,
    international: Mapping[str, Sequence[RecurringItemTemplate]] = INTERNATIONAL_ITEMS,
    amortization_order: str = ORDER_OFFSET,
    progress: Optional[ProgressObserver] = None,
) -> GenerationResult:
    """
    Build every transaction for the trailing `months_back` months ending at `today`.

    Flow per month offset (0 = today's month, growing into the past):
    1. First `item_count` catalog items, in catalog order
    2. That month's liability payments (credit minimum, loan/mortgage annuity split)
    3. International items for non-base account currencies

    Output is grouped by month offset, most recent first, then by item order.
    Items whose category or account cannot be resolved are dropped and
    reported in `diagnostics`; they never fail the run.
    """
    validate_run_request(months_back, item_count, accounts, catalog)
    if amortization_order not in (ORDER_OFFSET, ORDER_CHRONOLOGICAL):
        raise ValidationError(f"Unknown amortization order: {amortization_order!r}")

    progress = progress or NullProgress()
    progress.on_progress("generate", "Generating transactions...", 70)

    base_currency = routing.base_currency
    base_items = list(catalog[:item_count])
    payments = liability_payment_items(accounts, months_back, amortization_order)
    extra_items = select_international_items(accounts, item_count, base_currency, international)

    result = GenerationResult()
    for offset in range(months_back):
        year, month = month_for_offset(today, offset)
        period = f"{year}-{month:02d}"

        for template in [*base_items, *payments[offset], *extra_items]:
            try:
                result.transactions.append(_emit(template, year, month, base_currency, categories, routing))
            except ResolutionError as e:
                result.diagnostics.append(Diagnostic(payee=e.payee, period=period, reason=e.reason))
                logger.warning(
                    f"Dropped {template.payee} for {period}: {e.reason}",
                    extra={"step": "generate", "payee": template.payee, "period": period},
                )

    logger.info(
        f"Generated {len(result.transactions)} transactions",
        extra={
            "step": "generate",
            "months_back": months_back,
            "item_count": item_count,
            "dropped": len(result.diagnostics),
        },
    )
    return result


def split_batches(items: Sequence, batch_size: int) -> List[Tuple[int, Sequence]]:
    """Consecutive chunks of at most batch_size, numbered from 1"""
    if batch_size < 1:
        raise ValidationError(f"batch_size must be positive, got {batch_size}")
    return [
        (number, items[start:start + batch_size])
        for number, start in enumerate(range(0, len(items), batch_size), start=1)
    ]
