"""Liability payment schedules: credit card minimums and annuity amortization"""

from decimal import Decimal
from typing import List

from ledger_seeder.domain.currency import get_currency
from ledger_seeder.domain.models import CREDIT, LOAN, MORTGAGE, AccountSpec, AmortizationState, PaymentSplit

# (annual rate percent, remaining term months)
DEFAULT_TERMS = {
    CREDIT: (Decimal("16"), None),
    LOAN: (Decimal("10"), 60),
    MORTGAGE: (Decimal("7"), 360),
}

CREDIT_MINIMUM_RATIO = Decimal("0.03")
CREDIT_MINIMUM_FLOOR = Decimal("25")
DAYS_PER_YEAR = 365
DAYS_PER_BILLING_CYCLE = 30

ORDER_OFFSET = "offset"
ORDER_CHRONOLOGICAL = "chronological"


def effective_rate(spec: AccountSpec) -> Decimal:
    if spec.interest_rate is not None:
        return spec.interest_rate
    return DEFAULT_TERMS[spec.type][0]


def effective_term(spec: AccountSpec) -> int:
    if spec.term_months is not None:
        return spec.term_months
    return DEFAULT_TERMS[spec.type][1] or 0


def format_term(months: int) -> str:
    """Remaining term for display: 359 -> '29yr 11mo'"""
    months = max(months, 0)
    return f"{months // 12}yr {months % 12}mo"


def credit_card_minimum(balance: Decimal, annual_rate: Decimal, currency: str) -> PaymentSplit:
    """
    Minimum payment on a revolving balance.

    Interest compounds daily over a 30-day cycle:
        daily_rate = rate / 100 / 365
        monthly_rate = (1 + daily_rate)^30 - 1
        payment = max(balance * 3%, 25) + balance * monthly_rate

    The balance is not reduced; every month is computed from the same balance.
    """
    cur = get_currency(currency)
    outstanding = abs(balance)
    daily_rate = annual_rate / 100 / DAYS_PER_YEAR
    monthly_rate = (1 + daily_rate) ** DAYS_PER_BILLING_CYCLE - 1

    interest = cur.quantize(outstanding * monthly_rate)
    minimum = cur.quantize(max(outstanding * CREDIT_MINIMUM_RATIO, CREDIT_MINIMUM_FLOOR))

    return PaymentSplit(
        payment=minimum + interest,
        interest=interest,
        principal=minimum,
        balance=outstanding,
    )


def annuity_payment(principal: Decimal, annual_rate: Decimal, term_months: int) -> Decimal:
    """
    Fixed monthly payment that retires `principal` over `term_months`.

        i = rate / 100 / 12
        payment = P * i * (1 + i)^n / ((1 + i)^n - 1)

    A zero rate or a non-positive term degrades to straight-line P / n.
    """
    monthly_rate = annual_rate / 100 / 12
    if monthly_rate <= 0 or term_months <= 0:
        return principal / max(term_months, 1)

    growth = (1 + monthly_rate) ** term_months
    return principal * monthly_rate * growth / (growth - 1)


def start_amortization(spec: AccountSpec) -> AmortizationState:
    """Per-run state for a loan or mortgage; payment is fixed from the starting balance"""
    cur = get_currency(spec.currency)
    principal = abs(spec.balance)
    rate = effective_rate(spec)
    term = effective_term(spec)

    return AmortizationState(
        balance=principal,
        original_balance=principal,
        monthly_rate=rate / 100 / 12,
        remaining_months=term,
        payment=cur.quantize(annuity_payment(principal, rate, term)),
    )


def apply_payment(state: AmortizationState, currency: str) -> PaymentSplit:
    """
    Split one fixed payment into interest and principal and advance the balance.

    The balance floors at zero and stays there; the scheduled payment does not change.
    """
    cur = get_currency(currency)
    interest = cur.quantize(state.balance * state.monthly_rate)
    principal = state.payment - interest
    remaining = state.remaining_months

    state.balance = max(Decimal("0"), state.balance - principal)
    state.remaining_months -= 1

    return PaymentSplit(
        payment=state.payment,
        interest=interest,
        principal=principal,
        balance=cur.quantize(state.balance),
        remaining_months=remaining,
    )


def payment_schedule(spec: AccountSpec, months: int, order: str = ORDER_OFFSET) -> List[PaymentSplit]:
    """
    One PaymentSplit per month offset (index 0 = most recent month).

    With ORDER_OFFSET the starting balance belongs to the most recent month and
    amortizes as the offset grows, i.e. the balance shrinks going back in time.
    With ORDER_CHRONOLOGICAL the oldest generated month starts from the given
    balance and the most recent month carries the most amortized split.
    """
    if not spec.is_liability or months <= 0:
        return []

    if spec.type == CREDIT:
        split = credit_card_minimum(spec.balance, effective_rate(spec), spec.currency)
        return [split for _ in range(months)]

    state = start_amortization(spec)
    splits = [apply_payment(state, spec.currency) for _ in range(months)]

    if order == ORDER_CHRONOLOGICAL:
        splits.reverse()
    return splits
