"""Unit tests for the run preview"""

import pytest
from decimal import Decimal
from ledger_seeder.domain.exceptions import ValidationError
from ledger_seeder.domain.models import AccountSpec
from ledger_seeder.domain.preview import build_preview


def test_preview_totals():
    accounts = [
        AccountSpec(type="checking", balance=Decimal("5000")),
        AccountSpec(type="credit", balance=Decimal("-850")),
    ]
    preview = build_preview(3, 10, accounts)

    assert len(preview.income) == 2
    assert len(preview.expenses) == 8
    assert preview.total_income == "$4,075.50"
    assert preview.total_expenses == "$2,331.48"
    assert preview.net_per_month == "$1,744.02"
    assert preview.total_transactions == 33
    assert preview.accounts == ["Demo Checking Account: $5,000.00", "Demo Credit Card: -$850.00"]
    assert preview.automatic_payments == ["Credit Card Payment: $36.75/month on the 5th"]


def test_preview_lines():
    preview = build_preview(1, 3, [])

    assert preview.income[1].description == "Freelance Payment"
    assert preview.income[1].amount == "$825.50"
    assert preview.income[1].schedule == "on the 15th of each month"
    assert preview.expenses[0].schedule == "on the 3rd of each month"


def test_preview_mortgage_and_international():
    accounts = [
        AccountSpec(type="mortgage", balance=Decimal("-250000")),
        AccountSpec(type="checking", balance=Decimal("100000"), currency="jpy"),
    ]
    preview = build_preview(2, 6, accounts)

    assert preview.automatic_payments == ["Mortgage Payment: $1,663.26/month on the 1st"]
    assert [line.amount for line in preview.international] == ["¥8,500", "¥6,380"]
    assert preview.total_transactions == (6 + 1 + 2) * 2


def test_preview_validates_input():
    with pytest.raises(ValidationError):
        build_preview(0, 3, [])
