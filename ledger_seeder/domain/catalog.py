"""Static seed tables: recurring items, international items, categories, account templates"""

from decimal import Decimal
from types import MappingProxyType
from typing import Mapping, Tuple

from ledger_seeder.domain.models import (
    CASH,
    CHECKING,
    CREDIT,
    INVESTMENT,
    LOAN,
    MORTGAGE,
    SAVINGS,
    RecurringItemTemplate,
)

RECURRING_ITEMS: Tuple[RecurringItemTemplate, ...] = (
    # Income
    RecurringItemTemplate("ABC Company", Decimal("3250.00"), 1, "Income", "Salary Deposit"),
    RecurringItemTemplate("Freelance Client", Decimal("825.50"), 15, "Income", "Freelance Payment"),
    # Expenses
    RecurringItemTemplate("Oakwood Properties", Decimal("-1450.00"), 3, "Housing", "Rent Payment"),
    RecurringItemTemplate("Speedy Internet", Decimal("-79.99"), 7, "Utilities", "Internet Bill"),
    RecurringItemTemplate("MobileTalk", Decimal("-85.25"), 12, "Utilities", "Phone Bill"),
    RecurringItemTemplate("FitLife Gym", Decimal("-45.00"), 18, "Subscriptions", "Gym Membership"),
    RecurringItemTemplate("StreamFlix", Decimal("-19.99"), 21, "Entertainment", "Streaming Service"),
    RecurringItemTemplate("EdFinance", Decimal("-315.75"), 24, "Education", "Student Loan Payment"),
    RecurringItemTemplate("Safe Auto", Decimal("-135.50"), 27, "Transportation", "Car Insurance"),
    RecurringItemTemplate("Savings Account", Decimal("-200.00"), 30, "Savings", "Savings Transfer"),
    RecurringItemTemplate("City Water Dept", Decimal("-42.30"), 9, "Utilities", "Water Bill"),
    RecurringItemTemplate("PowerGrid Energy", Decimal("-96.40"), 14, "Utilities", "Electricity Bill"),
    RecurringItemTemplate("FreshBox Meals", Decimal("-64.99"), 10, "Groceries", "Meal Kit Subscription"),
    RecurringItemTemplate("CloudVault", Decimal("-9.99"), 31, "Subscriptions", "Cloud Storage"),
    RecurringItemTemplate("SoundWave Music", Decimal("-10.99"), 28, "Entertainment", "Music Streaming"),
)

INTERNATIONAL_ITEMS: Mapping[str, Tuple[RecurringItemTemplate, ...]] = MappingProxyType({
    "eur": (
        RecurringItemTemplate("Stadtwerke Berlin", Decimal("-68.50"), 6, "Utilities", "Strom und Gas", "eur", "international"),
        RecurringItemTemplate("Deutsche Bahn", Decimal("-49.00"), 2, "Transportation", "Deutschlandticket", "eur", "international"),
        RecurringItemTemplate("Vodafone DE", Decimal("-29.99"), 16, "Utilities", "Mobilfunk", "eur", "international"),
    ),
    "gbp": (
        RecurringItemTemplate("Thames Water", Decimal("-38.20"), 8, "Utilities", "Water Bill", "gbp", "international"),
        RecurringItemTemplate("Council Tax", Decimal("-145.00"), 1, "Housing", "Council Tax", "gbp", "international"),
        RecurringItemTemplate("TfL Travelcard", Decimal("-156.30"), 25, "Transportation", "Monthly Travelcard", "gbp", "international"),
    ),
    "jpy": (
        RecurringItemTemplate("Tokyo Gas", Decimal("-8500"), 10, "Utilities", "Gas Bill", "jpy", "international"),
        RecurringItemTemplate("NTT Docomo", Decimal("-6380"), 26, "Utilities", "Mobile Phone", "jpy", "international"),
        RecurringItemTemplate("JR East Commuter Pass", Decimal("-12340"), 4, "Transportation", "Commuter Pass", "jpy", "international"),
    ),
    "cad": (
        RecurringItemTemplate("Hydro One", Decimal("-112.45"), 11, "Utilities", "Hydro Bill", "cad", "international"),
        RecurringItemTemplate("Rogers", Decimal("-85.00"), 19, "Utilities", "Internet and Mobile", "cad", "international"),
        RecurringItemTemplate("Presto", Decimal("-156.00"), 1, "Transportation", "Transit Pass", "cad", "international"),
    ),
})

# (name, is_income)
REQUIRED_CATEGORIES: Tuple[Tuple[str, bool], ...] = (
    ("Income", True),
    ("Housing", False),
    ("Utilities", False),
    ("Subscriptions", False),
    ("Entertainment", False),
    ("Education", False),
    ("Transportation", False),
    ("Savings", False),
    ("Groceries", False),
    ("Credit Card Payment", False),
    ("Loan Payment", False),
    ("Mortgage Payment", False),
)

# (payee, day, category, notes) of the automatic payment for each liability type
LIABILITY_PAYMENTS = MappingProxyType({
    CREDIT: ("Credit Card Payment", 5, "Credit Card Payment", "Monthly minimum payment"),
    LOAN: ("Loan Payment", 20, "Loan Payment", "Monthly loan payment"),
    MORTGAGE: ("Mortgage Payment", 1, "Mortgage Payment", "Monthly mortgage payment"),
})

# Ledger asset fields per account type; balance and currency are filled per run
ACCOUNT_TEMPLATES = MappingProxyType({
    CHECKING: {"type_name": "cash", "subtype_name": "checking", "name": "Demo Checking Account"},
    SAVINGS: {"type_name": "cash", "subtype_name": "savings", "name": "Demo Savings Account"},
    CREDIT: {"type_name": "credit", "subtype_name": "credit card", "name": "Demo Credit Card"},
    INVESTMENT: {"type_name": "investment", "subtype_name": "brokerage", "name": "Demo Investment Account"},
    LOAN: {"type_name": "loan", "subtype_name": None, "name": "Demo Loan Account"},
    CASH: {"type_name": "cash", "subtype_name": "cash", "name": "Demo Cash Account"},
    MORTGAGE: {"type_name": "loan", "subtype_name": "mortgage", "name": "Demo Mortgage Account"},
})
