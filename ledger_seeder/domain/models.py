"""Domain models - pure Python dataclasses representing seeding entities"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional

CHECKING = "checking"
SAVINGS = "savings"
CREDIT = "credit"
INVESTMENT = "investment"
LOAN = "loan"
CASH = "cash"
MORTGAGE = "mortgage"

ACCOUNT_TYPES = (CHECKING, SAVINGS, CREDIT, INVESTMENT, LOAN, CASH, MORTGAGE)
LIABILITY_TYPES = (CREDIT, LOAN, MORTGAGE)


@dataclass(frozen=True)
class RecurringItemTemplate:
    """Transaction that repeats on a fixed day of each month"""

    payee: str
    amount: Decimal  # major units, negative = debit
    day: int  # 1-31, clamped per month
    category: str
    notes: str
    currency: Optional[str] = None  # None = run base currency
    kind: str = "recurring"  # recurring | international | credit_payment | loan_payment | mortgage_payment


@dataclass(frozen=True)
class AccountSpec:
    """Account requested for a generation run"""

    type: str
    balance: Decimal  # negative = liability
    currency: str = "usd"
    interest_rate: Optional[Decimal] = None  # annual percent, 16.0 = 16%
    term_months: Optional[int] = None  # remaining term

    @property
    def is_liability(self) -> bool:
        return self.type in LIABILITY_TYPES and self.balance < 0


@dataclass
class AmortizationState:
    """Running balance for one liability account during a single run"""

    balance: Decimal
    original_balance: Decimal
    monthly_rate: Decimal
    remaining_months: int
    payment: Decimal


@dataclass(frozen=True)
class PaymentSplit:
    """One month of a liability payment schedule"""

    payment: Decimal
    interest: Decimal
    principal: Decimal
    balance: Decimal  # outstanding after this payment
    remaining_months: Optional[int] = None


@dataclass
class GeneratedTransaction:
    """Transaction record ready for submission to the ledger API"""

    date: str  # ISO yyyy-mm-dd
    amount: Decimal
    payee: str
    category_id: int
    asset_id: int
    notes: str
    currency: str
    status: str = "cleared"

    def to_payload(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "amount": str(self.amount),
            "payee": self.payee,
            "category_id": self.category_id,
            "asset_id": self.asset_id,
            "notes": self.notes,
            "currency": self.currency,
            "status": self.status,
        }


@dataclass(frozen=True)
class Diagnostic:
    """Item dropped during generation"""

    payee: str
    period: str  # yyyy-mm
    reason: str


@dataclass
class GenerationResult:
    """Output of one generation pass"""

    transactions: List[GeneratedTransaction] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)


@dataclass(frozen=True)
class LedgerUser:
    name: str
    email: str


@dataclass(frozen=True)
class Asset:
    """Manually-managed account as returned by the ledger API"""

    id: int
    name: str
    type_name: str
    currency: str
    subtype_name: Optional[str] = None


@dataclass(frozen=True)
class Category:
    id: int
    name: str
    is_income: bool = False


@dataclass(frozen=True)
class LedgerTransaction:
    """Existing transaction, with recurring-detection metadata when present"""

    id: int
    date: str
    payee: str
    amount: str
    recurring_type: Optional[str] = None
    recurring_id: Optional[int] = None
    recurring_payee: Optional[str] = None
    recurring_amount: Optional[str] = None


@dataclass(frozen=True)
class RecurringPattern:
    """Recurring group suggested by the ledger after submission"""

    payee: Optional[str]
    amount: Optional[str]
    count: int


@dataclass
class RunResult:
    """Outcome of a full seeding run"""

    success: bool
    created: int = 0
    months: int = 0
    item_count: int = 0
    account_name: Optional[str] = None
    patterns: List[RecurringPattern] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    created_accounts: List[str] = field(default_factory=list)
    error: Optional[str] = None
