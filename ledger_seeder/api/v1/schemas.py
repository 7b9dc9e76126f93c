"""Pydantic schemas for API request/response validation"""

from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from ledger_seeder.domain.generation import MAX_BALANCE, MAX_INTEREST_RATE, MAX_TERM_MONTHS
from ledger_seeder.domain.models import AccountSpec

AccountType = Literal["checking", "savings", "credit", "investment", "loan", "cash", "mortgage"]


class AccountSpecSchema(BaseModel):
    """Account to reuse or create before generating"""

    type: AccountType
    balance: Decimal = Field(..., gt=-MAX_BALANCE, lt=MAX_BALANCE, description="Signed balance, negative for liabilities")
    currency: str = Field("usd", min_length=3, max_length=3, description="ISO 4217 code")
    interest_rate: Optional[Decimal] = Field(None, ge=0, le=MAX_INTEREST_RATE, description="Annual rate in percent")
    term_months: Optional[int] = Field(None, ge=1, le=MAX_TERM_MONTHS, description="Remaining term for loans and mortgages")

    def to_domain(self) -> AccountSpec:
        return AccountSpec(
            type=self.type,
            balance=self.balance,
            currency=self.currency.lower(),
            interest_rate=self.interest_rate,
            term_months=self.term_months,
        )


def _default_accounts() -> List[AccountSpecSchema]:
    return [
        AccountSpecSchema(type="checking", balance=Decimal("5000")),
        AccountSpecSchema(type="savings", balance=Decimal("15000")),
        AccountSpecSchema(type="credit", balance=Decimal("-850")),
        AccountSpecSchema(type="investment", balance=Decimal("25000")),
    ]


class PreviewRequest(BaseModel):
    """Request body for POST /v1/preview"""

    months: int = Field(3, ge=1, description="Trailing months to generate")
    item_count: int = Field(10, ge=0, description="Recurring items taken from the catalog")
    accounts: List[AccountSpecSchema] = Field(default_factory=_default_accounts)


class RunRequest(PreviewRequest):
    """Request body for POST /v1/runs"""

    api_key: Optional[str] = Field(None, description="Ledger API key; falls back to configuration")


class ValidateRequest(BaseModel):
    """Request body for POST /v1/validate"""

    api_key: str = Field(..., min_length=1)


class ValidateResponse(BaseModel):
    """Response for POST /v1/validate"""

    valid: bool
    user_name: str
    user_email: str
    empty: bool
    transaction_count: int
    status_error: Optional[str] = None


class PreviewLineSchema(BaseModel):
    description: str
    amount: str
    schedule: str


class PreviewResponse(BaseModel):
    """Response for POST /v1/preview"""

    income: List[PreviewLineSchema]
    expenses: List[PreviewLineSchema]
    international: List[PreviewLineSchema]
    total_income: str
    total_expenses: str
    net_per_month: str
    total_transactions: int
    accounts: List[str]
    automatic_payments: List[str]


class PatternSchema(BaseModel):
    """Recurring group suggested by the ledger"""

    payee: Optional[str] = None
    amount: Optional[str] = None
    count: int


class DiagnosticSchema(BaseModel):
    """Generated item that was dropped"""

    payee: str
    period: str
    reason: str


class ProgressSchema(BaseModel):
    phase: str
    message: str
    percent: float


class RunResponse(BaseModel):
    """Response for POST /v1/runs"""

    success: bool
    created: int
    months: int
    item_count: int
    account_name: Optional[str] = None
    patterns: List[PatternSchema] = []
    diagnostics: List[DiagnosticSchema] = []
    progress: List[ProgressSchema] = []
    created_accounts: List[str] = []
    error: Optional[str] = None
