"""Currency precision, display symbols and amount formatting"""

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Union

from ledger_seeder.domain.exceptions import ValidationError

_CODE_PATTERN = re.compile(r"^[a-z]{3}$")


@dataclass(frozen=True)
class Currency:
    """Currency definition with display symbol and minor-unit precision"""

    code: str
    symbol: str
    decimals: int = 2

    def quantize(self, amount: Decimal) -> Decimal:
        """Round to currency precision (half up, as ledgers display it)"""
        quantum = Decimal("1").scaleb(-self.decimals)  # 0.01 for 2 dp, 1 for 0 dp
        return amount.quantize(quantum, rounding=ROUND_HALF_UP)


CURRENCIES: Dict[str, Currency] = {
    "usd": Currency("usd", "$"),
    "eur": Currency("eur", "€"),
    "gbp": Currency("gbp", "£"),
    "cad": Currency("cad", "CA$"),
    "aud": Currency("aud", "A$"),
    "jpy": Currency("jpy", "¥", decimals=0),
}


def normalize_code(code: str) -> str:
    """Lower-case ISO 4217 code as the ledger API expects it"""
    normalized = (code or "").strip().lower()
    if not _CODE_PATTERN.match(normalized):
        raise ValidationError(f"Invalid currency code: {code!r}")
    return normalized


def get_currency(code: str) -> Currency:
    """Currency by code; unknown codes get two decimals and the code as symbol"""
    normalized = normalize_code(code)
    if normalized not in CURRENCIES:
        return Currency(normalized, normalized.upper() + " ")
    return CURRENCIES[normalized]


def to_decimal(value: Union[Decimal, float, int, str]) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() first so 0.1 stays 0.1 instead of its binary expansion
    return Decimal(str(value))


def quantize(amount: Union[Decimal, float, int, str], code: str) -> Decimal:
    return get_currency(code).quantize(to_decimal(amount))


def format_amount(amount: Union[Decimal, float, int, str], code: str) -> str:
    """Plain fixed-point string with the currency's decimals, no symbol"""
    currency = get_currency(code)
    return f"{currency.quantize(to_decimal(amount)):.{currency.decimals}f}"


def format_currency(amount: Union[Decimal, float, int, str], code: str) -> str:
    """
    Display form: sign, symbol, grouped absolute value.

    Example:
        format_currency(-1234.5, "usd") -> "-$1,234.50"
        format_currency(-1234.5, "jpy") -> "-¥1,235"
    """
    currency = get_currency(code)
    value = currency.quantize(to_decimal(amount))
    sign = "-" if value < 0 else ""
    return f"{sign}{currency.symbol}{abs(value):,.{currency.decimals}f}"
