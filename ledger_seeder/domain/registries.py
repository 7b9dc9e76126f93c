"""Name and currency lookups onto ledger-assigned identifiers"""

from typing import Dict, Mapping, Optional

from ledger_seeder.domain.currency import normalize_code
from ledger_seeder.domain.exceptions import ResolutionError


class CategoryRegistry:
    """Category name -> ledger category id, fixed for one run"""

    def __init__(self, ids: Optional[Mapping[str, int]] = None):
        self._ids: Dict[str, int] = dict(ids or {})

    def register(self, name: str, category_id: int) -> None:
        self._ids[name] = category_id

    def resolve(self, name: str, payee: str = "") -> int:
        category_id = self._ids.get(name)
        if not category_id:
            raise ResolutionError(payee or name, f"missing category id for '{name}'")
        return category_id

    def __contains__(self, name: str) -> bool:
        return bool(self._ids.get(name))


class AccountRegistry:
    """
    Currency code -> account id that pays items in that currency.

    Items in a currency without its own account fall back to the primary
    (base-currency) account. Without a primary account they cannot be routed.
    """

    def __init__(self, base_currency: str = "usd", ids: Optional[Mapping[str, int]] = None):
        self.base_currency = normalize_code(base_currency)
        self._ids: Dict[str, int] = {}
        self.primary_name: Optional[str] = None
        for code, asset_id in (ids or {}).items():
            self.register(code, asset_id)

    def register(self, currency: str, asset_id: int, name: Optional[str] = None) -> bool:
        """Register the paying account for a currency; first registration wins"""
        code = normalize_code(currency)
        if code in self._ids:
            return False
        self._ids[code] = asset_id
        if code == self.base_currency:
            self.primary_name = name
        return True

    @property
    def primary(self) -> Optional[int]:
        return self._ids.get(self.base_currency)

    def resolve(self, currency: str, payee: str = "") -> int:
        code = normalize_code(currency)
        asset_id = self._ids.get(code) or self.primary
        if not asset_id:
            raise ResolutionError(
                payee or code,
                f"no account registered for '{code}' and no primary '{self.base_currency}' account",
            )
        return asset_id

    def __contains__(self, currency: str) -> bool:
        return normalize_code(currency) in self._ids
