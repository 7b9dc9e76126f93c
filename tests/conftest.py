"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional
from fastapi.testclient import TestClient
from ledger_seeder.api.dependencies import get_client_factory
from ledger_seeder.api.main import create_app
from ledger_seeder.domain.exceptions import RemoteError
from ledger_seeder.domain.models import AccountSpec, Asset, Category, LedgerTransaction, LedgerUser
from ledger_seeder.domain.registries import AccountRegistry, CategoryRegistry
from ledger_seeder.domain.catalog import REQUIRED_CATEGORIES


class FakeLedgerClient:
    """In-memory stand-in for LedgerClient recording every call"""

    def __init__(
        self,
        assets: Optional[List[Asset]] = None,
        categories: Optional[List[Category]] = None,
        transactions: Optional[List[LedgerTransaction]] = None,
    ):
        self.assets = list(assets or [])
        self.categories = list(categories or [])
        self.transactions = list(transactions or [])
        self.created_assets: List[Dict[str, Any]] = []
        self.created_categories: List[tuple] = []
        self.batches: List[List[Dict[str, Any]]] = []
        self.listed_ranges: List[tuple] = []
        self.calls: List[str] = []
        self.auth_error: Optional[RemoteError] = None
        self.fail_setup = False
        self.fail_listing = False
        self.fail_batch: Optional[int] = None
        self._next_id = 100

    def _id(self) -> int:
        self._next_id += 1
        return self._next_id

    async def get_current_user(self) -> LedgerUser:
        self.calls.append("get_current_user")
        if self.auth_error:
            raise self.auth_error
        return LedgerUser(name="Demo User", email="demo@example.com")

    async def list_assets(self) -> List[Asset]:
        self.calls.append("list_assets")
        if self.fail_setup:
            raise RemoteError("HTTP 500: assets unavailable", status_code=500)
        return list(self.assets)

    async def create_asset(self, spec: Dict[str, Any]) -> int:
        self.calls.append("create_asset")
        self.created_assets.append(spec)
        return self._id()

    async def list_categories(self) -> List[Category]:
        self.calls.append("list_categories")
        return list(self.categories)

    async def create_category(self, name: str, is_income: bool = False) -> int:
        self.calls.append("create_category")
        self.created_categories.append((name, is_income))
        return self._id()

    async def list_transactions(self, start_date: str, end_date: str) -> List[LedgerTransaction]:
        self.calls.append("list_transactions")
        self.listed_ranges.append((start_date, end_date))
        if self.fail_listing:
            raise RemoteError("HTTP 502: bad gateway", status_code=502)
        return list(self.transactions)

    async def create_transactions(self, records: List[Dict[str, Any]]) -> List[int]:
        self.calls.append("create_transactions")
        self.batches.append(records)
        if self.fail_batch == len(self.batches):
            raise RemoteError("HTTP 500: insert failed", status_code=500)
        return [self._id() for _ in records]


@pytest.fixture
def fake_ledger() -> FakeLedgerClient:
    return FakeLedgerClient()


@pytest.fixture
def january() -> date:
    """Generation anchor in January, so one month back crosses the year"""
    return date(2025, 1, 15)


@pytest.fixture
def categories() -> CategoryRegistry:
    """Every required category registered with ids 1..n"""
    return CategoryRegistry({name: i for i, (name, _) in enumerate(REQUIRED_CATEGORIES, start=1)})


@pytest.fixture
def routing() -> AccountRegistry:
    """Primary usd account 501, eur account 502"""
    return AccountRegistry("usd", {"usd": 501, "eur": 502})


@pytest.fixture
def mortgage() -> AccountSpec:
    return AccountSpec(type="mortgage", balance=Decimal("-300000"), interest_rate=Decimal("6"), term_months=360)


@pytest.fixture
def client(fake_ledger: FakeLedgerClient) -> TestClient:
    """Create FastAPI test client backed by the in-memory ledger"""
    app = create_app()
    app.dependency_overrides[get_client_factory] = lambda: (lambda api_key: fake_ledger)
    return TestClient(app)
