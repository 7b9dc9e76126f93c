"""Seeding run orchestration: setup, generation, batched submission, detection check"""

import logging
import time
import uuid
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import List, Optional, Sequence, Set, Tuple

from ledger_seeder.config import settings
from ledger_seeder.domain.catalog import ACCOUNT_TEMPLATES, RECURRING_ITEMS, REQUIRED_CATEGORIES
from ledger_seeder.domain.currency import format_amount, normalize_code
from ledger_seeder.domain.detection import summarize_recurring
from ledger_seeder.domain.exceptions import AuthError, RemoteError, ValidationError
from ledger_seeder.domain.generation import generate_transactions, split_batches, validate_run_request
from ledger_seeder.domain.models import (
    CASH,
    CHECKING,
    CREDIT,
    INVESTMENT,
    LOAN,
    MORTGAGE,
    SAVINGS,
    AccountSpec,
    Asset,
    GeneratedTransaction,
    GenerationResult,
    LedgerUser,
    RecurringItemTemplate,
    RecurringPattern,
    RunResult,
)
from ledger_seeder.domain.progress import NullProgress, ProgressObserver
from ledger_seeder.domain.registries import AccountRegistry, CategoryRegistry
from ledger_seeder.infrastructure.clients.ledger import LedgerClient
from ledger_seeder.infrastructure.observability.logging import log_run
from ledger_seeder.infrastructure.observability.metrics import batch_failure_counter, record_run
from ledger_seeder.utils.date_utils import start_of_offset_month

logger = logging.getLogger(__name__)

# Records the ledger accepts in one insert call
MAX_BATCH_SIZE = 500


@dataclass
class KeyValidation:
    valid: bool
    user: Optional[LedgerUser] = None
    error: Optional[str] = None
    auth_failed: bool = False


@dataclass
class AccountStatus:
    empty: bool
    count: int
    error: Optional[str] = None


@dataclass
class SubmissionResult:
    created: int = 0
    batches: int = 0
    error: Optional[str] = None


@dataclass
class SetupResult:
    routing: AccountRegistry
    categories: CategoryRegistry
    created_accounts: List[str] = field(default_factory=list)


def account_types_for(asset: Asset) -> Set[str]:
    """Account types an existing ledger asset stands for, judged by its name"""
    name = asset.name.lower()
    types = set()
    if "checking" in name:
        types.add(CHECKING)
    if "savings" in name:
        types.add(SAVINGS)
    if "credit" in name:
        types.add(CREDIT)
    if "investment" in name:
        types.add(INVESTMENT)
    if "loan" in name and "mortgage" not in name:
        types.add(LOAN)
    if "mortgage" in name:
        types.add(MORTGAGE)
    if "cash" in name and "checking" not in name:
        types.add(CASH)
    return types


def is_checking(asset: Asset) -> bool:
    return asset.type_name == "cash" and "checking" in asset.name.lower()


def asset_payload(spec: AccountSpec, base_currency: str) -> dict:
    """Request body creating the ledger asset for an account spec"""
    currency = normalize_code(spec.currency)
    template = ACCOUNT_TEMPLATES[spec.type]
    name = template["name"]
    if currency != base_currency:
        name = f"{name} ({currency.upper()})"

    payload = {
        "type_name": template["type_name"],
        "name": name,
        "balance": format_amount(spec.balance, currency),
        "currency": currency,
    }
    if template["subtype_name"]:
        payload["subtype_name"] = template["subtype_name"]
    return payload


class SeedingRunner:
    """Populates a ledger account with demo accounts, categories and recurring transactions"""

    def __init__(
        self,
        client: LedgerClient,
        progress: Optional[ProgressObserver] = None,
        base_currency: str | None = None,
        batch_size: int | None = None,
        amortization_order: str | None = None,
        today: date | None = None,
        catalog: Sequence[RecurringItemTemplate] = RECURRING_ITEMS,
    ):
        self.client = client
        self.progress = progress or NullProgress()
        self.base_currency = normalize_code(base_currency or settings.base_currency)
        self.batch_size = min(batch_size or settings.batch_size, MAX_BATCH_SIZE)
        self.amortization_order = amortization_order or settings.amortization_order
        self.today = today
        self.catalog = catalog

    def _today(self) -> date:
        return self.today or date.today()

    async def validate_api_key(self) -> KeyValidation:
        try:
            user = await self.client.get_current_user()
            return KeyValidation(valid=True, user=user)
        except AuthError as e:
            return KeyValidation(valid=False, error=str(e), auth_failed=True)
        except RemoteError as e:
            return KeyValidation(valid=False, error=str(e))

    async def check_account_empty(self) -> AccountStatus:
        """Count transactions over the lookback window; count -1 when the check fails"""
        today = self._today()
        start = today - timedelta(days=settings.detection_lookback_days)
        try:
            transactions = await self.client.list_transactions(start.isoformat(), today.isoformat())
        except RemoteError as e:
            logger.error(f"Failed to check account status: {e}", extra={"step": "account_status"})
            return AccountStatus(empty=False, count=-1, error=str(e))
        return AccountStatus(empty=not transactions, count=len(transactions))

    async def setup_accounts(self, accounts: Sequence[AccountSpec]) -> Tuple[AccountRegistry, List[str]]:
        """
        Reuse matching ledger assets and create the missing ones.

        Checking accounts become the paying account for their currency; the
        base-currency checking account is the primary fallback.

        Raises:
            RemoteError: listing or creating an asset failed
        """
        self.progress.on_progress("setup", "Getting account information...", 10)
        assets = await self.client.list_assets()
        routing = AccountRegistry(self.base_currency)

        existing: Set[Tuple[str, str]] = set()
        for asset in assets:
            try:
                normalize_code(asset.currency)
            except ValidationError:
                logger.warning(f"Ignoring asset {asset.name} with currency {asset.currency!r}", extra={"step": "setup"})
                continue
            types = account_types_for(asset)
            if CHECKING in types and not is_checking(asset):
                # only cash assets can pay the generated items
                logger.warning(
                    f"Asset {asset.name} is of type {asset.type_name!r}, not a checking account",
                    extra={"step": "setup"},
                )
                types.discard(CHECKING)
            for account_type in types:
                existing.add((account_type, asset.currency))
            if is_checking(asset):
                routing.register(asset.currency, asset.id, asset.name)

        self.progress.on_progress("setup", "Checking for missing accounts...", 15)
        to_create = []
        for spec in accounts:
            key = (spec.type, normalize_code(spec.currency))
            if key in existing:
                continue
            existing.add(key)
            to_create.append((spec, asset_payload(spec, self.base_currency)))

        created = []
        if to_create:
            self.progress.on_progress("setup", f"Creating {len(to_create)} new account(s)...", 15)
        for spec, payload in to_create:
            self.progress.on_progress("setup", f"Creating {payload['name']}...", 15)
            asset_id = await self.client.create_asset(payload)
            created.append(payload["name"])
            if spec.type == CHECKING:
                routing.register(payload["currency"], asset_id, payload["name"])

        if routing.primary is None:
            logger.warning(
                f"No {self.base_currency} checking account found or created",
                extra={"step": "setup"},
            )
        else:
            self.progress.on_progress("setup", f"Using account: {routing.primary_name}", 20)
        return routing, created

    async def setup_categories(self) -> CategoryRegistry:
        """
        Reuse categories by exact name and create the missing ones.

        Raises:
            RemoteError: listing or creating a category failed
        """
        self.progress.on_progress("setup", "Setting up categories...", 30)
        existing = {cat.name: cat.id for cat in await self.client.list_categories()}
        registry = CategoryRegistry()

        for index, (name, is_income) in enumerate(REQUIRED_CATEGORIES):
            percent = 30 + 30 * index / len(REQUIRED_CATEGORIES)
            if existing.get(name):
                registry.register(name, existing[name])
                self.progress.on_progress("setup", f"Using existing category: {name}", percent)
            else:
                self.progress.on_progress("setup", f"Creating category: {name}...", percent)
                registry.register(name, await self.client.create_category(name, is_income))

        self.progress.on_progress("setup", "Categories ready!", 60)
        return registry

    async def setup(self, accounts: Sequence[AccountSpec]) -> SetupResult:
        routing, created = await self.setup_accounts(accounts)
        categories = await self.setup_categories()
        return SetupResult(routing=routing, categories=categories, created_accounts=created)

    def generate(
        self,
        months: int,
        item_count: int,
        accounts: Sequence[AccountSpec],
        setup: SetupResult,
    ) -> GenerationResult:
        return generate_transactions(
            months,
            item_count,
            accounts,
            setup.categories,
            setup.routing,
            today=self._today(),
            catalog=self.catalog,
            amortization_order=self.amortization_order,
            progress=self.progress,
        )

    async def insert_transactions(self, transactions: Sequence[GeneratedTransaction]) -> SubmissionResult:
        """
        Submit in sequential batches of at most batch_size.

        A failed batch stops the submission; batches already accepted stay
        created and are counted.
        """
        self.progress.on_progress("insert", "Creating transactions...", 80)
        batches = split_batches(list(transactions), self.batch_size)
        result = SubmissionResult()

        for number, batch in batches:
            self.progress.on_progress(
                "insert",
                f"Creating batch {number}/{len(batches)} ({len(batch)} transactions)...",
                80 + number / len(batches) * 15,
            )
            try:
                ids = await self.client.create_transactions([txn.to_payload() for txn in batch])
            except RemoteError as e:
                batch_failure_counter.inc()
                logger.error(
                    f"Batch {number}/{len(batches)} failed: {e}",
                    extra={"step": "insert", "batch": number, "created": result.created},
                )
                result.error = f"Batch {number}/{len(batches)} failed: {e}"
                return result

            result.created += len(ids)
            result.batches += 1
            logger.info(f"Created {len(ids)} transactions in batch {number}", extra={"step": "insert"})

        return result

    async def check_recurring_detection(self, months: int) -> List[RecurringPattern]:
        """Recurring groups the ledger suggested across the generated months"""
        self.progress.on_progress("check", "Checking recurring detection...", 95)
        today = self._today()
        start = start_of_offset_month(today, months - 1)
        try:
            transactions = await self.client.list_transactions(start.isoformat(), today.isoformat())
        except RemoteError as e:
            logger.warning(f"Recurring detection check failed: {e}", extra={"step": "check"})
            return []
        return summarize_recurring(transactions)

    async def run(self, months: int, item_count: int, accounts: Sequence[AccountSpec]) -> RunResult:
        """
        Full seeding run.

        Flow:
        1. Validate input (ValidationError propagates, nothing was sent)
        2. Reconcile accounts and categories
        3. Generate transactions for the trailing months
        4. Submit in batches
        5. Read back recurring suggestions

        Setup and submission failures come back as RunResult(success=False).
        """
        validate_run_request(months, item_count, accounts, self.catalog, settings.max_months_back)

        run_id = str(uuid.uuid4())
        start_time = time.time()
        generation = GenerationResult()
        created = 0

        def finish(result: RunResult) -> RunResult:
            duration_ms = (time.time() - start_time) * 1000
            record_run(result.success, len(generation.transactions), created, len(generation.diagnostics))
            log_run(
                run_id,
                result.success,
                months,
                item_count,
                len(generation.transactions),
                created,
                len(generation.diagnostics),
                duration_ms,
                result.error,
                result.created_accounts,
            )
            return result

        self.progress.on_progress("start", "Starting transaction generation...", 0)

        try:
            setup = await self.setup(accounts)
        except RemoteError as e:
            self.progress.on_progress("error", f"Error: {e}", 0)
            return finish(RunResult(success=False, months=months, item_count=item_count, error=str(e)))

        generation = self.generate(months, item_count, accounts, setup)
        submission = await self.insert_transactions(generation.transactions)
        created = submission.created

        if submission.error:
            self.progress.on_progress("error", f"Error: {submission.error}", 0)
            return finish(
                RunResult(
                    success=False,
                    created=created,
                    months=months,
                    item_count=item_count,
                    account_name=setup.routing.primary_name,
                    diagnostics=generation.diagnostics,
                    created_accounts=setup.created_accounts,
                    error=submission.error,
                )
            )

        patterns = await self.check_recurring_detection(months)
        self.progress.on_progress("complete", "Generation complete!", 100)

        return finish(
            RunResult(
                success=True,
                created=created,
                months=months,
                item_count=item_count,
                account_name=setup.routing.primary_name,
                patterns=patterns,
                diagnostics=generation.diagnostics,
                created_accounts=setup.created_accounts,
            )
        )
