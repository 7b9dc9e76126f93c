"""Ledger API HTTP client for accounts, categories and transactions"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import httpx

from ledger_seeder.config import settings
from ledger_seeder.domain.exceptions import AuthError, RemoteError
from ledger_seeder.domain.models import Asset, Category, LedgerTransaction, LedgerUser
from ledger_seeder.infrastructure.observability.metrics import (
    ledger_request_failures_counter,
    ledger_request_histogram,
)

logger = logging.getLogger(__name__)

MAX_ERROR_TEXT = 500


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


class LedgerClient:
    """Client for the personal-finance ledger REST API"""

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = (base_url or settings.ledger_api_base).rstrip("/")
        self.timeout = timeout or settings.http_timeout_seconds
        self.max_retries = max(settings.request_max_retries, 1)
        self.backoff_base = settings.request_backoff_base
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Send one API call and decode its JSON body.

        Retry strategy:
        - GET only: creation calls are never repeated
        - Exponential backoff: base, 2x base, 4x base... (base * 2^(attempt-1))
        - Retries on 5xx errors and network failures

        Raises:
            AuthError: 401/403 from the API
            RemoteError: HTTP errors, timeouts, invalid JSON or an error payload
        """
        attempts = self.max_retries if method == "GET" else 1
        attempt = 0

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            while True:
                retryable = False
                try:
                    with ledger_request_histogram.labels(method=method, endpoint=endpoint).time():
                        response = await client.request(
                            method,
                            f"{self.base_url}/{endpoint}",
                            headers=self._headers(),
                            params=params,
                            json=body,
                        )
                    if response.status_code in (401, 403):
                        raise AuthError(
                            f"HTTP {response.status_code}: {response.text[:MAX_ERROR_TEXT]}",
                            status_code=response.status_code,
                        )
                    response.raise_for_status()
                    data = response.json()

                except AuthError:
                    ledger_request_failures_counter.labels(endpoint=endpoint).inc()
                    raise
                except httpx.HTTPStatusError as e:
                    status = e.response.status_code
                    retryable = status >= 500
                    error = RemoteError(f"HTTP {status}: {e.response.text[:MAX_ERROR_TEXT]}", status_code=status)
                    cause: Exception = e
                except httpx.TimeoutException as e:
                    retryable = True
                    error = RemoteError(f"Ledger API timeout after {self.timeout}s")
                    cause = e
                except httpx.RequestError as e:
                    retryable = True
                    error = RemoteError(f"Ledger API unreachable: {e}")
                    cause = e
                except ValueError as e:
                    ledger_request_failures_counter.labels(endpoint=endpoint).inc()
                    raise RemoteError(f"Invalid JSON from ledger API ({endpoint})") from e
                else:
                    if not isinstance(data, dict):
                        raise RemoteError(f"Unexpected response shape from ledger API ({endpoint})")
                    if data.get("error"):
                        raise RemoteError(f"Ledger API error: {data['error']}")
                    return data

                attempt += 1
                ledger_request_failures_counter.labels(endpoint=endpoint).inc()
                if not retryable or attempt >= attempts:
                    raise error from cause

                backoff = self.backoff_base * (2 ** (attempt - 1))
                logger.warning(
                    f"Retrying {method} {endpoint} in {backoff}s: {error}",
                    extra={"step": "ledger_request", "attempt": attempt},
                )
                await asyncio.sleep(backoff)

    async def get_current_user(self) -> LedgerUser:
        data = await self._request("GET", "me")
        try:
            return LedgerUser(name=data["user_name"], email=data["user_email"])
        except KeyError as e:
            raise RemoteError(f"Invalid user data from ledger: missing {e}") from e

    async def list_assets(self) -> List[Asset]:
        data = await self._request("GET", "assets")
        try:
            return [
                Asset(
                    id=asset["id"],
                    name=asset.get("display_name") or asset["name"],
                    type_name=asset["type_name"],
                    currency=(asset.get("currency") or settings.base_currency).lower(),
                    subtype_name=asset.get("subtype_name"),
                )
                for asset in data.get("assets", [])
            ]
        except (KeyError, TypeError, AttributeError) as e:
            raise RemoteError(f"Invalid asset data from ledger: {e}") from e

    async def create_asset(self, spec: Dict[str, Any]) -> int:
        data = await self._request("POST", "assets", body=spec)
        asset_id = data.get("asset_id") or data.get("id")
        if not asset_id:
            raise RemoteError(f"Ledger did not return an id for asset '{spec.get('name')}'")
        return asset_id

    async def list_categories(self) -> List[Category]:
        data = await self._request("GET", "categories")
        try:
            return [
                Category(id=cat["id"], name=cat["name"], is_income=bool(cat.get("is_income")))
                for cat in data.get("categories", [])
            ]
        except (KeyError, TypeError) as e:
            raise RemoteError(f"Invalid category data from ledger: {e}") from e

    async def create_category(self, name: str, is_income: bool = False) -> int:
        data = await self._request("POST", "categories", body={"name": name, "is_income": is_income})
        category_id = data.get("category_id")
        if not category_id:
            raise RemoteError(f"Failed to create category: {name}")
        return category_id

    async def list_transactions(self, start_date: str, end_date: str) -> List[LedgerTransaction]:
        data = await self._request("GET", "transactions", params={"start_date": start_date, "end_date": end_date})
        try:
            return [
                LedgerTransaction(
                    id=txn["id"],
                    date=txn["date"],
                    payee=txn.get("payee") or "",
                    amount=str(txn.get("amount", "")),
                    recurring_type=txn.get("recurring_type"),
                    recurring_id=txn.get("recurring_id"),
                    recurring_payee=_optional_str(txn.get("recurring_payee")),
                    recurring_amount=_optional_str(txn.get("recurring_amount")),
                )
                for txn in data.get("transactions", [])
            ]
        except (KeyError, TypeError) as e:
            raise RemoteError(f"Invalid transaction data from ledger: {e}") from e

    async def create_transactions(self, records: List[Dict[str, Any]]) -> List[int]:
        """Insert one batch; returns the ids the ledger assigned"""
        data = await self._request(
            "POST",
            "transactions",
            body={
                "transactions": records,
                "apply_rules": True,
                "check_for_recurring": True,
                "debit_as_negative": True,
            },
        )
        ids = data.get("ids")
        if ids is None:
            raise RemoteError("Ledger response to transaction insert has no ids")
        return ids
