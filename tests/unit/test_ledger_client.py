"""Unit tests for the ledger HTTP client"""

import asyncio
import json
import pytest
import httpx
from unittest.mock import AsyncMock, patch
from ledger_seeder.domain.exceptions import AuthError, RemoteError
from ledger_seeder.infrastructure.clients.ledger import LedgerClient

BASE_URL = "https://ledger.test/v1"


def make_client(handler) -> LedgerClient:
    return LedgerClient("secret-key", base_url=BASE_URL, timeout=1.0, transport=httpx.MockTransport(handler))


def test_get_current_user_sends_bearer_token():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"user_name": "Demo User", "user_email": "demo@example.com"})

    user = asyncio.run(make_client(handler).get_current_user())

    assert user.name == "Demo User"
    assert user.email == "demo@example.com"
    assert str(seen[0].url) == f"{BASE_URL}/me"
    assert seen[0].headers["Authorization"] == "Bearer secret-key"


def test_unauthorized_raises_auth_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text="Access token does not exist.")

    with pytest.raises(AuthError) as exc:
        asyncio.run(make_client(handler).get_current_user())

    assert exc.value.status_code == 401
    assert "Access token does not exist." in str(exc.value)


@patch("ledger_seeder.infrastructure.clients.ledger.asyncio.sleep", new_callable=AsyncMock)
def test_get_retries_server_errors(mock_sleep: AsyncMock):
    """Test GET retries 5xx with exponential backoff, then succeeds"""
    responses = [httpx.Response(503, text="busy"), httpx.Response(502, text="busy"), httpx.Response(200, json={"assets": []})]

    def handler(request: httpx.Request) -> httpx.Response:
        return responses.pop(0)

    assets = asyncio.run(make_client(handler).list_assets())

    assert assets == []
    assert mock_sleep.await_count == 2
    assert mock_sleep.await_args_list[1].args[0] == 2 * mock_sleep.await_args_list[0].args[0]


@patch("ledger_seeder.infrastructure.clients.ledger.asyncio.sleep", new_callable=AsyncMock)
def test_get_gives_up_after_max_retries(mock_sleep: AsyncMock):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(RemoteError) as exc:
        asyncio.run(make_client(handler).list_categories())

    assert "unreachable" in str(exc.value)
    assert len(calls) == 3


def test_post_is_not_retried():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(500, text="Internal error")

    with pytest.raises(RemoteError) as exc:
        asyncio.run(make_client(handler).create_transactions([{"payee": "x"}]))

    assert len(calls) == 1
    assert exc.value.status_code == 500
    assert "Internal error" in str(exc.value)


def test_client_error_is_not_retried():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(404, text="not found")

    with pytest.raises(RemoteError):
        asyncio.run(make_client(handler).list_assets())
    assert len(calls) == 1


def test_create_transactions_body_and_ids():
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"ids": [11, 12]})

    ids = asyncio.run(make_client(handler).create_transactions([{"payee": "a"}, {"payee": "b"}]))

    assert ids == [11, 12]
    assert bodies[0]["transactions"] == [{"payee": "a"}, {"payee": "b"}]
    assert bodies[0]["apply_rules"] is True
    assert bodies[0]["check_for_recurring"] is True
    assert bodies[0]["debit_as_negative"] is True


def test_create_transactions_without_ids_is_an_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"status": "ok"})

    with pytest.raises(RemoteError):
        asyncio.run(make_client(handler).create_transactions([{"payee": "a"}]))


def test_error_payload_is_an_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"error": ["Invalid category_id"]})

    with pytest.raises(RemoteError) as exc:
        asyncio.run(make_client(handler).create_category("Housing"))
    assert "Invalid category_id" in str(exc.value)


def test_invalid_json_is_an_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    with pytest.raises(RemoteError):
        asyncio.run(make_client(handler).list_assets())


def test_list_assets_parses_fields():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "assets": [
                    {"id": 5, "name": "checking", "display_name": "Main Checking", "type_name": "cash", "currency": "USD"},
                    {"id": 6, "name": "Demo Loan Account", "type_name": "loan", "currency": "eur", "subtype_name": None},
                ]
            },
        )

    assets = asyncio.run(make_client(handler).list_assets())

    assert [a.name for a in assets] == ["Main Checking", "Demo Loan Account"]
    assert [a.currency for a in assets] == ["usd", "eur"]


def test_list_assets_missing_fields_is_an_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"assets": [{"id": 5}]})

    with pytest.raises(RemoteError):
        asyncio.run(make_client(handler).list_assets())


def test_list_transactions_passes_range_and_recurring_fields():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "transactions": [
                    {
                        "id": 1,
                        "date": "2025-01-07",
                        "payee": "Speedy Internet",
                        "amount": "79.9900",
                        "recurring_type": "suggested",
                        "recurring_id": 4,
                        "recurring_payee": "Speedy Internet",
                        "recurring_amount": 79.99,
                    }
                ]
            },
        )

    transactions = asyncio.run(make_client(handler).list_transactions("2024-11-01", "2025-01-15"))

    assert seen[0].url.params["start_date"] == "2024-11-01"
    assert seen[0].url.params["end_date"] == "2025-01-15"
    assert transactions[0].recurring_id == 4
    assert transactions[0].recurring_amount == "79.99"


def test_create_asset_and_category_return_ids():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/assets"):
            return httpx.Response(200, json={"asset_id": 77})
        return httpx.Response(200, json={"category_id": 88})

    client = make_client(handler)

    assert asyncio.run(client.create_asset({"name": "Demo Checking Account"})) == 77
    assert asyncio.run(client.create_category("Housing")) == 88
