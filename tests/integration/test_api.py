"""Integration tests for API endpoints"""

from fastapi.testclient import TestClient
from ledger_seeder.domain.exceptions import AuthError, RemoteError


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "ledger_seeder_runs_total" in response.text


def test_request_id_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"
    assert client.get("/health").headers["X-Request-ID"]


def test_preview_defaults(client: TestClient):
    """Test POST /v1/preview with default accounts: checking, savings, credit, investment"""
    response = client.post("/v1/preview", json={})

    assert response.status_code == 200
    data = response.json()
    assert data["total_income"] == "$4,075.50"
    assert data["total_expenses"] == "$2,331.48"
    assert data["total_transactions"] == 33
    assert data["automatic_payments"] == ["Credit Card Payment: $36.75/month on the 5th"]
    assert len(data["accounts"]) == 4


def test_preview_rejects_out_of_range(client: TestClient):
    assert client.post("/v1/preview", json={"months": 0}).status_code == 422
    assert client.post("/v1/preview", json={"item_count": 500}).status_code == 422
    assert client.post("/v1/preview", json={"accounts": [{"type": "boat", "balance": 1}]}).status_code == 422


def test_validate_endpoint(client: TestClient):
    response = client.post("/v1/validate", json={"api_key": "key"})

    assert response.status_code == 200
    data = response.json()
    assert data["valid"] is True
    assert data["user_name"] == "Demo User"
    assert data["empty"] is True
    assert data["transaction_count"] == 0


def test_validate_endpoint_invalid_key(client: TestClient, fake_ledger):
    fake_ledger.auth_error = AuthError("HTTP 401: Access token does not exist.", status_code=401)

    response = client.post("/v1/validate", json={"api_key": "bad"})

    assert response.status_code == 401
    assert "Invalid API key" in response.json()["detail"]


def test_validate_endpoint_ledger_down(client: TestClient, fake_ledger):
    fake_ledger.auth_error = RemoteError("Ledger API unreachable: connection refused")

    response = client.post("/v1/validate", json={"api_key": "key"})

    assert response.status_code == 502


def test_run_endpoint(client: TestClient, fake_ledger):
    """Test POST /v1/runs end to end against the in-memory ledger"""
    response = client.post(
        "/v1/runs",
        json={
            "api_key": "key",
            "months": 2,
            "item_count": 3,
            "accounts": [{"type": "checking", "balance": "1000"}],
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["created"] == 6
    assert data["account_name"] == "Demo Checking Account"
    assert data["progress"][0]["phase"] == "start"
    assert "Demo Checking Account" in data["created_accounts"]
    assert data["progress"][-1]["phase"] == "complete"
    assert sum(len(batch) for batch in fake_ledger.batches) == 6


def test_run_endpoint_partial_failure(client: TestClient, fake_ledger):
    fake_ledger.fail_batch = 1

    response = client.post(
        "/v1/runs",
        json={"api_key": "key", "months": 1, "item_count": 2, "accounts": [{"type": "checking", "balance": 100}]},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is False
    assert data["created"] == 0
    assert "Batch 1/1" in data["error"]


def test_run_endpoint_requires_api_key(client: TestClient, monkeypatch):
    monkeypatch.setattr("ledger_seeder.api.v1.runs.settings.ledger_api_key", None)

    response = client.post("/v1/runs", json={"months": 1, "item_count": 1})

    assert response.status_code == 400


def test_run_endpoint_rejects_month_cap(client: TestClient, fake_ledger):
    response = client.post("/v1/runs", json={"api_key": "key", "months": 120, "item_count": 1})

    assert response.status_code == 422
    assert fake_ledger.calls == []


def test_run_endpoint_rejects_oversized_accounts(client: TestClient, fake_ledger):
    oversized = [
        {"type": "checking", "balance": "1E+27"},
        {"type": "loan", "balance": -1000, "interest_rate": 1000},
        {"type": "loan", "balance": -1000, "term_months": 5_000_000},
    ]
    for account in oversized:
        response = client.post("/v1/runs", json={"api_key": "key", "months": 1, "item_count": 1, "accounts": [account]})
        assert response.status_code == 422

    assert fake_ledger.calls == []


def test_preview_rejects_oversized_accounts(client: TestClient):
    response = client.post("/v1/preview", json={"accounts": [{"type": "mortgage", "balance": "-1E+16"}]})
    assert response.status_code == 422

    response = client.post(
        "/v1/preview",
        json={"accounts": [{"type": "mortgage", "balance": -300000, "interest_rate": 100, "term_months": 1200}]},
    )
    assert response.status_code == 200
