from collections import Counter
from itertools import count
import os

from fastapi import FastAPI, Header, HTTPException, Request

app = FastAPI(title="Mock Ledger Server", version="1.0.0")
API_KEY = os.environ.get("MOCK_LEDGER_API_KEY", "test-key")

_ids = count(1)
STATE = {"assets": [], "categories": [], "transactions": []}


def _authorize(authorization: str | None) -> None:
    if authorization != f"Bearer {API_KEY}":
        raise HTTPException(status_code=401, detail="Access token does not exist.")


@app.get("/health")
def health(): return {"status": "ok"}

@app.post("/reset")
def reset():
    for items in STATE.values():
        items.clear()
    return {"status": "ok"}

@app.get("/v1/me")
def me(authorization: str | None = Header(None)):
    _authorize(authorization)
    return {"user_name": "Demo User", "user_email": "demo@example.com"}

@app.get("/v1/assets")
def list_assets(authorization: str | None = Header(None)):
    _authorize(authorization)
    return {"assets": STATE["assets"]}

@app.post("/v1/assets")
async def create_asset(request: Request, authorization: str | None = Header(None)):
    _authorize(authorization)
    asset = {"id": next(_ids), **(await request.json())}
    STATE["assets"].append(asset)
    return {"asset_id": asset["id"]}

@app.get("/v1/categories")
def list_categories(authorization: str | None = Header(None)):
    _authorize(authorization)
    return {"categories": STATE["categories"]}

@app.post("/v1/categories")
async def create_category(request: Request, authorization: str | None = Header(None)):
    _authorize(authorization)
    body = await request.json()
    if any(c["name"] == body["name"] for c in STATE["categories"]):
        raise HTTPException(status_code=400, detail=f"Category {body['name']} already exists")
    category = {"id": next(_ids), "name": body["name"], "is_income": body.get("is_income", False)}
    STATE["categories"].append(category)
    return {"category_id": category["id"]}

@app.get("/v1/transactions")
def list_transactions(start_date: str, end_date: str, authorization: str | None = Header(None)):
    _authorize(authorization)
    # payee+amount pairs seen at least twice are suggested as recurring
    groups = Counter((t["payee"], t["amount"]) for t in STATE["transactions"])
    recurring_ids = {key: n for n, key in enumerate(sorted(k for k, c in groups.items() if c >= 2), start=1)}
    result = []
    for txn in STATE["transactions"]:
        if not start_date <= txn["date"] <= end_date:
            continue
        key = (txn["payee"], txn["amount"])
        if key in recurring_ids:
            txn = {**txn, "recurring_type": "suggested", "recurring_id": recurring_ids[key],
                   "recurring_payee": txn["payee"], "recurring_amount": txn["amount"]}
        result.append(txn)
    return {"transactions": result}

@app.post("/v1/transactions")
async def create_transactions(request: Request, authorization: str | None = Header(None)):
    _authorize(authorization)
    body = await request.json()
    if len(body.get("transactions", [])) > 500:
        raise HTTPException(status_code=400, detail="Too many transactions in one request")
    ids = []
    for txn in body.get("transactions", []):
        stored = {"id": next(_ids), **txn}
        STATE["transactions"].append(stored)
        ids.append(stored["id"])
    return {"ids": ids}
