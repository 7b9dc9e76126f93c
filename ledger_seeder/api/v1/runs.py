"""POST /v1/runs - seed a ledger account with demo data"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from ledger_seeder.api.dependencies import get_client_factory, get_request_id
from ledger_seeder.api.v1.schemas import (
    DiagnosticSchema,
    PatternSchema,
    ProgressSchema,
    RunRequest,
    RunResponse,
)
from ledger_seeder.config import settings
from ledger_seeder.domain.exceptions import ValidationError
from ledger_seeder.domain.progress import RecordingProgress
from ledger_seeder.infrastructure.observability.logging import LoggingProgress
from ledger_seeder.runner import SeedingRunner

router = APIRouter()


@router.post("/runs", response_model=RunResponse)
async def create_run(
    request_body: RunRequest,
    request: Request,
    client_factory=Depends(get_client_factory),
):
    """
    Run setup, generation, batched submission and the detection check.

    Flow:
    1. Reuse or create accounts and categories
    2. Generate recurring transactions for the trailing months
    3. Submit in batches of up to 500
    4. Report recurring patterns the ledger suggested

    Ledger failures come back as success=false with the created count so far.
    """
    request_id = get_request_id(request)
    api_key = request_body.api_key or settings.ledger_api_key
    if not api_key:
        raise HTTPException(status_code=400, detail="API key is required")

    progress = RecordingProgress(forward=LoggingProgress(request_id))
    runner = SeedingRunner(client_factory(api_key), progress=progress)

    try:
        result = await runner.run(
            request_body.months,
            request_body.item_count,
            [account.to_domain() for account in request_body.accounts],
        )
    except ValidationError as e:
        logging.warning(f"Rejected run: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    return RunResponse(
        success=result.success,
        created=result.created,
        months=result.months,
        item_count=result.item_count,
        account_name=result.account_name,
        patterns=[PatternSchema(payee=p.payee, amount=p.amount, count=p.count) for p in result.patterns],
        diagnostics=[DiagnosticSchema(payee=d.payee, period=d.period, reason=d.reason) for d in result.diagnostics],
        progress=[ProgressSchema(phase=e.phase, message=e.message, percent=e.percent) for e in progress.events],
        created_accounts=result.created_accounts,
        error=result.error,
    )
