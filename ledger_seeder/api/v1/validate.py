"""POST /v1/validate - check an API key and whether the account already has data"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from ledger_seeder.api.dependencies import get_client_factory, get_request_id
from ledger_seeder.api.v1.schemas import ValidateRequest, ValidateResponse
from ledger_seeder.runner import SeedingRunner

router = APIRouter()


@router.post("/validate", response_model=ValidateResponse)
async def validate_api_key(
    request_body: ValidateRequest,
    request: Request,
    client_factory=Depends(get_client_factory),
):
    """
    Validate the key against the ledger and report existing transactions.

    A key the ledger rejects is a 401; an unreachable ledger is a 502.
    """
    request_id = get_request_id(request)
    runner = SeedingRunner(client_factory(request_body.api_key))

    check = await runner.validate_api_key()
    if not check.valid:
        logging.warning(f"API key validation failed: {check.error}", extra={"request_id": request_id})
        if check.auth_failed:
            raise HTTPException(status_code=401, detail=f"Invalid API key: {check.error}")
        raise HTTPException(status_code=502, detail=f"Ledger service unavailable: {check.error}")

    status = await runner.check_account_empty()

    return ValidateResponse(
        valid=True,
        user_name=check.user.name,
        user_email=check.user.email,
        empty=status.empty,
        transaction_count=status.count,
        status_error=status.error,
    )
