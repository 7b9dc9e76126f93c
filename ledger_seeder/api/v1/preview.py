"""POST /v1/preview - what a run would create, without calling the ledger"""

from fastapi import APIRouter, HTTPException

from ledger_seeder.api.v1.schemas import PreviewLineSchema, PreviewRequest, PreviewResponse
from ledger_seeder.config import settings
from ledger_seeder.domain.exceptions import ValidationError
from ledger_seeder.domain.preview import build_preview

router = APIRouter()


@router.post("/preview", response_model=PreviewResponse)
def preview_run(request_body: PreviewRequest):
    """
    Summarise the selected recurring items, accounts and automatic payments.

    Returns:
        Monthly income/expense totals and the total transaction count
    """
    try:
        preview = build_preview(
            request_body.months,
            request_body.item_count,
            [account.to_domain() for account in request_body.accounts],
            base_currency=settings.base_currency,
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    def lines(items):
        return [PreviewLineSchema(description=i.description, amount=i.amount, schedule=i.schedule) for i in items]

    return PreviewResponse(
        income=lines(preview.income),
        expenses=lines(preview.expenses),
        international=lines(preview.international),
        total_income=preview.total_income,
        total_expenses=preview.total_expenses,
        net_per_month=preview.net_per_month,
        total_transactions=preview.total_transactions,
        accounts=preview.accounts,
        automatic_payments=preview.automatic_payments,
    )
