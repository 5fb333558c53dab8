"""POST /v1/affordability - Search by budget: max vehicle price for a daily payment"""

from fastapi import APIRouter, Depends, HTTPException

from motofin_gateway.api.v1.schemas import AffordabilityRequest, AffordabilityResponse
from motofin_gateway.api.dependencies import get_policy
from motofin_gateway.domain.affordability import max_affordable
from motofin_gateway.domain.exceptions import InvalidInput
from motofin_gateway.domain.models import AffordabilityInput, FinancialPolicy

router = APIRouter()


@router.post("/affordability", response_model=AffordabilityResponse)
def compute_affordability(
    request_body: AffordabilityRequest,
    policy: FinancialPolicy = Depends(get_policy),
):
    """Reverse-solve the loan payment for the configured policy rates"""
    term_months = request_body.term_months or policy.default_term_months

    try:
        result = max_affordable(
            AffordabilityInput(
                daily_budget=request_body.daily_budget,
                down_payment=request_body.down_payment,
                term_months=term_months,
            ),
            policy,
        )
    except InvalidInput as e:
        raise HTTPException(status_code=422, detail=str(e))

    return AffordabilityResponse(
        max_loan_principal=result.max_loan_principal,
        max_asset_price=result.max_asset_price,
        gross_financed_amount=result.gross_financed_amount,
        estimated_monthly_payment=result.estimated_monthly_payment,
        term_months=term_months,
    )
