"""POST /v1/simulation - Forward quote with documents and credit costs"""

from dataclasses import asdict
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from motofin_gateway.api.v1.schemas import SimulationRequest, SimulationResponse
from motofin_gateway.api.dependencies import get_lenders, get_policy, get_soat_rates
from motofin_gateway.config import settings
from motofin_gateway.domain.exceptions import InvalidInput
from motofin_gateway.domain.models import FinancialPolicy, LendingEntity, SoatRate
from motofin_gateway.domain.quoting import calculate_quote

router = APIRouter()


@router.post("/simulation", response_model=SimulationResponse)
def simulate_quote(
    request_body: SimulationRequest,
    policy: FinancialPolicy = Depends(get_policy),
    lenders: List[LendingEntity] = Depends(get_lenders),
    soat_rates: List[SoatRate] = Depends(get_soat_rates),
):
    lender = None
    if request_body.payment_method == "credit":
        if request_body.lender_id is None:
            raise HTTPException(status_code=422, detail="lender_id is required for credit quotes")
        lender = next((e for e in lenders if e.id == request_body.lender_id), None)
        if lender is None:
            raise HTTPException(status_code=404, detail="Lender not found")

    try:
        quote = calculate_quote(
            vehicle_price=request_body.vehicle_price,
            soat_rates=soat_rates,
            registration_cost=request_body.registration_cost,
            policy=policy,
            displacement=request_body.displacement,
            documentation_fee=request_body.documentation_fee,
            special_adjustment=request_body.special_adjustment,
            lender=lender,
            months=request_body.months,
            down_payment=request_body.down_payment,
            movable_guarantee_cost=settings.movable_guarantee_cost,
        )
    except InvalidInput as e:
        raise HTTPException(status_code=422, detail=str(e))

    return SimulationResponse(**asdict(quote))
