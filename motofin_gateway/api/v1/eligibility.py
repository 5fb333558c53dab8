"""POST /v1/eligibility - Route a borrower profile against the lender roster"""

from dataclasses import asdict
from typing import List

from fastapi import APIRouter, Depends

from motofin_gateway.api.v1.schemas import BorrowerProfileSchema, LenderSchema, RoutingResponse
from motofin_gateway.api.dependencies import get_lenders
from motofin_gateway.domain.models import BorrowerProfile, LendingEntity
from motofin_gateway.domain.routing import route
from motofin_gateway.infrastructure.observability.metrics import record_routing

router = APIRouter()


@router.post("/eligibility", response_model=RoutingResponse)
def check_eligibility(
    request_body: BorrowerProfileSchema,
    lenders: List[LendingEntity] = Depends(get_lenders),
):
    """Accepted lenders come back cheapest first"""
    result = route(BorrowerProfile(**request_body.model_dump()), lenders)
    record_routing(result.status.value)

    return RoutingResponse(
        status=result.status.value,
        reason=result.reason,
        accepted=[LenderSchema(**asdict(e)) for e in result.accepted],
        rejected=[LenderSchema(**asdict(e)) for e in result.rejected],
    )
