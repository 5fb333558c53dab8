"""Lender roster endpoints - current rates and the monthly usury rate refresh"""

import logging
from dataclasses import asdict
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from motofin_gateway.api.v1.schemas import LenderListResponse, LenderSchema, RateRefreshResponse
from motofin_gateway.api.dependencies import get_configured_lenders, get_lenders, get_request_id, get_usury_client
from motofin_gateway.config import settings
from motofin_gateway.domain.exceptions import InvalidInput, RateSourceUnavailable, TransactionConflict
from motofin_gateway.domain.models import LendingEntity
from motofin_gateway.domain.rates import effective_annual_to_monthly, refresh_lender_rates
from motofin_gateway.infrastructure.clients.usury import UsuryRateClient
from motofin_gateway.infrastructure.database.repositories import DocumentStore
from motofin_gateway.infrastructure.database.session import get_document_store
from motofin_gateway.infrastructure.observability.metrics import rate_refresh_counter

router = APIRouter()

RATE_SOURCE = "SFC_DATOS_GOV"


@router.get("/lenders", response_model=LenderListResponse)
def list_lenders(lenders: List[LendingEntity] = Depends(get_lenders)):
    return LenderListResponse(lenders=[LenderSchema(**asdict(e)) for e in lenders])


@router.post("/lenders/rates/refresh", response_model=RateRefreshResponse)
async def refresh_rates(
    configured: List[LendingEntity] = Depends(get_configured_lenders),
    store: DocumentStore = Depends(get_document_store),
    usury_client: UsuryRateClient = Depends(get_usury_client),
    request_id: str = Depends(get_request_id),
):
    """
    Pull the latest consumer-credit usury rate and move every lender without a
    manual override to its monthly equivalent.

    Intended to be triggered by a monthly scheduler. The refreshed rates are
    stored as a rate book document and overlaid on the configured roster.
    """
    try:
        usury = await usury_client.fetch_latest()
        monthly_rate = effective_annual_to_monthly(usury.effective_annual_rate)
    except (RateSourceUnavailable, InvalidInput) as e:
        rate_refresh_counter.labels(outcome="failed").inc()
        logging.error(f"Usury rate refresh failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=502, detail=str(e))

    refresh = refresh_lender_rates(configured, monthly_rate)

    try:
        store.merge_write(
            settings.rate_book_key,
            {
                "rates": {lender_id: monthly_rate for lender_id in refresh.updated},
                "effective_annual_rate": usury.effective_annual_rate,
                "monthly_rate": monthly_rate,
                "valid_from": usury.valid_from,
                "valid_to": usury.valid_to,
                "source": RATE_SOURCE,
                "last_auto_update": datetime.now(timezone.utc).isoformat(),
            },
        )
    except TransactionConflict as e:
        rate_refresh_counter.labels(outcome="failed").inc()
        logging.error(f"Rate book write failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Rate book unavailable, retry later")

    rate_refresh_counter.labels(outcome="updated").inc()
    logging.info(
        f"Updated {len(refresh.updated)} lenders to {monthly_rate}% M.V.",
        extra={"request_id": request_id, "skipped": refresh.skipped},
    )

    return RateRefreshResponse(
        effective_annual_rate=usury.effective_annual_rate,
        monthly_rate=monthly_rate,
        valid_from=usury.valid_from,
        valid_to=usury.valid_to,
        updated=refresh.updated,
        skipped=refresh.skipped,
        lenders=[LenderSchema(**asdict(e)) for e in refresh.lenders],
    )
