"""Quote-request workflow: POST /v1/quotes, GET /v1/quotes/{quote_id}, GET /v1/quotes?phone="""

import dataclasses
import logging
import time
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from motofin_gateway.api.v1.schemas import QuoteListResponse, QuoteRequest, QuoteResponse
from motofin_gateway.api.dependencies import (
    get_classifier,
    get_current_year,
    get_lenders,
    get_notifier,
    get_policy,
    get_request_id,
    get_sequencer,
)
from motofin_gateway.domain.affordability import max_affordable
from motofin_gateway.domain.classification import CategoryClassifier
from motofin_gateway.domain.exceptions import InvalidInput, SequencerUnavailable
from motofin_gateway.domain.models import AffordabilityInput, BorrowerProfile, FinancialPolicy, LendingEntity
from motofin_gateway.domain.routing import route
from motofin_gateway.domain.sequencer import QuotationSequencer
from motofin_gateway.infrastructure.clients.notifier import QuoteNotifier
from motofin_gateway.infrastructure.database.models import Quotation
from motofin_gateway.infrastructure.database.repositories import QuotationRepository
from motofin_gateway.infrastructure.database.session import get_db
from motofin_gateway.infrastructure.observability.logging import log_quote_issued
from motofin_gateway.infrastructure.observability.metrics import (
    quotes_issued_counter,
    record_classification,
    record_routing,
    sequencer_failure_counter,
)

router = APIRouter()


def to_response(quotation: Quotation) -> QuoteResponse:
    return QuoteResponse(
        quote_id=quotation.quote_id,
        customer_name=quotation.customer_name,
        phone=quotation.phone,
        category=quotation.category,
        classification_method=quotation.classification_method,
        routing_status=quotation.routing_status,
        routing_reason=quotation.routing_reason,
        lender_id=quotation.lender_id,
        lender_name=quotation.lender_name,
        term_months=quotation.term_months,
        max_loan_principal=quotation.max_loan_principal,
        max_asset_price=quotation.max_asset_price,
        estimated_monthly_payment=quotation.estimated_monthly_payment,
        created_at=quotation.created_at.isoformat() if quotation.created_at else None,
    )


@router.post("/quotes", response_model=QuoteResponse, status_code=201)
def create_quote(
    request_body: QuoteRequest,
    background_tasks: BackgroundTasks,
    request: Request,
    db: Session = Depends(get_db),
    classifier: CategoryClassifier = Depends(get_classifier),
    lenders: List[LendingEntity] = Depends(get_lenders),
    policy: FinancialPolicy = Depends(get_policy),
    sequencer: QuotationSequencer = Depends(get_sequencer),
    notifier: QuoteNotifier = Depends(get_notifier),
    current_year: int = Depends(get_current_year),
):
    """
    Issue a quotation for a lead.

    Flow:
    1. Classify the buyer's interest into an official category
    2. Route the borrower profile against the lender roster
    3. Size the budget with the cheapest accepting lender's rate
       (policy rate when no lender accepts)
    4. Allocate the COT-YYYY-NNNN id
    5. Persist the quotation
    6. Send async webhook to the CRM
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        # 1. Category
        classification = classifier.classify(request_body.interest)
        record_classification(classification.method.value if classification else None)

        # 2. Eligibility
        routing = route(BorrowerProfile(**request_body.profile.model_dump()), lenders)
        record_routing(routing.status.value)
        lender = routing.accepted[0] if routing.accepted else None

        # 3. Affordability
        if lender is not None:
            policy = dataclasses.replace(policy, interest_rate=lender.monthly_interest_rate / 100)
        term_months = request_body.term_months or policy.default_term_months
        affordability = max_affordable(
            AffordabilityInput(
                daily_budget=request_body.daily_budget,
                down_payment=request_body.down_payment,
                term_months=term_months,
            ),
            policy,
        )

        # 4. Quotation id, only after every check above passed
        quote_id = sequencer.next_quote_id(current_year)

        # 5. Persist
        quotation = QuotationRepository(db).create_quotation(
            quote_id=quote_id,
            customer_name=request_body.customer_name,
            phone=request_body.phone,
            interest_query=request_body.interest,
            category=classification.category if classification else None,
            classification_score=classification.score if classification else None,
            classification_method=classification.method.value if classification else None,
            routing_status=routing.status.value,
            routing_reason=routing.reason,
            lender_id=lender.id if lender else None,
            lender_name=lender.name if lender else None,
            credit_bureau_flag=bool(request_body.profile.credit_bureau_flag),
            daily_budget=request_body.daily_budget,
            down_payment=request_body.down_payment,
            term_months=term_months,
            max_loan_principal=affordability.max_loan_principal,
            max_asset_price=affordability.max_asset_price,
            gross_financed_amount=affordability.gross_financed_amount,
            estimated_monthly_payment=affordability.estimated_monthly_payment,
        )
        db.commit()
        db.refresh(quotation)

        # 6. Notify
        background_tasks.add_task(
            notifier.send_quote_event,
            {
                "event": "QUOTE_ISSUED",
                "quote_id": quote_id,
                "phone": request_body.phone,
                "category": quotation.category,
                "routing_status": quotation.routing_status,
                "lender_id": quotation.lender_id,
                "max_asset_price": quotation.max_asset_price,
            },
        )

        quotes_issued_counter.inc()
        duration_ms = (time.time() - start_time) * 1000
        log_quote_issued(request_id, quote_id, routing.status.value, quotation.lender_id, quotation.max_asset_price, duration_ms)

        return to_response(quotation)

    except InvalidInput as e:
        db.rollback()
        logging.warning(f"Invalid quote input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except SequencerUnavailable as e:
        sequencer_failure_counter.inc()
        db.rollback()
        logging.error(f"Quotation sequencer unavailable: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Quotation numbering unavailable, retry later")

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/quotes/{quote_id}", response_model=QuoteResponse)
def get_quote(quote_id: str, db: Session = Depends(get_db)):
    quotation = QuotationRepository(db).get_quotation(quote_id)
    if not quotation:
        raise HTTPException(status_code=404, detail="Quotation not found")
    return to_response(quotation)


@router.get("/quotes", response_model=QuoteListResponse)
def list_quotes(
    phone: str = Query(..., min_length=7, description="Lead phone number"),
    db: Session = Depends(get_db),
):
    """Recent quotations for a lead, newest first"""
    quotations = QuotationRepository(db).get_quotations_by_phone(phone, limit=20)
    return QuoteListResponse(phone=phone, quotes=[to_response(q) for q in quotations])
