"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class StrictModel(BaseModel):
    """Request bodies reject unknown fields"""

    model_config = ConfigDict(extra="forbid")


class ClassifyRequest(StrictModel):
    """Request body for POST /v1/classify"""

    query: str = Field(..., max_length=200, description="Free-text vehicle interest")


class ClassificationSchema(BaseModel):
    category: str
    score: float
    method: str


class ClassifyResponse(BaseModel):
    """Response for POST /v1/classify; match is null when nothing is close enough"""

    match: Optional[ClassificationSchema] = None


class AffordabilityRequest(StrictModel):
    """Request body for POST /v1/affordability"""

    daily_budget: float = Field(..., gt=0, description="Daily payment the buyer can afford")
    down_payment: int = Field(0, ge=0, description="Cash available up front")
    term_months: Optional[int] = Field(None, gt=0, description="Loan term, defaults to policy term")


class AffordabilityResponse(BaseModel):
    max_loan_principal: int
    max_asset_price: int
    gross_financed_amount: int
    estimated_monthly_payment: int
    term_months: int


class BorrowerProfileSchema(StrictModel):
    """Borrower data for POST /v1/eligibility"""

    age: int = Field(..., ge=0)
    monthly_income_band: Optional[str] = None
    employment_type: Optional[str] = None
    credit_bureau_flag: Optional[bool] = None


class LenderSchema(BaseModel):
    id: str
    name: str
    monthly_interest_rate: float
    min_down_payment_percent: float
    min_age: Optional[int] = None
    max_age: Optional[int] = None
    accepts_bureau_flagged: bool
    manual_override: bool = False


class RoutingResponse(BaseModel):
    status: str
    reason: Optional[str] = None
    accepted: List[LenderSchema]
    rejected: List[LenderSchema]


class SimulationRequest(StrictModel):
    """Request body for POST /v1/simulation"""

    vehicle_price: int = Field(..., ge=0)
    displacement: Optional[int] = Field(None, ge=0, description="Engine size in cc")
    registration_cost: int = Field(0, ge=0)
    documentation_fee: int = Field(0, ge=0)
    special_adjustment: int = 0
    payment_method: str = Field("credit", pattern="^(credit|cash)$")
    lender_id: Optional[str] = None
    months: Optional[int] = Field(None, gt=0)
    down_payment: int = Field(0, ge=0)


class SimulationResponse(BaseModel):
    vehicle_price: int
    soat_price: int
    registration_price: int
    documentation_fee: int
    special_adjustment: int
    subtotal: int
    total: int
    is_credit: bool
    down_payment: int
    loan_amount: int
    life_insurance_value: int
    movable_guarantee_cost: int
    monthly_payment: int
    months: int
    interest_rate: float
    lender_name: Optional[str] = None
    notes: List[str] = []


class QuoteRequest(StrictModel):
    """Request body for POST /v1/quotes"""

    customer_name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=7, max_length=20)
    interest: str = Field(..., max_length=200, description="What the buyer is looking for, in their words")
    profile: BorrowerProfileSchema
    daily_budget: float = Field(..., gt=0)
    down_payment: int = Field(0, ge=0)
    term_months: Optional[int] = Field(None, gt=0)


class QuoteResponse(BaseModel):
    """Issued quotation for POST /v1/quotes and GET /v1/quotes/{quote_id}"""

    quote_id: str
    customer_name: str
    phone: str
    category: Optional[str] = None
    classification_method: Optional[str] = None
    routing_status: str
    routing_reason: Optional[str] = None
    lender_id: Optional[str] = None
    lender_name: Optional[str] = None
    term_months: int
    max_loan_principal: int
    max_asset_price: int
    estimated_monthly_payment: int
    created_at: Optional[str] = None


class QuoteListResponse(BaseModel):
    """Response for GET /v1/quotes?phone="""

    phone: str
    quotes: List[QuoteResponse]


class LenderListResponse(BaseModel):
    lenders: List[LenderSchema]


class RateRefreshResponse(BaseModel):
    """Result of POST /v1/lenders/rates/refresh"""

    effective_annual_rate: float
    monthly_rate: float
    valid_from: Optional[str] = None
    valid_to: Optional[str] = None
    updated: List[str]
    skipped: List[str]
    lenders: List[LenderSchema]
