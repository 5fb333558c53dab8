"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class MatchMethod(str, Enum):
    """How a free-text query was resolved to a category"""

    EXACT = "exact"
    SYNONYM = "synonym"
    FUZZY = "fuzzy"


class RoutingStatus(str, Enum):
    """Eligibility outcome for a borrower profile"""

    ELIGIBLE = "Eligible"
    CONDITIONAL = "Conditional"  # Reserved, not produced by the current rules
    REJECTED = "Rejected"


@dataclass(frozen=True)
class ClassificationResult:
    """Canonical category resolved from a buyer's free-text interest"""

    category: str
    score: float  # 0.0 - 1.0, 1.0 is an exact or synonym hit
    method: MatchMethod


@dataclass(frozen=True)
class BorrowerProfile:
    """Buyer data supplied per request, never persisted by the core"""

    age: int
    monthly_income_band: Optional[str] = None  # e.g. "1-2 SMMLV"
    employment_type: Optional[str] = None  # e.g. "Independiente"
    credit_bureau_flag: Optional[bool] = None  # Reported in the credit bureau


@dataclass(frozen=True)
class LendingEntity:
    """Lender reference data owned by configuration"""

    id: str
    name: str
    monthly_interest_rate: float  # Percent per month, e.g. 1.8 == 1.8%
    min_down_payment_percent: float = 0.0
    min_age: Optional[int] = None
    max_age: Optional[int] = None
    accepts_bureau_flagged: bool = False
    manual_override: bool = False  # Rate pinned by hand, skipped by the usury refresh


@dataclass
class RoutingResult:
    """Partition of the lender roster for one borrower"""

    accepted: List[LendingEntity]
    rejected: List[LendingEntity]
    status: RoutingStatus
    reason: Optional[str] = None


@dataclass(frozen=True)
class FinancialPolicy:
    """Policy constants injected into the affordability and quote calculations"""

    interest_rate: float  # Monthly fraction, e.g. 0.0187
    fng_rate: float  # Guarantee fee fraction over net principal, e.g. 0.2066
    insurance_rate: float  # Life insurance fraction per month over financed amount
    default_term_months: int = 48
    days_per_month: int = 30


@dataclass(frozen=True)
class AffordabilityInput:
    """Buyer budget for the reverse (search by budget) calculation"""

    daily_budget: float
    down_payment: int = 0
    term_months: int = 48


@dataclass(frozen=True)
class AffordabilityResult:
    """Maximum financing supported by a budget, floored to whole currency units"""

    max_loan_principal: int
    max_asset_price: int
    gross_financed_amount: int
    estimated_monthly_payment: int


@dataclass
class QuotationCounter:
    """Per-year sequence record kept in the document store"""

    year: int
    sequence_value: int = 0
    last_updated: Optional[datetime] = None


@dataclass(frozen=True)
class SoatRate:
    """Mandatory insurance tariff for a displacement range (inclusive)"""

    id: str
    min_displacement: int
    max_displacement: int
    price: int


@dataclass
class QuoteBreakdown:
    """Output of the forward quote simulator"""

    vehicle_price: int
    soat_price: int
    registration_price: int
    documentation_fee: int
    special_adjustment: int
    subtotal: int
    total: int
    is_credit: bool
    down_payment: int = 0
    loan_amount: int = 0
    life_insurance_value: int = 0
    movable_guarantee_cost: int = 0
    monthly_payment: int = 0
    months: int = 0
    interest_rate: float = 0.0
    lender_name: Optional[str] = None
    notes: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class UsuryRate:
    """Published consumer-credit usury ceiling"""

    effective_annual_rate: float  # Percent per year (E.A.), e.g. 25.0
    valid_from: Optional[str] = None
    valid_to: Optional[str] = None


@dataclass
class RateRefresh:
    """Lender roster after applying a published monthly rate"""

    monthly_rate: float  # Percent per month (M.V.)
    lenders: List[LendingEntity]
    updated: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
