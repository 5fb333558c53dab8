"""Forward quote simulator - full price breakdown for a cash or credit purchase"""

import math
from typing import Optional, Sequence

from motofin_gateway.domain.affordability import amortization_factor
from motofin_gateway.domain.exceptions import InvalidInput
from motofin_gateway.domain.models import FinancialPolicy, LendingEntity, QuoteBreakdown, SoatRate

FALLBACK_DISPLACEMENT_CC = 150


def calculate_soat(displacement: int, rates: Sequence[SoatRate]) -> int:
    """SOAT tariff for the first range (by lower bound) containing the displacement, else 0"""
    for rate in sorted(rates, key=lambda r: r.min_displacement):
        if rate.min_displacement <= displacement <= rate.max_displacement:
            return rate.price
    return 0


def calculate_quote(
    vehicle_price: int,
    soat_rates: Sequence[SoatRate],
    registration_cost: int,
    policy: FinancialPolicy,
    displacement: Optional[int] = None,
    documentation_fee: int = 0,
    special_adjustment: int = 0,
    lender: Optional[LendingEntity] = None,
    months: Optional[int] = None,
    down_payment: int = 0,
    movable_guarantee_cost: int = 0,
) -> QuoteBreakdown:
    """
    Price a vehicle with documents and, when a lender is given, credit costs.

    Credit rules:
    - Financed amount = subtotal - down payment + movable guarantee cost
    - Monthly payment = amortized installment + financed * insurance rate,
      rounded up so the quoted installment is never understated
    - Total = down payment + payment * months

    Raises:
        InvalidInput: negative price, non-positive term, down payment above subtotal
    """
    if vehicle_price < 0:
        raise InvalidInput(f"vehicle_price cannot be negative, got {vehicle_price}")
    if down_payment < 0:
        raise InvalidInput(f"down_payment cannot be negative, got {down_payment}")

    notes = []
    if not displacement:
        displacement = FALLBACK_DISPLACEMENT_CC
        notes.append(f"displacement unknown, priced as {FALLBACK_DISPLACEMENT_CC}cc")

    soat_price = calculate_soat(displacement, soat_rates)
    subtotal = vehicle_price + soat_price + registration_cost + documentation_fee + special_adjustment

    quote = QuoteBreakdown(
        vehicle_price=vehicle_price,
        soat_price=soat_price,
        registration_price=registration_cost,
        documentation_fee=documentation_fee,
        special_adjustment=special_adjustment,
        subtotal=subtotal,
        total=subtotal,
        is_credit=lender is not None,
        notes=notes,
    )

    if lender is None:
        return quote

    months = months if months is not None else policy.default_term_months
    if months <= 0:
        raise InvalidInput(f"months must be positive, got {months}")
    if down_payment > subtotal:
        raise InvalidInput("down_payment exceeds the quoted subtotal")

    minimum_down = math.ceil(subtotal * lender.min_down_payment_percent / 100)
    if down_payment < minimum_down:
        notes.append(f"{lender.name} requires a down payment of at least {minimum_down}")

    loan_amount = subtotal - down_payment + movable_guarantee_cost
    rate = lender.monthly_interest_rate / 100

    base_payment = loan_amount * amortization_factor(rate, months)
    life_insurance = loan_amount * policy.insurance_rate
    monthly_payment = math.ceil(base_payment + life_insurance)

    quote.down_payment = down_payment
    quote.loan_amount = loan_amount
    quote.life_insurance_value = math.ceil(life_insurance)
    quote.movable_guarantee_cost = movable_guarantee_cost
    quote.monthly_payment = monthly_payment
    quote.months = months
    quote.interest_rate = lender.monthly_interest_rate
    quote.lender_name = lender.name
    quote.total = down_payment + monthly_payment * months
    return quote
