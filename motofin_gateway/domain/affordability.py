"""Affordability solver - inverts the amortized loan payment to size a budget"""

import math

from motofin_gateway.domain.exceptions import InvalidInput
from motofin_gateway.domain.models import AffordabilityInput, AffordabilityResult, FinancialPolicy


def amortization_factor(rate: float, term_months: int) -> float:
    """
    Fraction of the principal owed per period under a fixed-payment annuity:
    r / (1 - (1+r)^-n).

    A zero rate degrades to straight-line 1/n. A discount term too small to
    represent is treated as 0, leaving the factor equal to r.
    """
    if term_months <= 0:
        raise InvalidInput(f"term_months must be positive, got {term_months}")
    if rate == 0:
        return 1 / term_months

    try:
        discount = (1 + rate) ** (-term_months)
    except OverflowError:
        discount = 0.0
    if not math.isfinite(discount) or discount < 1e-300:
        discount = 0.0

    return rate / (1 - discount)


def max_affordable(data: AffordabilityInput, policy: FinancialPolicy) -> AffordabilityResult:
    """
    Maximum vehicle price a daily budget can carry.

    Derivation:
    - Target monthly payment = daily budget * days per month
    - Payment = gross * (amortization factor + insurance rate)
      -> gross = payment / (factor + insurance)
    - Gross = net * (1 + FNG rate) -> net = gross / (1 + FNG)
    - Max price = net + down payment

    Every currency figure is floored so the suggested price is always payable.

    Raises:
        InvalidInput: non-positive budget or term, negative down payment,
            or a budget whose financed amount is not representable
    """
    if not math.isfinite(data.daily_budget) or data.daily_budget <= 0:
        raise InvalidInput(f"daily_budget must be positive, got {data.daily_budget}")
    if data.term_months <= 0:
        raise InvalidInput(f"term_months must be positive, got {data.term_months}")
    if data.down_payment < 0:
        raise InvalidInput(f"down_payment cannot be negative, got {data.down_payment}")

    target_monthly_payment = data.daily_budget * policy.days_per_month

    total_factor = amortization_factor(policy.interest_rate, data.term_months) + policy.insurance_rate

    gross = target_monthly_payment / total_factor
    if not math.isfinite(gross):
        raise InvalidInput(f"daily_budget too large to size a loan, got {data.daily_budget}")

    gross_financed_amount = math.floor(gross)
    net_principal = math.floor(gross_financed_amount / (1 + policy.fng_rate))

    return AffordabilityResult(
        max_loan_principal=net_principal,
        max_asset_price=math.floor(net_principal + data.down_payment),
        gross_financed_amount=gross_financed_amount,
        estimated_monthly_payment=math.floor(target_monthly_payment),
    )
