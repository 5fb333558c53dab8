"""Unit tests for the search-by-budget affordability solver"""

import pytest
from dataclasses import replace
from motofin_gateway.domain.affordability import amortization_factor, max_affordable
from motofin_gateway.domain.exceptions import InvalidInput
from motofin_gateway.domain.models import AffordabilityInput, AffordabilityResult


def test_max_affordable_golden_value(policy):
    """
    20,000/day, 500,000 down, 48 months at 1.87% NMV:
    payment 600,000 / (0.0317454... + 0.001126) = 18,252,929 gross
    18,252,929 / 1.2066 = 15,127,572 net
    """
    result = max_affordable(AffordabilityInput(daily_budget=20_000, down_payment=500_000, term_months=48), policy)

    assert result == AffordabilityResult(
        max_loan_principal=15_127_572,
        max_asset_price=15_627_572,
        gross_financed_amount=18_252_929,
        estimated_monthly_payment=600_000,
    )


def test_max_affordable_short_term(policy):
    """5,000/day over 12 months: 150,000 / 0.0949322... = 1,580,073 gross"""
    result = max_affordable(AffordabilityInput(daily_budget=5_000, down_payment=0, term_months=12), policy)

    assert result.gross_financed_amount == 1_580_073
    assert result.max_loan_principal == 1_309_525
    assert result.max_asset_price == 1_309_525


def test_max_affordable_zero_rate_is_straight_line(policy):
    """r == 0 degrades the annuity factor to 1/n"""
    zero_rate = replace(policy, interest_rate=0.0)
    result = max_affordable(AffordabilityInput(daily_budget=10_000, down_payment=0, term_months=48), zero_rate)

    # 300,000 / (1/48 + 0.001126) = 13,661,616.93
    assert result.gross_financed_amount == 13_661_616
    assert result.max_loan_principal == 11_322_406


def test_amortization_factor_zero_rate():
    assert amortization_factor(0.0, 48) == pytest.approx(1 / 48)


def test_amortization_factor_matches_annuity():
    assert amortization_factor(0.0187, 12) == pytest.approx(0.0938062695, rel=1e-9)


def test_amortization_factor_underflow_guard():
    """(1+r)^-n too small to represent: factor collapses to r"""
    assert amortization_factor(0.0187, 100_000) == 0.0187


@pytest.mark.parametrize(
    "daily_budget, down_payment, term_months",
    [
        (1, 0, 1),
        (3_333.33, 0, 48),
        (15_000, 2_000_000, 36),
        (50_000, 0, 72),
        (7_500, 123_456, 24),
    ],
)
def test_max_affordable_invariants(policy, daily_budget, down_payment, term_months):
    result = max_affordable(
        AffordabilityInput(daily_budget=daily_budget, down_payment=down_payment, term_months=term_months),
        policy,
    )

    assert result.max_asset_price >= down_payment
    assert result.max_asset_price == result.max_loan_principal + down_payment
    assert result.max_loan_principal <= result.gross_financed_amount
    assert result.estimated_monthly_payment == int(daily_budget * 30)
    assert all(
        isinstance(v, int) and v >= 0
        for v in (
            result.max_loan_principal,
            result.max_asset_price,
            result.gross_financed_amount,
            result.estimated_monthly_payment,
        )
    )


def test_max_affordable_never_overstates_payment(policy):
    """Re-amortizing the suggested gross amount stays within the monthly budget"""
    data = AffordabilityInput(daily_budget=20_000, down_payment=0, term_months=48)
    result = max_affordable(data, policy)

    payment = result.gross_financed_amount * (amortization_factor(policy.interest_rate, 48) + policy.insurance_rate)
    assert payment <= 600_000


@pytest.mark.parametrize("daily_budget", [0, -10, float("nan")])
def test_max_affordable_rejects_budget(policy, daily_budget):
    with pytest.raises(InvalidInput):
        max_affordable(AffordabilityInput(daily_budget=daily_budget, down_payment=0, term_months=48), policy)


@pytest.mark.parametrize("term_months", [0, -12])
def test_max_affordable_rejects_term(policy, term_months):
    with pytest.raises(InvalidInput):
        max_affordable(AffordabilityInput(daily_budget=10_000, down_payment=0, term_months=term_months), policy)


def test_max_affordable_rejects_negative_down_payment(policy):
    with pytest.raises(InvalidInput):
        max_affordable(AffordabilityInput(daily_budget=10_000, down_payment=-1, term_months=48), policy)


def test_max_affordable_rejects_unrepresentable_budget(policy):
    """1e308 * 30 days overflows to infinity before the loan can be sized"""
    with pytest.raises(InvalidInput):
        max_affordable(AffordabilityInput(daily_budget=1e308, down_payment=0, term_months=48), policy)
