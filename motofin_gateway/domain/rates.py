"""Lender rate refresh from the published usury ceiling"""

import logging
import math
from dataclasses import replace
from typing import List, Mapping

from motofin_gateway.domain.exceptions import InvalidInput
from motofin_gateway.domain.models import LendingEntity, RateRefresh

logger = logging.getLogger(__name__)

RATE_DECIMALS = 4


def effective_annual_to_monthly(effective_annual_rate: float) -> float:
    """
    Convert an effective annual rate (E.A.) into the equivalent monthly rate (M.V.).

    Both are percents: i_mv = (1 + i_ea)^(1/12) - 1, rounded to 4 decimals.
    25.0 E.A. -> 1.8769 M.V.

    Raises:
        InvalidInput: rate not positive or not finite
    """
    if not math.isfinite(effective_annual_rate) or effective_annual_rate <= 0:
        raise InvalidInput(f"effective_annual_rate must be positive, got {effective_annual_rate}")

    monthly = (1 + effective_annual_rate / 100) ** (1 / 12) - 1
    return round(monthly * 100, RATE_DECIMALS)


def refresh_lender_rates(lenders: List[LendingEntity], monthly_rate: float) -> RateRefresh:
    """
    Set every lender's monthly rate to `monthly_rate`, except those with
    `manual_override`, which keep their configured rate.

    Input records are not mutated; roster order is preserved.
    """
    refreshed: List[LendingEntity] = []
    updated: List[str] = []
    skipped: List[str] = []

    for lender in lenders:
        if lender.manual_override:
            logger.info(f"Skipping {lender.name} (manual override active)")
            skipped.append(lender.id)
            refreshed.append(lender)
            continue

        refreshed.append(replace(lender, monthly_interest_rate=monthly_rate))
        updated.append(lender.id)

    return RateRefresh(monthly_rate=monthly_rate, lenders=refreshed, updated=updated, skipped=skipped)


def apply_rate_book(lenders: List[LendingEntity], rates: Mapping[str, float]) -> List[LendingEntity]:
    """Overlay stored refreshed rates on the configured roster; pinned lenders are left alone"""
    return [
        replace(lender, monthly_interest_rate=rates[lender.id])
        if lender.id in rates and not lender.manual_override
        else lender
        for lender in lenders
    ]
