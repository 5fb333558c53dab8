"""Eligibility router - matches a borrower profile against the lender roster"""

from typing import List, Sequence

from motofin_gateway.domain.exceptions import InvalidInput
from motofin_gateway.domain.models import BorrowerProfile, LendingEntity, RoutingResult, RoutingStatus

MINIMUM_AGE = 18
UNDERAGE_REASON = "underage"


def is_entity_eligible(profile: BorrowerProfile, entity: LendingEntity) -> bool:
    """Per-lender age bounds (inclusive) and credit-bureau acceptance"""
    if entity.min_age is not None and profile.age < entity.min_age:
        return False
    if entity.max_age is not None and profile.age > entity.max_age:
        return False
    if profile.credit_bureau_flag and not entity.accepts_bureau_flagged:
        return False
    return True


def route(profile: BorrowerProfile, entities: Sequence[LendingEntity]) -> RoutingResult:
    """
    Partition lenders into accepted/rejected for a borrower.

    Minors are rejected outright before any lender rule is evaluated.
    Accepted lenders are ordered by monthly rate, cheapest first; equal rates
    keep roster order.

    Raises:
        InvalidInput: negative age
    """
    if profile.age < 0:
        raise InvalidInput(f"age cannot be negative, got {profile.age}")

    if profile.age < MINIMUM_AGE:
        return RoutingResult(
            accepted=[],
            rejected=list(entities),
            status=RoutingStatus.REJECTED,
            reason=UNDERAGE_REASON,
        )

    accepted: List[LendingEntity] = []
    rejected: List[LendingEntity] = []
    for entity in entities:
        if is_entity_eligible(profile, entity):
            accepted.append(entity)
        else:
            rejected.append(entity)

    # list.sort is stable
    accepted.sort(key=lambda e: e.monthly_interest_rate)

    return RoutingResult(
        accepted=accepted,
        rejected=rejected,
        status=RoutingStatus.ELIGIBLE if accepted else RoutingStatus.REJECTED,
    )
