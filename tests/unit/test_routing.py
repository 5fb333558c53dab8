"""Unit tests for lender eligibility routing"""

import pytest
from motofin_gateway.domain.exceptions import InvalidInput
from motofin_gateway.domain.models import BorrowerProfile, LendingEntity, RoutingStatus
from motofin_gateway.domain.routing import route


def test_route_sorts_by_interest_rate(lenders):
    """Cheapest lender first"""
    result = route(BorrowerProfile(age=30), lenders)

    assert result.status is RoutingStatus.ELIGIBLE
    assert [e.monthly_interest_rate for e in result.accepted] == [1.8, 2.3]
    assert result.rejected == []
    assert result.reason is None


@pytest.mark.parametrize("age", [0, 10, 17])
def test_route_underage_rejected_before_entity_rules(lenders, age):
    """Minors are rejected even by lenders with no age bounds"""
    result = route(BorrowerProfile(age=age), lenders)

    assert result.status is RoutingStatus.REJECTED
    assert result.accepted == []
    assert result.rejected == lenders
    assert result.reason == "underage"


def test_route_underage_with_lender_accepting_minors():
    permissive = LendingEntity(id="x", name="X", monthly_interest_rate=1.0, min_age=0)
    result = route(BorrowerProfile(age=17), [permissive])
    assert result.status is RoutingStatus.REJECTED
    assert result.accepted == []


def test_route_age_bounds_inclusive():
    lender = LendingEntity(id="a", name="A", monthly_interest_rate=2.0, min_age=21, max_age=70)

    assert route(BorrowerProfile(age=21), [lender]).accepted == [lender]
    assert route(BorrowerProfile(age=70), [lender]).accepted == [lender]
    assert route(BorrowerProfile(age=20), [lender]).rejected == [lender]
    assert route(BorrowerProfile(age=71), [lender]).rejected == [lender]


def test_route_bureau_flag():
    strict = LendingEntity(id="strict", name="Strict", monthly_interest_rate=1.5)
    lenient = LendingEntity(id="lenient", name="Lenient", monthly_interest_rate=2.5, accepts_bureau_flagged=True)

    result = route(BorrowerProfile(age=40, credit_bureau_flag=True), [strict, lenient])

    assert result.accepted == [lenient]
    assert result.rejected == [strict]
    assert result.status is RoutingStatus.ELIGIBLE


def test_route_unflagged_profile_ignores_bureau_acceptance():
    strict = LendingEntity(id="strict", name="Strict", monthly_interest_rate=1.5)
    for flag in (None, False):
        assert route(BorrowerProfile(age=40, credit_bureau_flag=flag), [strict]).accepted == [strict]


def test_route_no_accepting_lender_is_rejected():
    lender = LendingEntity(id="a", name="A", monthly_interest_rate=2.0, max_age=60)
    result = route(BorrowerProfile(age=65), [lender])

    assert result.status is RoutingStatus.REJECTED
    assert result.accepted == []
    assert result.reason is None


def test_route_empty_roster():
    result = route(BorrowerProfile(age=30), [])
    assert result.status is RoutingStatus.REJECTED


def test_route_equal_rates_keep_roster_order():
    first = LendingEntity(id="first", name="First", monthly_interest_rate=2.0)
    cheap = LendingEntity(id="cheap", name="Cheap", monthly_interest_rate=1.0)
    second = LendingEntity(id="second", name="Second", monthly_interest_rate=2.0)

    result = route(BorrowerProfile(age=30), [first, cheap, second])

    assert [e.id for e in result.accepted] == ["cheap", "first", "second"]


def test_route_does_not_mutate_roster(lenders):
    original = list(lenders)
    route(BorrowerProfile(age=30), lenders)
    assert lenders == original


def test_route_never_produces_conditional(lenders):
    """Conditional is reserved"""
    for age in (5, 18, 45, 99):
        assert route(BorrowerProfile(age=age), lenders).status is not RoutingStatus.CONDITIONAL


def test_route_rejects_negative_age(lenders):
    with pytest.raises(InvalidInput):
        route(BorrowerProfile(age=-1), lenders)
