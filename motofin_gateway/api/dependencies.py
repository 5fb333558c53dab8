"""Dependency injection for FastAPI endpoints"""

from datetime import date
from functools import lru_cache
from typing import List

from fastapi import Depends, Request

from motofin_gateway.config import settings
from motofin_gateway.domain.classification import CategoryClassifier
from motofin_gateway.domain.models import FinancialPolicy, LendingEntity, SoatRate
from motofin_gateway.domain.rates import apply_rate_book
from motofin_gateway.domain.sequencer import QuotationSequencer
from motofin_gateway.infrastructure.clients.notifier import QuoteNotifier
from motofin_gateway.infrastructure.clients.usury import UsuryRateClient
from motofin_gateway.infrastructure.database.repositories import DocumentStore
from motofin_gateway.infrastructure.database.session import get_document_store


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_policy() -> FinancialPolicy:
    return FinancialPolicy(
        interest_rate=settings.interest_rate,
        fng_rate=settings.fng_rate,
        insurance_rate=settings.insurance_rate,
        default_term_months=settings.default_term_months,
        days_per_month=settings.days_per_month,
    )


@lru_cache
def get_classifier() -> CategoryClassifier:
    """Classifier built once from the configured taxonomy and synonyms"""
    return CategoryClassifier(
        taxonomy=settings.taxonomy,
        synonyms=settings.synonyms,
        threshold=settings.classifier_threshold,
    )


def get_configured_lenders() -> List[LendingEntity]:
    """Lender roster converted from settings into domain records"""
    return [LendingEntity(**lender.model_dump()) for lender in settings.lenders]


def get_lenders(
    configured: List[LendingEntity] = Depends(get_configured_lenders),
    store: DocumentStore = Depends(get_document_store),
) -> List[LendingEntity]:
    """Configured roster with the last refreshed usury rates applied"""
    book = store.read(settings.rate_book_key)
    if not book:
        return configured
    return apply_rate_book(configured, book.get("rates", {}))


def get_soat_rates() -> List[SoatRate]:
    return [SoatRate(**rate.model_dump()) for rate in settings.soat_rates]


def get_sequencer(store: DocumentStore = Depends(get_document_store)) -> QuotationSequencer:
    return QuotationSequencer(
        store,
        prefix=settings.quote_prefix,
        key_template=settings.counter_key_template,
    )


def get_notifier() -> QuoteNotifier:
    """Provide quote webhook client instance"""
    return QuoteNotifier()


def get_usury_client() -> UsuryRateClient:
    return UsuryRateClient()


def get_current_year() -> int:
    """Calendar year that scopes quotation numbering"""
    return date.today().year
