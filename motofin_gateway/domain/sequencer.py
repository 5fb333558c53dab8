"""Quotation sequencer - year-scoped COT-YYYY-NNNN identifiers from a shared counter"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Protocol

from motofin_gateway.domain.exceptions import InvalidInput, SequencerUnavailable, TransactionConflict
from motofin_gateway.domain.models import QuotationCounter

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class CounterStore(Protocol):
    """Document store primitives the sequencer relies on"""

    def read(self, key: str) -> Optional[Record]:
        ...

    def run_transaction(self, key: str, fn: Callable[[Optional[Record]], Record]) -> Record:
        """
        Atomically read `key`, pass the record (or None) to `fn`, merge the
        returned fields into the record and commit. `fn` may run more than once
        when a concurrent writer wins. Returns the committed record.

        Raises:
            TransactionConflict: retry budget exhausted
        """
        ...


def format_quote_id(prefix: str, year: int, sequence: int) -> str:
    return f"{prefix}-{year}-{sequence:04d}"


def counter_from_record(record: Optional[Record], current_year: int) -> QuotationCounter:
    """Counter view of a stored record; absent or prior-year records start at 0"""
    if record is None or record.get("year") != current_year:
        return QuotationCounter(year=current_year, sequence_value=0)
    return QuotationCounter(
        year=current_year,
        sequence_value=int(record.get("sequence_value") or 0),
        last_updated=record.get("last_updated"),
    )


class QuotationSequencer:
    """Allocates quotation ids through a transactional read-modify-write"""

    def __init__(
        self,
        store: CounterStore,
        prefix: str = "COT",
        key_template: str = "quotation_counter:{year}",
    ):
        self.store = store
        self.prefix = prefix
        self.key_template = key_template

    def counter_key(self, year: int) -> str:
        return self.key_template.format(year=year)

    def next_quote_id(self, current_year: int) -> str:
        """
        Issue the next id for `current_year`.

        The id is derived from the committed record, never from a transaction
        attempt that lost a race.

        Raises:
            InvalidInput: non-positive year
            SequencerUnavailable: the store could not commit
        """
        if current_year <= 0:
            raise InvalidInput(f"year must be positive, got {current_year}")

        def increment(record: Optional[Record]) -> Record:
            counter = counter_from_record(record, current_year)
            return {
                "year": current_year,
                "sequence_value": counter.sequence_value + 1,
                "last_updated": datetime.now(timezone.utc).isoformat(),
            }

        key = self.counter_key(current_year)
        try:
            committed = self.store.run_transaction(key, increment)
        except TransactionConflict as e:
            logger.error("Quotation counter unavailable", extra={"counter_key": key})
            raise SequencerUnavailable(f"Could not allocate quotation id for {current_year}: {e}") from e

        quote_id = format_quote_id(self.prefix, current_year, int(committed["sequence_value"]))
        logger.info("Quotation id issued", extra={"counter_key": key, "quote_id": quote_id})
        return quote_id

    def current_counter(self, current_year: int) -> QuotationCounter:
        """Read-only view of the counter, for admin display"""
        return counter_from_record(self.store.read(self.counter_key(current_year)), current_year)
