"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInput(DomainException):
    """Caller passed an out-of-domain value (negative budget, zero term, negative age)"""

    pass


class TransactionConflict(DomainException):
    """Counter store could not commit within its retry budget"""

    pass


class SequencerUnavailable(DomainException):
    """No quotation id could be issued; the caller may retry the whole operation"""

    pass


class RateSourceUnavailable(DomainException):
    """Published usury rate could not be fetched or parsed"""

    pass
