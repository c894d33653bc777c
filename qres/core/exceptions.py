# qres/core/exceptions.py
"""Error taxonomy for the calculation engine."""


class QualityCalculationError(ValueError):
    """Base class for all calculation errors raised by qres."""


class InvalidRatingError(QualityCalculationError):
    """Raised when a severity/occurrence/detection rating is not an integer in [1, 10]."""


class InsufficientDataError(QualityCalculationError):
    """Raised when a statistical routine receives fewer points than its formula needs."""


class DivisionByZeroError(QualityCalculationError, ZeroDivisionError):
    """Raised when a capability index is requested for a non-positive standard deviation."""
