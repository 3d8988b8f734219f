"""
Exceptions raised by the review analytics engine.

Every error carries a human readable ``detail`` and a stable ``error_code``
so the HTTP layer can map them onto its response envelope.
"""

from typing import Iterable, Optional


class AnalyticsError(Exception):
    """Base analytics error with consistent structure"""

    def __init__(self, detail: str, error_code: Optional[str] = None):
        super().__init__(detail)
        self.detail = detail
        self.error_code = error_code


class InvalidPeriodError(AnalyticsError):
    """Period token outside the set supported by the operation"""

    def __init__(self, period: str, supported: Iterable[str]):
        self.period = period
        self.supported = tuple(supported)
        super().__init__(
            detail=f"Invalid period. Must be one of: {', '.join(self.supported)}",
            error_code="INVALID_PERIOD",
        )


class StoreError(AnalyticsError):
    """Review record store failure"""

    def __init__(self, detail: str = "Review store query failed", error_code: str = "STORE_ERROR"):
        super().__init__(detail=detail, error_code=error_code)


class AggregationFailure(AnalyticsError):
    """Aggregation aborted because its record store query failed"""

    def __init__(
        self, detail: str = "Error aggregating reviews", error_code: str = "AGGREGATION_FAILED"
    ):
        super().__init__(detail=detail, error_code=error_code)


class AnalyticsCancelled(AnalyticsError):
    """Aggregation abandoned by the caller or by the store timeout"""

    def __init__(self, detail: str = "Aggregation cancelled", error_code: str = "CANCELLED"):
        super().__init__(detail=detail, error_code=error_code)
