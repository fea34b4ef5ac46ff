"""
Domain exceptions for analytics app.

This module defines domain-specific exceptions that are raised by the
statistics queries. They subclass the shared kinds from apps.core, so the
API exception handler renders them without any view-level try/except.

Exception Hierarchy:
    AnalyticsServiceError (base)
    ├── InvalidMetricError       (validation_error)
    └── InvalidDateRangeError    (validation_error)

Usage:
    from apps.analytics.exceptions import InvalidMetricError

    if metric not in RankingMetric.ALL:
        raise InvalidMetricError(f"Invalid metric: {metric}")
"""

from apps.core.exceptions import InvalidInputError, ServiceError


class AnalyticsServiceError(ServiceError):
    """Base exception for all analytics service errors."""

    pass


class InvalidMetricError(AnalyticsServiceError, InvalidInputError):
    """
    Raised when an invalid ranking metric is specified.

    Valid metrics are: spend, count.

    Example:
        raise InvalidMetricError(
            "Invalid metric: 'kg'. Valid options: spend, count"
        )
    """

    default_message = 'Invalid ranking metric.'


class InvalidDateRangeError(AnalyticsServiceError, InvalidInputError):
    """Raised when start_date is after end_date."""

    default_message = 'Start date must be before end date.'
