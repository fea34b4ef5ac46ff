"""
Domain exceptions for purchases app.

This module defines the exception hierarchy for purchase-related errors,
providing specific error types for better error handling and testing.
"""

from apps.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    ServiceError,
)


class PurchaseServiceError(ServiceError):
    """Base exception for purchase service errors."""
    pass


class AmbiguousBarcodeError(PurchaseServiceError, ConflictError):
    """
    Raised when a scanned barcode matches products in several environments.

    ``matches`` holds the environment-qualified products so the caller can
    ask the client to pick one.
    """

    default_message = 'Barcode matches products in several environments. Choose an environment.'

    def __init__(self, message=None, matches=None):
        super().__init__(message)
        self.matches = list(matches or [])

    def to_dict(self):
        data = super().to_dict()
        data['matches'] = [
            {
                'environment_id': str(product.environment_id),
                'environment_name': product.environment.name,
                'product_id': str(product.id),
                'product_name': product.name,
                'price': str(product.price),
            }
            for product in self.matches
        ]
        return data


class PurchaseNotFoundError(PurchaseServiceError, NotFoundError):
    """Purchase does not exist."""

    default_message = 'Purchase not found.'


class PurchaseImmutableError(PurchaseServiceError, InternalError):
    """Raised when code tries to modify or delete a recorded purchase."""

    default_message = 'Purchases are immutable once recorded.'


class PurchaseAccessDeniedError(PurchaseServiceError, ForbiddenError):
    """Raised when a principal reads a purchase outside its tenant."""

    default_message = 'You do not have access to this purchase.'
