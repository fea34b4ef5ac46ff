"""Domain-specific exceptions for catalog services."""

from apps.core.exceptions import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    ServiceError,
)


class CatalogServiceError(ServiceError):
    """Base exception for catalog services."""
    pass


class ProductNotFoundError(CatalogServiceError, NotFoundError):
    """Raised when product does not exist in the requested environment."""
    default_message = 'Product not found.'


class DuplicateBarcodeError(CatalogServiceError, ConflictError):
    """Raised when the barcode is already used in the environment."""
    default_message = 'A product with this barcode already exists in this environment.'


class InvalidPriceError(CatalogServiceError, InvalidInputError):
    """Raised when a price is zero or negative."""
    default_message = 'Price must be greater than zero.'
