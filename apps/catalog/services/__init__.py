"""
Catalog services package.

This package contains business logic for product management,
separated from views and serializers.
"""

from .exceptions import (
    CatalogServiceError,
    ProductNotFoundError,
    DuplicateBarcodeError,
    InvalidPriceError,
)

from .product_management import (
    create_product,
    update_product,
    delete_product,
    get_product,
    list_products,
)

from .barcode_lookup import (
    BarcodeLookup,
    LookupStatus,
    find_by_barcode,
    lookup_barcode_for_client,
)

__all__ = [
    # Exceptions
    'CatalogServiceError',
    'ProductNotFoundError',
    'DuplicateBarcodeError',
    'InvalidPriceError',
    # Product management
    'create_product',
    'update_product',
    'delete_product',
    'get_product',
    'list_products',
    # Barcode lookup
    'BarcodeLookup',
    'LookupStatus',
    'find_by_barcode',
    'lookup_barcode_for_client',
]
