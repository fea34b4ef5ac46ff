"""Product CRUD operations service."""

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.accounts.models import Company
from apps.environments.services import get_owned_environment, get_environment

from ..models import Product
from .exceptions import ProductNotFoundError, DuplicateBarcodeError, InvalidPriceError

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
MAX_PRICE_DIGITS = 8


def _validate_price(price) -> Decimal:
    try:
        price = Decimal(str(price))
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidPriceError(f"Invalid price: {price!r}")

    if not price.is_finite() or price <= 0:
        raise InvalidPriceError()

    if price.adjusted() >= MAX_PRICE_DIGITS:
        raise InvalidPriceError(f"Price {price} is too large")
    # Stored with two decimal places; sub-cent input would round silently
    if price != price.quantize(CENT):
        raise InvalidPriceError(f"Price {price} has more than two decimal places")
    return price.quantize(CENT)


@transaction.atomic
def create_product(
    *,
    environment_id: UUID,
    company: Company,
    name: str,
    price: Decimal,
    barcode: str
) -> Product:
    """
    Create a product in an environment owned by the company.

    Args:
        environment_id: Environment UUID
        company: Company performing the action (must own the environment)
        name: Product name
        price: Positive unit price
        barcode: Barcode, unique within the environment

    Returns:
        Created Product instance

    Raises:
        InvalidPriceError: If price <= 0
        EnvironmentNotFoundError: If environment doesn't exist
        EnvironmentAccessDeniedError: If company doesn't own the environment
        DuplicateBarcodeError: If barcode already exists in the environment
    """
    price = _validate_price(price)
    environment = get_owned_environment(environment_id=environment_id, company=company)

    if Product.objects.filter(environment=environment, barcode=barcode).exists():
        raise DuplicateBarcodeError(
            f"Barcode '{barcode}' already exists in {environment.name}"
        )

    try:
        with transaction.atomic():
            product = Product.objects.create(
                environment=environment,
                name=name,
                price=price,
                barcode=barcode,
            )
    except IntegrityError:
        raise DuplicateBarcodeError(
            f"Barcode '{barcode}' already exists in {environment.name}"
        )

    logger.info("Created product %s in environment %s", product.id, environment.id)
    return product


def _get_owned_product(product_id: UUID, company: Company, lock: bool = False) -> Product:
    queryset = Product.objects.select_related('environment')
    if lock:
        queryset = queryset.select_for_update(of=('self',))

    try:
        product = queryset.get(id=product_id)
    except Product.DoesNotExist:
        raise ProductNotFoundError(f"Product {product_id} not found")

    # Raises EnvironmentAccessDeniedError for a foreign tenant
    get_owned_environment(environment_id=product.environment_id, company=company)
    return product


@transaction.atomic
def update_product(
    *,
    product_id: UUID,
    company: Company,
    name: Optional[str] = None,
    price: Optional[Decimal] = None
) -> Product:
    """
    Update product name and/or price.

    Barcode and environment are immutable. Purchases already recorded keep
    the price they were made at.

    Raises:
        ProductNotFoundError: If product doesn't exist
        EnvironmentAccessDeniedError: If company doesn't own the product's environment
        InvalidPriceError: If price <= 0
    """
    product = _get_owned_product(product_id, company, lock=True)

    update_fields = ['updated_at']

    if name is not None:
        product.name = name
        update_fields.append('name')

    if price is not None:
        product.price = _validate_price(price)
        update_fields.append('price')

    product.save(update_fields=update_fields)
    return product


@transaction.atomic
def delete_product(*, product_id: UUID, company: Company) -> None:
    """
    Hard delete a product.

    Purchases referencing it keep their frozen price and name; their
    product reference is cleared.

    Raises:
        ProductNotFoundError: If product doesn't exist
        EnvironmentAccessDeniedError: If company doesn't own the product's environment
    """
    product = _get_owned_product(product_id, company, lock=True)
    product.delete()
    logger.info("Deleted product %s from environment %s", product_id, product.environment_id)


def get_product(*, product_id: UUID, environment_id: Optional[UUID] = None) -> Product:
    """
    Get a product, optionally requiring it to belong to an environment.

    Raises:
        ProductNotFoundError: If product doesn't exist or lives in another environment
    """
    filters = {'id': product_id}
    if environment_id is not None:
        filters['environment_id'] = environment_id

    try:
        return Product.objects.select_related('environment').get(**filters)
    except Product.DoesNotExist:
        raise ProductNotFoundError(f"Product {product_id} not found")


def list_products(*, environment_id: UUID) -> QuerySet[Product]:
    """
    Products of an environment ordered by name.

    Raises:
        EnvironmentNotFoundError: If environment doesn't exist
    """
    get_environment(environment_id=environment_id)
    return Product.objects.filter(environment_id=environment_id).order_by('name', 'id')
