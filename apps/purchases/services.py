"""
Purchase Services Module
=========================

This module records scanned purchases into the append-only ledger and
accrues loyalty points for them.

Classes:
    PurchaseRecorder: Validates scans, writes purchases with frozen prices,
        accrues points and lists purchase history.

Example:
    Recording a scan in a known environment::

        from apps.purchases.services import PurchaseRecorder

        purchase = PurchaseRecorder.record_purchase(
            client_id=client.id,
            environment_id=environment.id,
            product_id=product.id,
        )
        print(f"{purchase.product_name}: {purchase.price}")
"""

import logging

from django.conf import settings
from django.db import transaction

from apps.catalog.services import (
    ProductNotFoundError,
    find_by_barcode,
    get_product,
    lookup_barcode_for_client,
)
from apps.environments.services import accrue_points, get_membership

from .exceptions import (
    AmbiguousBarcodeError,
    PurchaseAccessDeniedError,
    PurchaseNotFoundError,
)
from .models import Purchase

logger = logging.getLogger(__name__)


class PurchaseRecorder:
    """
    Service for recording purchases and reading the purchase ledger.

    The insert of a Purchase and the accrual of its points happen in one
    database transaction, with the membership row locked first. A client
    leaving concurrently either waits for the purchase to commit or makes
    the purchase fail with NotMemberError; there is never a purchase
    without its point or a point without its purchase.

    Methods:
        record_purchase: Record a purchase of a product in an environment.
        record_scan: Resolve a barcode, then record the purchase.
        get_purchase_history: Purchases in a scope, newest first.
        get_purchase_for_user: A single purchase visible to a principal.
    """

    @staticmethod
    def record_purchase(client_id, environment_id, product_id):
        """
        Record a purchase and accrue points for it.

        Args:
            client_id (UUID): The purchasing client.
            environment_id (UUID): Environment the scan happened in.
            product_id (UUID): Scanned product; must belong to the environment.

        Returns:
            Purchase: The created purchase with ``product`` and
            ``environment`` loaded.

        Raises:
            NotMemberError: If the client is not a member of the environment.
            ProductNotFoundError: If the product doesn't exist in the environment.

        Note:
            ``price`` is copied from the product at this instant and never
            changes afterwards, even if the product is repriced or deleted.
        """
        with transaction.atomic():
            # Lock the membership so a concurrent leave cannot interleave
            membership = get_membership(
                client_id=client_id,
                environment_id=environment_id,
                lock=True,
            )
            product = get_product(product_id=product_id, environment_id=environment_id)

            purchase = Purchase.objects.create(
                product=product,
                product_name=product.name,
                environment=membership.environment,
                client_id=client_id,
                price=product.price,
            )

            membership = accrue_points(
                client_id=client_id,
                environment_id=environment_id,
                delta=settings.POINTS_PER_PURCHASE,
            )

        # Balance after this purchase, read inside the same transaction
        purchase.points_balance = membership.points

        logger.info(
            "Recorded purchase %s: client %s bought product %s in environment %s for %s",
            purchase.id, client_id, product.id, environment_id, purchase.price
        )
        return purchase

    @staticmethod
    def record_scan(client_id, barcode, environment_id=None):
        """
        Resolve a scanned barcode and record the purchase.

        Args:
            client_id (UUID): The scanning client.
            barcode (str): The scanned barcode.
            environment_id (UUID, optional): Environment the scan targets.
                If None, the barcode is looked up in every environment the
                client is a member of.

        Returns:
            Purchase: The created purchase.

        Raises:
            ProductNotFoundError: If no product matches.
            AmbiguousBarcodeError: If products in several environments
                match; the error carries every match.
            NotMemberError: If the client is not a member of the environment.
        """
        if environment_id is not None:
            # Membership is checked first so non-members learn nothing about the catalog
            get_membership(client_id=client_id, environment_id=environment_id)
            product = find_by_barcode(environment_id=environment_id, barcode=barcode)
            if product is None:
                raise ProductNotFoundError(f"No product with barcode '{barcode}' in this environment")
        else:
            lookup = lookup_barcode_for_client(client_id=client_id, barcode=barcode)
            if not lookup.matches:
                raise ProductNotFoundError(f"No product with barcode '{barcode}' in your environments")
            if not lookup.is_unique:
                raise AmbiguousBarcodeError(matches=lookup.matches)
            product = lookup.product

        return PurchaseRecorder.record_purchase(
            client_id=client_id,
            environment_id=product.environment_id,
            product_id=product.id,
        )

    @staticmethod
    def get_purchase_history(client_id=None, environment_id=None, company_id=None):
        """
        List purchases in a scope, newest first.

        All given filters are combined. The result is a lazy queryset.
        """
        purchases = Purchase.objects.select_related(
            'product',
            'environment',
            'client__user',
        )

        if client_id is not None:
            purchases = purchases.filter(client_id=client_id)
        if environment_id is not None:
            purchases = purchases.filter(environment_id=environment_id)
        if company_id is not None:
            purchases = purchases.filter(company_id=company_id)

        return purchases.order_by('-created_at', '-id')

    @staticmethod
    def get_purchase_for_user(purchase_id, user):
        """
        Get a purchase visible to the principal.

        The purchasing client and the company owning the environment can
        see a purchase.

        Raises:
            PurchaseNotFoundError: If the purchase doesn't exist.
            PurchaseAccessDeniedError: If the principal is outside its tenant.
        """
        try:
            purchase = Purchase.objects.select_related(
                'product', 'environment', 'client__user'
            ).get(id=purchase_id)
        except Purchase.DoesNotExist:
            raise PurchaseNotFoundError()

        if user.is_client and purchase.client_id == user.client_profile.id:
            return purchase
        if user.is_company and purchase.company_id == user.company_profile.id:
            return purchase

        raise PurchaseAccessDeniedError()
