import pytest
from decimal import Decimal
from unittest.mock import patch
from django.db import OperationalError
from django.test import override_settings

from apps.catalog.services import ProductNotFoundError
from apps.environments.models import Membership
from apps.environments.services import NotMemberError
from apps.purchases.exceptions import (
    AmbiguousBarcodeError,
    PurchaseAccessDeniedError,
    PurchaseImmutableError,
    PurchaseNotFoundError,
)
from apps.purchases.models import Purchase
from apps.purchases.services import PurchaseRecorder


@pytest.mark.django_db
class TestRecordPurchase:
    """Tests for PurchaseRecorder.record_purchase"""

    def test_records_purchase_and_accrues_point(self, shopper, shop_env, coffee, shopper_membership):
        purchase = PurchaseRecorder.record_purchase(
            client_id=shopper.client_profile.id,
            environment_id=shop_env.id,
            product_id=coffee.id,
        )

        assert purchase.price == Decimal('3.50')
        assert purchase.product_name == 'Coffee'
        assert purchase.company_id == shop_env.company_id
        assert purchase.points_balance == 1

        shopper_membership.refresh_from_db()
        assert shopper_membership.points == 1

    def test_each_purchase_adds_one_point(self, shopper, shop_env, coffee, croissant, shopper_membership):
        for product in (coffee, croissant, coffee):
            PurchaseRecorder.record_purchase(
                client_id=shopper.client_profile.id,
                environment_id=shop_env.id,
                product_id=product.id,
            )

        shopper_membership.refresh_from_db()
        assert shopper_membership.points == 3
        assert Purchase.objects.filter(client=shopper.client_profile).count() == 3

    @override_settings(POINTS_PER_PURCHASE=5)
    def test_points_per_purchase_is_configurable(self, shopper, shop_env, coffee, shopper_membership):
        PurchaseRecorder.record_purchase(
            client_id=shopper.client_profile.id,
            environment_id=shop_env.id,
            product_id=coffee.id,
        )

        shopper_membership.refresh_from_db()
        assert shopper_membership.points == 5

    def test_non_member_cannot_purchase(self, outsider, shop_env, coffee):
        with pytest.raises(NotMemberError):
            PurchaseRecorder.record_purchase(
                client_id=outsider.client_profile.id,
                environment_id=shop_env.id,
                product_id=coffee.id,
            )

        assert Purchase.objects.count() == 0

    def test_product_from_other_environment_is_rejected(
        self, shopper, shop_env, foreign_product, shopper_membership
    ):
        with pytest.raises(ProductNotFoundError):
            PurchaseRecorder.record_purchase(
                client_id=shopper.client_profile.id,
                environment_id=shop_env.id,
                product_id=foreign_product.id,
            )

        shopper_membership.refresh_from_db()
        assert shopper_membership.points == 0
        assert Purchase.objects.count() == 0

    def test_failed_accrual_rolls_back_purchase(self, shopper, shop_env, coffee, shopper_membership):
        """Purchase insert and points accrual commit together or not at all."""
        with patch('apps.purchases.services.accrue_points') as mock_accrue:
            mock_accrue.side_effect = OperationalError('database is locked')

            with pytest.raises(OperationalError):
                PurchaseRecorder.record_purchase(
                    client_id=shopper.client_profile.id,
                    environment_id=shop_env.id,
                    product_id=coffee.id,
                )

        mock_accrue.assert_called_once()
        assert Purchase.objects.count() == 0
        shopper_membership.refresh_from_db()
        assert shopper_membership.points == 0

    def test_price_is_frozen_at_purchase_time(self, shopper, shop_env, coffee, shopper_membership):
        purchase = PurchaseRecorder.record_purchase(
            client_id=shopper.client_profile.id,
            environment_id=shop_env.id,
            product_id=coffee.id,
        )

        coffee.price = Decimal('9.99')
        coffee.name = 'Premium Coffee'
        coffee.save()

        purchase.refresh_from_db()
        assert purchase.price == Decimal('3.50')
        assert purchase.product_name == 'Coffee'

    def test_purchase_survives_product_deletion(self, shopper, shop_env, coffee, shopper_membership):
        purchase = PurchaseRecorder.record_purchase(
            client_id=shopper.client_profile.id,
            environment_id=shop_env.id,
            product_id=coffee.id,
        )

        coffee.delete()

        purchase.refresh_from_db()
        assert purchase.product_id is None
        assert purchase.product_name == 'Coffee'
        assert purchase.price == Decimal('3.50')


@pytest.mark.django_db
class TestRecordScan:
    """Tests for PurchaseRecorder.record_scan"""

    def test_scan_in_environment(self, shopper, shop_env, coffee, shopper_membership):
        purchase = PurchaseRecorder.record_scan(
            client_id=shopper.client_profile.id,
            barcode=coffee.barcode,
            environment_id=shop_env.id,
        )

        assert purchase.product_id == coffee.id

    def test_scan_unknown_barcode(self, shopper, shop_env, shopper_membership):
        with pytest.raises(ProductNotFoundError):
            PurchaseRecorder.record_scan(
                client_id=shopper.client_profile.id,
                barcode='0000000000000',
                environment_id=shop_env.id,
            )

    def test_scan_requires_membership(self, outsider, shop_env, coffee):
        with pytest.raises(NotMemberError):
            PurchaseRecorder.record_scan(
                client_id=outsider.client_profile.id,
                barcode=coffee.barcode,
                environment_id=shop_env.id,
            )

    def test_scan_without_environment_resolves_unique_match(
        self, shopper, shop_env, coffee, shopper_membership
    ):
        purchase = PurchaseRecorder.record_scan(
            client_id=shopper.client_profile.id,
            barcode=coffee.barcode,
        )

        assert purchase.environment_id == shop_env.id

    def test_scan_without_environment_ignores_non_member_environments(
        self, shopper, coffee, foreign_product, shopper_membership
    ):
        with pytest.raises(ProductNotFoundError):
            PurchaseRecorder.record_scan(
                client_id=shopper.client_profile.id,
                barcode=foreign_product.barcode,
            )

    def test_ambiguous_barcode_reports_every_match(
        self, shopper, coffee, kiosk_coffee, shopper_membership, shopper_kiosk_membership
    ):
        with pytest.raises(AmbiguousBarcodeError) as exc_info:
            PurchaseRecorder.record_scan(
                client_id=shopper.client_profile.id,
                barcode=coffee.barcode,
            )

        assert {p.id for p in exc_info.value.matches} == {coffee.id, kiosk_coffee.id}
        assert Purchase.objects.count() == 0

    def test_ambiguous_barcode_resolved_by_environment(
        self, shopper, kiosk_env, coffee, kiosk_coffee, shopper_membership, shopper_kiosk_membership
    ):
        purchase = PurchaseRecorder.record_scan(
            client_id=shopper.client_profile.id,
            barcode=coffee.barcode,
            environment_id=kiosk_env.id,
        )

        assert purchase.product_id == kiosk_coffee.id
        assert purchase.price == Decimal('2.90')
        assert Membership.objects.get(pk=shopper_kiosk_membership.pk).points == 1
        assert Membership.objects.get(pk=shopper_membership.pk).points == 0


@pytest.mark.django_db
class TestPurchaseLedger:
    """Tests for history queries and immutability."""

    def _buy(self, user, environment, product):
        return PurchaseRecorder.record_purchase(
            client_id=user.client_profile.id,
            environment_id=environment.id,
            product_id=product.id,
        )

    def test_history_is_newest_first(self, shopper, shop_env, coffee, croissant, shopper_membership):
        first = self._buy(shopper, shop_env, coffee)
        second = self._buy(shopper, shop_env, croissant)

        history = list(PurchaseRecorder.get_purchase_history(client_id=shopper.client_profile.id))

        assert [p.id for p in history] == [second.id, first.id]

    def test_history_filters_by_company(
        self, shopper, shop_env, coffee, shopper_membership, other_owner
    ):
        self._buy(shopper, shop_env, coffee)

        own = PurchaseRecorder.get_purchase_history(company_id=shop_env.company_id)
        other = PurchaseRecorder.get_purchase_history(company_id=other_owner.company_profile.id)

        assert own.count() == 1
        assert other.count() == 0

    def test_purchase_cannot_be_modified(self, shopper, shop_env, coffee, shopper_membership):
        purchase = self._buy(shopper, shop_env, coffee)
        purchase.product_name = 'Changed'

        with pytest.raises(PurchaseImmutableError):
            purchase.save()

    def test_purchase_cannot_be_deleted(self, shopper, shop_env, coffee, shopper_membership):
        purchase = self._buy(shopper, shop_env, coffee)

        with pytest.raises(PurchaseImmutableError):
            purchase.delete()

        assert Purchase.objects.filter(pk=purchase.pk).exists()

    def test_purchase_visible_to_buyer_and_owner(
        self, shopper, shop_owner, shop_env, coffee, shopper_membership
    ):
        purchase = self._buy(shopper, shop_env, coffee)

        assert PurchaseRecorder.get_purchase_for_user(purchase_id=purchase.id, user=shopper) == purchase
        assert PurchaseRecorder.get_purchase_for_user(purchase_id=purchase.id, user=shop_owner) == purchase

    def test_purchase_hidden_from_other_tenants(
        self, shopper, other_owner, second_shopper, shop_env, coffee, shopper_membership
    ):
        purchase = self._buy(shopper, shop_env, coffee)

        with pytest.raises(PurchaseAccessDeniedError):
            PurchaseRecorder.get_purchase_for_user(purchase_id=purchase.id, user=other_owner)
        with pytest.raises(PurchaseAccessDeniedError):
            PurchaseRecorder.get_purchase_for_user(purchase_id=purchase.id, user=second_shopper)

    def test_missing_purchase(self, shopper):
        import uuid

        with pytest.raises(PurchaseNotFoundError):
            PurchaseRecorder.get_purchase_for_user(purchase_id=uuid.uuid4(), user=shopper)
