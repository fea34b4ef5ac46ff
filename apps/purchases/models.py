from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid

from .exceptions import PurchaseImmutableError


class Purchase(models.Model):
    """
    Scanned purchase ("register"). Append-only ledger entry.

    ``price`` and ``product_name`` are copies taken from the product when
    the purchase is recorded; later product edits never change them.
    ``company`` is derived from the environment's owner on insert.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='purchases'
    )
    product_name = models.CharField(max_length=200)

    environment = models.ForeignKey(
        'environments.Environment',
        on_delete=models.PROTECT,
        related_name='purchases'
    )
    # Denormalized from environment.company for company-scoped queries
    company = models.ForeignKey(
        'accounts.Company',
        on_delete=models.PROTECT,
        related_name='purchases',
        editable=False
    )
    client = models.ForeignKey(
        'accounts.Client',
        on_delete=models.PROTECT,
        related_name='purchases'
    )

    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))],
        editable=False
    )
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = 'purchases'
        indexes = [
            models.Index(fields=['environment', 'client'], name='purchase_env_client_idx'),
            models.Index(fields=['environment', 'product'], name='purchase_env_product_idx'),
            models.Index(fields=['company', 'created_at'], name='purchase_company_created_idx'),
            models.Index(fields=['client', 'created_at'], name='purchase_client_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.product_name} - {self.price} ({self.created_at:%Y-%m-%d})"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise PurchaseImmutableError(f"Purchase {self.pk} cannot be modified")
        self.company_id = self.environment.company_id
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise PurchaseImmutableError(f"Purchase {self.pk} cannot be deleted")
