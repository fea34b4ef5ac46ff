# ==========================================
# apps/catalog/models.py
# ==========================================

from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class Product(models.Model):
    """Product sold inside one environment. Barcodes are unique per environment."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    environment = models.ForeignKey('environments.Environment', on_delete=models.CASCADE, related_name='products')
    name = models.CharField(max_length=200, db_index=True)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    barcode = models.CharField(max_length=64)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'products'
        constraints = [
            models.UniqueConstraint(
                fields=['environment', 'barcode'],
                name='unique_barcode_per_environment',
            ),
            models.CheckConstraint(
                check=models.Q(price__gt=0),
                name='product_price_positive',
            ),
        ]
        indexes = [
            models.Index(fields=['barcode'], name='product_barcode_idx'),
            models.Index(fields=['environment', 'name'], name='product_env_name_idx'),
        ]
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.barcode})"
