# ==========================================
# apps/catalog/admin.py
# ==========================================

from django.contrib import admin
from .models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Admin interface for products, filterable by environment."""

    list_display = ['name', 'barcode', 'price', 'environment', 'updated_at']
    list_filter = ['environment']
    search_fields = ['name', 'barcode', 'environment__name']
    raw_id_fields = ['environment']
    readonly_fields = ['created_at', 'updated_at']
