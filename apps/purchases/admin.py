# ==========================================
# apps/purchases/admin.py
# ==========================================

from django.contrib import admin
from django.db.models import Sum
from .models import Purchase


@admin.register(Purchase)
class PurchaseAdmin(admin.ModelAdmin):
    """
    Admin interface for the purchase ledger.

    Purchases are append-only, so the admin is read-only:
    - Purchase listing with frozen product name and price
    - Filtering by company, environment, date
    - Revenue total for the current selection
    """

    list_display = [
        'product_name',
        'get_client_name',
        'environment',
        'company',
        'price',
        'created_at',
    ]

    list_filter = [
        'company',
        'environment',
        'created_at',
    ]

    search_fields = [
        'product_name',
        'client__user__email',
        'client__user__display_name',
        'environment__name',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'
    list_select_related = ['client__user', 'environment', 'company']

    readonly_fields = [
        'id',
        'product',
        'product_name',
        'environment',
        'company',
        'client',
        'price',
        'created_at',
    ]

    def get_client_name(self, obj):
        return obj.client.get_display_name()
    get_client_name.short_description = 'Client'
    get_client_name.admin_order_field = 'client__user__display_name'

    def changelist_view(self, request, extra_context=None):
        """Show total revenue of the filtered purchases."""
        response = super().changelist_view(request, extra_context=extra_context)
        try:
            queryset = response.context_data['cl'].queryset
        except (AttributeError, KeyError):
            return response
        response.context_data['total_revenue'] = queryset.aggregate(total=Sum('price'))['total']
        return response

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
