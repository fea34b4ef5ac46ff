from rest_framework import serializers
from .models import Purchase


# =============================================================================
# Input Serializers
# =============================================================================

class PurchaseFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for purchase filtering.

    Query Parameters:
        environment (UUID): Filter by environment ID
        date_from (date): Filter purchases from this date
        date_to (date): Filter purchases to this date
    """

    environment = serializers.UUIDField(required=False)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)

    def validate(self, attrs):
        """Validate date range."""
        date_from = attrs.get('date_from')
        date_to = attrs.get('date_to')

        if date_from and date_to:
            if date_from > date_to:
                raise serializers.ValidationError({
                    'date_to': 'End date must be after start date'
                })

        return attrs


class PurchaseCreateSerializer(serializers.Serializer):
    """Input serializer for recording a purchase of a known product."""

    environment = serializers.UUIDField()
    product = serializers.UUIDField()


class ScanSerializer(serializers.Serializer):
    """
    Input serializer for recording a purchase from a scanned barcode.

    Without ``environment`` the barcode is resolved across every
    environment the client belongs to.
    """

    barcode = serializers.CharField(max_length=64)
    environment = serializers.UUIDField(required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class PurchaseSerializer(serializers.ModelSerializer):
    """Main serializer for purchases."""

    product_id = serializers.UUIDField(read_only=True, allow_null=True)
    environment_id = serializers.UUIDField(read_only=True)
    environment_name = serializers.CharField(source='environment.name', read_only=True)
    company_id = serializers.UUIDField(read_only=True)
    client_id = serializers.UUIDField(read_only=True)
    client_name = serializers.SerializerMethodField()

    class Meta:
        model = Purchase
        fields = [
            'id',
            'product_id',
            'product_name',
            'environment_id',
            'environment_name',
            'company_id',
            'client_id',
            'client_name',
            'price',
            'created_at',
        ]
        read_only_fields = fields

    def get_client_name(self, obj) -> str:
        return obj.client.get_display_name()


class PurchaseReceiptSerializer(PurchaseSerializer):
    """Purchase plus the membership's point balance right after it."""

    points = serializers.IntegerField(source='points_balance', read_only=True)

    class Meta(PurchaseSerializer.Meta):
        fields = PurchaseSerializer.Meta.fields + ['points']
        read_only_fields = fields
