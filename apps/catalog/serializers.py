from rest_framework import serializers
from .models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Main serializer for products."""

    environment_id = serializers.UUIDField(read_only=True)
    environment_name = serializers.CharField(source='environment.name', read_only=True)

    class Meta:
        model = Product
        fields = [
            'id',
            'environment_id',
            'environment_name',
            'name',
            'price',
            'barcode',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ProductCreateSerializer(serializers.Serializer):
    """Input serializer for product creation."""

    environment = serializers.UUIDField()
    name = serializers.CharField(max_length=200)
    # Range checks happen in the service so they surface as InvalidPriceError
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    barcode = serializers.CharField(max_length=64)


class ProductUpdateSerializer(serializers.Serializer):
    """Input serializer for product updates. Only name and price are mutable."""

    name = serializers.CharField(max_length=200, required=False)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)


class ProductFilterSerializer(serializers.Serializer):
    """Validate product list query parameters."""

    environment = serializers.UUIDField(required=True)


class BarcodeLookupQuerySerializer(serializers.Serializer):
    """
    Validate barcode lookup query parameters.

    Query Parameters:
        barcode (str): Scanned barcode
        environment (UUID): Restrict the lookup to one environment
    """

    barcode = serializers.CharField(max_length=64)
    environment = serializers.UUIDField(required=False)


class BarcodeLookupSerializer(serializers.Serializer):
    """Render a BarcodeLookup: status plus environment-qualified matches."""

    barcode = serializers.CharField()
    status = serializers.CharField()
    matches = ProductSerializer(many=True)
