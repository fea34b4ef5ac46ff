"""
Serializers for analytics app.

This module contains:
1. Input serializers - Query parameter validation
2. Response serializers - API documentation and output formatting

Input Serializers:
    PeriodQuerySerializer - Validates period and date range parameters
    RankingQuerySerializer - Validates ranking metric and period
    TopProductsQuerySerializer - Validates product ranking parameters
    CompanyStatisticsQuerySerializer - Validates company statistics scope

Response Serializers:
    RankingResponseSerializer - Environment leaderboard
    TopProductSerializer - Product ranking entry
    CompanyStatisticsSerializer - Company revenue statistics
    ClientStatisticsSerializer - One client's statistics in an environment
    MembershipSummarySerializer - Cross-environment summary row
"""

from rest_framework import serializers
from datetime import datetime, timedelta

from .analytics import RankingMetric


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class PeriodQuerySerializer(serializers.Serializer):
    """
    Validate period and date range query parameters.

    Query Parameters:
        period (str): Month period in YYYY-MM format (e.g., '2025-01')
        start_date (date): Start of date range
        end_date (date): End of date range

    Note:
        If 'period' is provided, it takes precedence and is converted
        to start_date and end_date for the full month.
    """

    period = serializers.RegexField(
        regex=r'^\d{4}-(0[1-9]|1[0-2])$',
        required=False,
        allow_blank=True,
        help_text='Month period in YYYY-MM format'
    )
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        """Parse period into date range if provided."""
        period = attrs.get('period')

        if period:
            year, month = (int(part) for part in period.split('-'))
            attrs['start_date'] = datetime(year, month, 1).date()
            # Last day of month
            if month == 12:
                attrs['end_date'] = datetime(year + 1, 1, 1).date() - timedelta(days=1)
            else:
                attrs['end_date'] = datetime(year, month + 1, 1).date() - timedelta(days=1)

        start = attrs.get('start_date')
        end = attrs.get('end_date')
        if start and end and start > end:
            raise serializers.ValidationError({
                'start_date': 'Start date must be before end date'
            })

        return attrs


class RankingQuerySerializer(PeriodQuerySerializer):
    """
    Validate query parameters for the environment ranking.

    Query Parameters:
        metric (str): 'spend' (summed price) or 'count' (purchases)
    """

    metric = serializers.ChoiceField(
        choices=RankingMetric.ALL,
        default=RankingMetric.SPEND,
        help_text="Ranking metric: 'spend' or 'count'"
    )


class TopProductsQuerySerializer(PeriodQuerySerializer):
    """
    Validate query parameters for the product ranking.

    Query Parameters:
        limit (int): Number of results to return (1-100)
    """

    limit = serializers.IntegerField(
        min_value=1,
        max_value=100,
        required=False,
        default=10,
        help_text='Number of results (1-100)'
    )


class CompanyStatisticsQuerySerializer(PeriodQuerySerializer):
    """
    Validate query parameters for company statistics.

    Query Parameters:
        environment (UUID): Restrict to one owned environment
    """

    environment = serializers.UUIDField(required=False)


# =============================================================================
# Response Serializers
# =============================================================================

class RankingEntrySerializer(serializers.Serializer):
    """Single leaderboard row."""
    rank = serializers.IntegerField()
    client_id = serializers.UUIDField()
    display_name = serializers.CharField()
    total_spent = serializers.DecimalField(max_digits=12, decimal_places=2)
    purchases_count = serializers.IntegerField()


class RankingResponseSerializer(serializers.Serializer):
    """Response serializer for environment ranking."""
    environment_id = serializers.UUIDField()
    metric = serializers.CharField()
    participants = serializers.IntegerField()
    results = RankingEntrySerializer(many=True)


class ProductStatsSerializer(serializers.Serializer):
    """Product with its purchase count and revenue."""
    product_id = serializers.UUIDField()
    product_name = serializers.CharField()
    purchases_count = serializers.IntegerField()
    revenue = serializers.DecimalField(max_digits=12, decimal_places=2)


class TopProductSerializer(ProductStatsSerializer):
    """Product ranking entry."""
    rank = serializers.IntegerField()


class TopSpenderSerializer(serializers.Serializer):
    client_id = serializers.UUIDField()
    display_name = serializers.CharField()
    total_spent = serializers.DecimalField(max_digits=12, decimal_places=2)
    purchases_count = serializers.IntegerField()


class CompanyStatisticsSerializer(serializers.Serializer):
    """Response serializer for company statistics."""
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    units_sold = serializers.IntegerField()
    best_selling_product = ProductStatsSerializer(allow_null=True)
    top_spender = TopSpenderSerializer(allow_null=True)
    environments_count = serializers.IntegerField()
    members_count = serializers.IntegerField()


class FavoriteProductSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    product_name = serializers.CharField()
    count = serializers.IntegerField()
    first_purchased_at = serializers.DateTimeField()
    last_purchased_at = serializers.DateTimeField()


class ClientStatisticsSerializer(serializers.Serializer):
    """Response serializer for one client's statistics in an environment."""
    environment_id = serializers.UUIDField()
    total_spent = serializers.DecimalField(max_digits=12, decimal_places=2)
    purchases_count = serializers.IntegerField()
    points = serializers.IntegerField()
    favorite_product = FavoriteProductSerializer(allow_null=True)
    rank = serializers.IntegerField(allow_null=True)
    participants = serializers.IntegerField()


class MembershipSummarySerializer(serializers.Serializer):
    """One row of the cross-environment summary."""
    environment_id = serializers.UUIDField()
    environment_name = serializers.CharField()
    total_spent = serializers.DecimalField(max_digits=12, decimal_places=2)
    purchases_count = serializers.IntegerField()
    points = serializers.IntegerField()
    joined_at = serializers.DateTimeField()


class ErrorSerializer(serializers.Serializer):
    """Standard error response serializer."""
    error = serializers.CharField()
    kind = serializers.CharField()
