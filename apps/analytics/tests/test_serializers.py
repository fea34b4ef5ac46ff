"""
Tests for analytics input serializers.
"""
from datetime import date
from apps.analytics.serializers import (
    PeriodQuerySerializer,
    RankingQuerySerializer,
    TopProductsQuerySerializer,
)


class TestPeriodQuerySerializer:
    """Test PeriodQuerySerializer validation."""

    def test_valid_period_format(self):
        """Test valid period format (YYYY-MM)."""
        serializer = PeriodQuerySerializer(data={'period': '2025-01'})
        assert serializer.is_valid()
        assert serializer.validated_data['start_date'] == date(2025, 1, 1)
        assert serializer.validated_data['end_date'] == date(2025, 1, 31)

    def test_valid_period_december(self):
        """Test period conversion for December (edge case)."""
        serializer = PeriodQuerySerializer(data={'period': '2024-12'})
        assert serializer.is_valid()
        assert serializer.validated_data['end_date'] == date(2024, 12, 31)

    def test_invalid_period_month(self):
        serializer = PeriodQuerySerializer(data={'period': '2025-13'})
        assert not serializer.is_valid()
        assert 'period' in serializer.errors

    def test_inverted_date_range(self):
        serializer = PeriodQuerySerializer(data={
            'start_date': '2025-02-01',
            'end_date': '2025-01-01',
        })
        assert not serializer.is_valid()
        assert 'start_date' in serializer.errors


class TestRankingQuerySerializer:
    """Test RankingQuerySerializer validation."""

    def test_default_metric(self):
        serializer = RankingQuerySerializer(data={})
        assert serializer.is_valid()
        assert serializer.validated_data['metric'] == 'spend'

    def test_invalid_metric(self):
        serializer = RankingQuerySerializer(data={'metric': 'rating'})
        assert not serializer.is_valid()
        assert 'metric' in serializer.errors


class TestTopProductsQuerySerializer:
    """Test TopProductsQuerySerializer validation."""

    def test_default_limit(self):
        serializer = TopProductsQuerySerializer(data={})
        assert serializer.is_valid()
        assert serializer.validated_data['limit'] == 10

    def test_limit_too_high(self):
        serializer = TopProductsQuerySerializer(data={'limit': 101})
        assert not serializer.is_valid()
        assert 'limit' in serializer.errors
