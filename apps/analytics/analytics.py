"""
Analytics Module
=================

This module derives rankings and statistics from the purchase ledger.
Nothing is cached or maintained incrementally: every call recomputes from
the Purchase rows in scope.

Classes:
    StatisticsQueries: Static methods for rankings and statistics.

Key Features:
    - Spending and purchase-count rankings per environment
    - Product rankings per environment
    - Company-wide or per-environment revenue statistics
    - Client statistics with favorite product and rank position
    - Cross-environment summary, one row per membership

Example:
    Getting an environment leaderboard::

        from apps.analytics.analytics import StatisticsQueries

        ranking = StatisticsQueries.environment_ranking(environment.id)
        for row in ranking:
            print(f"{row['rank']}. {row['display_name']}: {row['total_spent']}")

Note:
    This module is read-only and doesn't modify any data. Ties are broken
    deterministically so repeated calls return the same order.
"""

from decimal import Decimal

from django.db.models import Count, Max, Min, Sum
from django.db.models.functions import Coalesce

from apps.environments.models import Environment, Membership
from apps.environments.services import get_membership
from apps.purchases.models import Purchase

from .exceptions import InvalidDateRangeError, InvalidMetricError


class RankingMetric:
    SPEND = 'spend'
    COUNT = 'count'

    ALL = (SPEND, COUNT)


def _display_name(display_name, email):
    """Same fallback as User.get_display_name, computed from values() rows."""
    return display_name or email.split('@')[0]


def _scoped_purchases(environment_id=None, company_id=None, client_id=None,
                      start_date=None, end_date=None):
    if start_date and end_date and start_date > end_date:
        raise InvalidDateRangeError()

    purchases = Purchase.objects.all()
    if environment_id is not None:
        purchases = purchases.filter(environment_id=environment_id)
    if company_id is not None:
        purchases = purchases.filter(company_id=company_id)
    if client_id is not None:
        purchases = purchases.filter(client_id=client_id)
    if start_date:
        purchases = purchases.filter(created_at__date__gte=start_date)
    if end_date:
        purchases = purchases.filter(created_at__date__lte=end_date)

    # Drop the model's default ordering so it doesn't leak into GROUP BY
    return purchases.order_by()


def _product_counts(purchases):
    """
    Per-product purchase count, revenue and first/last purchase time.

    Rows are grouped by product and report the product's current name, so
    a renamed product keeps a single row; the frozen ``Purchase.product_name``
    stays on the ledger entries themselves. Purchases of deleted products have
    no product to rank and are skipped.
    """
    return (
        purchases
        .filter(product__isnull=False)
        .values('product_id', 'product__name')
        .annotate(
            purchases_count=Count('id'),
            revenue=Sum('price'),
            first_purchased_at=Min('created_at'),
            last_purchased_at=Max('created_at'),
        )
    )


def _product_row(item):
    return {
        'product_id': item['product_id'],
        'product_name': item['product__name'],
        'purchases_count': item['purchases_count'],
        'revenue': item['revenue'],
    }


class StatisticsQueries:
    """
    Read-only queries over the purchase ledger.

    All methods return plain dictionaries or lists, not Django objects,
    making them suitable for JSON serialization in API responses.

    Methods:
        environment_ranking: Clients of an environment ranked by spend or count.
        top_products: Products of an environment ranked by purchase count.
        company_statistics: Revenue, units, best seller and top spender.
        client_statistics: One client's totals, favorite product and rank.
        client_summary: One aggregate row per membership of a client.

    Note:
        Access control is not done here. Callers check that the principal
        owns or belongs to the environment before calling.

        Product rankings (top products, best seller, favorite product) name
        products by their current name. Money totals always use the frozen
        purchase price.
    """

    @staticmethod
    def environment_ranking(environment_id, metric=RankingMetric.SPEND,
                            start_date=None, end_date=None):
        """
        Rank the clients who purchased in an environment.

        Args:
            environment_id (UUID): The environment to rank.
            metric (str, optional): 'spend' (summed price) or 'count'
                (number of purchases). Defaults to 'spend'.
            start_date (date, optional): Only purchases on or after this date.
            end_date (date, optional): Only purchases on or before this date.

        Returns:
            list[dict]: One entry per client with at least one purchase in
            scope, each containing:
                - rank (int): 1-based, contiguous.
                - client_id (UUID)
                - display_name (str)
                - total_spent (Decimal)
                - purchases_count (int)

        Raises:
            InvalidMetricError: If metric is not 'spend' or 'count'.

        Note:
            Ties on the chosen metric are broken by the other metric
            (descending), then by client ID ascending.
        """
        if metric not in RankingMetric.ALL:
            raise InvalidMetricError(
                f"Invalid metric: '{metric}'. Valid options: {', '.join(RankingMetric.ALL)}"
            )

        purchases = _scoped_purchases(
            environment_id=environment_id,
            start_date=start_date,
            end_date=end_date,
        )

        if metric == RankingMetric.SPEND:
            ordering = ('-total_spent', '-purchases_count', 'client_id')
        else:
            ordering = ('-purchases_count', '-total_spent', 'client_id')

        rows = (
            purchases
            .values('client_id', 'client__user__display_name', 'client__user__email')
            .annotate(
                total_spent=Sum('price'),
                purchases_count=Count('id'),
            )
            .order_by(*ordering)
        )

        return [
            {
                'rank': position,
                'client_id': row['client_id'],
                'display_name': _display_name(
                    row['client__user__display_name'],
                    row['client__user__email'],
                ),
                'total_spent': row['total_spent'],
                'purchases_count': row['purchases_count'],
            }
            for position, row in enumerate(rows, start=1)
        ]

    @staticmethod
    def top_products(environment_id, limit=10, start_date=None, end_date=None):
        """
        Rank the products of an environment by how often they were bought.

        Ordering is purchase count desc, then revenue desc, then name.

        Returns:
            list[dict]: rank, product_id, product_name, purchases_count, revenue.
        """
        purchases = _scoped_purchases(
            environment_id=environment_id,
            start_date=start_date,
            end_date=end_date,
        )

        items = _product_counts(purchases).order_by(
            '-purchases_count', '-revenue', 'product__name', 'product_id'
        )[:limit]

        return [
            {'rank': position, **_product_row(item)}
            for position, item in enumerate(items, start=1)
        ]

    @staticmethod
    def company_statistics(company_id, environment_id=None, start_date=None, end_date=None):
        """
        Revenue statistics for a company, whole or for one environment.

        Args:
            company_id (UUID): The company.
            environment_id (UUID, optional): Restrict to one environment the
                company owns. If None, all of the company's environments.
            start_date (date, optional): Only purchases on or after this date.
            end_date (date, optional): Only purchases on or before this date.

        Returns:
            dict: A dictionary containing:
                - total_revenue (Decimal): Sum of purchase prices.
                - units_sold (int): Number of purchases.
                - best_selling_product (dict | None): product_id,
                  product_name, purchases_count, revenue.
                - top_spender (dict | None): client_id, display_name,
                  total_spent, purchases_count.
                - environments_count (int): Environments in scope.
                - members_count (int): Memberships in scope.

        Note:
            Best seller ties resolve by product name, then product ID.
            Top spender ties resolve by client ID.
        """
        purchases = _scoped_purchases(
            environment_id=environment_id,
            company_id=company_id,
            start_date=start_date,
            end_date=end_date,
        )

        totals = purchases.aggregate(
            total_revenue=Coalesce(Sum('price'), Decimal('0.00')),
            units_sold=Count('id'),
        )

        best = _product_counts(purchases).order_by(
            '-purchases_count', 'product__name', 'product_id'
        ).first()

        spender = (
            purchases
            .values('client_id', 'client__user__display_name', 'client__user__email')
            .annotate(total_spent=Sum('price'), purchases_count=Count('id'))
            .order_by('-total_spent', 'client_id')
            .first()
        )

        environments = Environment.objects.filter(company_id=company_id)
        memberships = Membership.objects.filter(environment__company_id=company_id)
        if environment_id is not None:
            environments = environments.filter(id=environment_id)
            memberships = memberships.filter(environment_id=environment_id)

        return {
            'total_revenue': totals['total_revenue'],
            'units_sold': totals['units_sold'],
            'best_selling_product': _product_row(best) if best else None,
            'top_spender': {
                'client_id': spender['client_id'],
                'display_name': _display_name(
                    spender['client__user__display_name'],
                    spender['client__user__email'],
                ),
                'total_spent': spender['total_spent'],
                'purchases_count': spender['purchases_count'],
            } if spender else None,
            'environments_count': environments.count(),
            'members_count': memberships.count(),
        }

    @staticmethod
    def client_statistics(client_id, environment_id):
        """
        Statistics for one client inside one environment.

        Args:
            client_id (UUID): The client.
            environment_id (UUID): An environment the client is a member of.

        Returns:
            dict: A dictionary containing:
                - environment_id (UUID)
                - total_spent (Decimal)
                - purchases_count (int)
                - points (int): Current membership balance.
                - favorite_product (dict | None): product_id, product_name,
                  count, first_purchased_at, last_purchased_at.
                - rank (int | None): Position in the spend ranking, None
                  without purchases.
                - participants (int): Clients in the spend ranking.

        Raises:
            NotMemberError: If the client is not a member of the environment.

        Note:
            Favorite product ties resolve by the earliest first purchase,
            then by product name.
        """
        membership = get_membership(client_id=client_id, environment_id=environment_id)

        purchases = _scoped_purchases(environment_id=environment_id, client_id=client_id)
        totals = purchases.aggregate(
            total_spent=Coalesce(Sum('price'), Decimal('0.00')),
            purchases_count=Count('id'),
        )

        favorite = _product_counts(purchases).order_by(
            '-purchases_count', 'first_purchased_at', 'product__name'
        ).first()

        ranking = StatisticsQueries.environment_ranking(environment_id)
        rank = next(
            (row['rank'] for row in ranking if row['client_id'] == membership.client_id),
            None
        )

        return {
            'environment_id': environment_id,
            'total_spent': totals['total_spent'],
            'purchases_count': totals['purchases_count'],
            'points': membership.points,
            'favorite_product': {
                'product_id': favorite['product_id'],
                'product_name': favorite['product__name'],
                'count': favorite['purchases_count'],
                'first_purchased_at': favorite['first_purchased_at'],
                'last_purchased_at': favorite['last_purchased_at'],
            } if favorite else None,
            'rank': rank,
            'participants': len(ranking),
        }

    @staticmethod
    def client_summary(client_id):
        """
        One aggregate row per membership of the client, oldest first.

        Rows are not merged across environments: each carries its own
        total_spent, purchases_count, points and joined_at.
        """
        memberships = (
            Membership.objects
            .filter(client_id=client_id)
            .select_related('environment')
            .order_by('joined_at', 'id')
        )

        totals = {
            row['environment_id']: row
            for row in (
                _scoped_purchases(client_id=client_id)
                .values('environment_id')
                .annotate(total_spent=Sum('price'), purchases_count=Count('id'))
            )
        }

        summary = []
        for membership in memberships:
            row = totals.get(membership.environment_id, {})
            summary.append({
                'environment_id': membership.environment_id,
                'environment_name': membership.environment.name,
                'total_spent': row.get('total_spent') or Decimal('0.00'),
                'purchases_count': row.get('purchases_count', 0),
                'points': membership.points,
                'joined_at': membership.joined_at,
            })

        return summary
