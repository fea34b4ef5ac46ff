from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.accounts.permissions import IsClient, IsCompany
from apps.accounts.services import get_client_for_user, get_company_for_user
from apps.environments.services import get_owned_environment

from .analytics import StatisticsQueries
from .serializers import (
    # Input serializers
    RankingQuerySerializer,
    TopProductsQuerySerializer,
    PeriodQuerySerializer,
    CompanyStatisticsQuerySerializer,
    # Response serializers
    RankingEntrySerializer,
    RankingResponseSerializer,
    TopProductSerializer,
    CompanyStatisticsSerializer,
    ClientStatisticsSerializer,
    MembershipSummarySerializer,
    ErrorSerializer,
)
from .permissions import CanViewEnvironmentStatistics


PERIOD_PARAMETERS = [
    OpenApiParameter('period', OpenApiTypes.STR, description='Month period (YYYY-MM)'),
    OpenApiParameter('start_date', OpenApiTypes.DATE, description='Start date (YYYY-MM-DD)'),
    OpenApiParameter('end_date', OpenApiTypes.DATE, description='End date (YYYY-MM-DD)'),
]


@extend_schema(
    parameters=[
        OpenApiParameter('metric', OpenApiTypes.STR, description="Ranking metric: 'spend' or 'count'", default='spend'),
        *PERIOD_PARAMETERS,
    ],
    responses={
        200: RankingResponseSerializer,
        403: ErrorSerializer,
    },
    description="Rank the clients of an environment by money spent or number of purchases.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, CanViewEnvironmentStatistics])
def environment_ranking(request, environment_id):
    """Get the environment leaderboard - thin HTTP handler."""
    query_serializer = RankingQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    ranking = StatisticsQueries.environment_ranking(
        environment_id=environment_id,
        metric=params['metric'],
        start_date=params.get('start_date'),
        end_date=params.get('end_date'),
    )

    return Response({
        'environment_id': str(environment_id),
        'metric': params['metric'],
        'participants': len(ranking),
        'results': RankingEntrySerializer(ranking, many=True).data,
    })


@extend_schema(
    parameters=[
        OpenApiParameter('limit', OpenApiTypes.INT, description='Number of results', default=10),
        *PERIOD_PARAMETERS,
    ],
    responses={
        200: TopProductSerializer(many=True),
        403: ErrorSerializer,
    },
    description="Rank the products of an environment by purchase count.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, CanViewEnvironmentStatistics])
def top_products(request, environment_id):
    """Get the product ranking - thin HTTP handler."""
    query_serializer = TopProductsQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    data = StatisticsQueries.top_products(
        environment_id=environment_id,
        limit=params['limit'],
        start_date=params.get('start_date'),
        end_date=params.get('end_date'),
    )

    return Response(TopProductSerializer(data, many=True).data)


@extend_schema(
    parameters=PERIOD_PARAMETERS,
    responses={
        200: CompanyStatisticsSerializer,
        403: ErrorSerializer,
    },
    description="Revenue statistics for one environment. Owning company only.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsCompany])
def environment_statistics(request, environment_id):
    """Get statistics for an owned environment - thin HTTP handler."""
    company = get_company_for_user(request.user)
    get_owned_environment(environment_id=environment_id, company=company)

    query_serializer = PeriodQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    data = StatisticsQueries.company_statistics(
        company_id=company.id,
        environment_id=environment_id,
        start_date=params.get('start_date'),
        end_date=params.get('end_date'),
    )

    return Response(CompanyStatisticsSerializer(data).data)


@extend_schema(
    responses={
        200: ClientStatisticsSerializer,
        403: ErrorSerializer,
    },
    description="Current client's statistics in an environment: totals, points, favorite product and rank.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsClient])
def my_environment_statistics(request, environment_id):
    """Get the current client's statistics - thin HTTP handler."""
    client = get_client_for_user(request.user)

    data = StatisticsQueries.client_statistics(
        client_id=client.id,
        environment_id=environment_id,
    )

    return Response(ClientStatisticsSerializer(data).data)


@extend_schema(
    parameters=[
        OpenApiParameter('environment', OpenApiTypes.UUID, description='Restrict to one owned environment'),
        *PERIOD_PARAMETERS,
    ],
    responses={
        200: CompanyStatisticsSerializer,
        403: ErrorSerializer,
    },
    description="Revenue statistics across the current company's environments.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsCompany])
def company_statistics(request):
    """Get company-wide statistics - thin HTTP handler."""
    company = get_company_for_user(request.user)

    query_serializer = CompanyStatisticsQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    environment_id = params.get('environment')
    if environment_id:
        get_owned_environment(environment_id=environment_id, company=company)

    data = StatisticsQueries.company_statistics(
        company_id=company.id,
        environment_id=environment_id,
        start_date=params.get('start_date'),
        end_date=params.get('end_date'),
    )

    return Response(CompanyStatisticsSerializer(data).data)


@extend_schema(
    responses={200: MembershipSummarySerializer(many=True)},
    description="Current client's summary: one row per environment membership.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsClient])
def my_summary(request):
    """Get the cross-environment summary - thin HTTP handler."""
    client = get_client_for_user(request.user)
    data = StatisticsQueries.client_summary(client_id=client.id)
    return Response(MembershipSummarySerializer(data, many=True).data)
