from rest_framework import viewsets, status, mixins
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.accounts.permissions import IsClient
from apps.accounts.services import get_client_for_user
from apps.environments.services import get_visible_environment

from .models import Purchase
from .serializers import (
    PurchaseSerializer,
    PurchaseReceiptSerializer,
    PurchaseCreateSerializer,
    PurchaseFilterSerializer,
    ScanSerializer,
)
from .services import PurchaseRecorder


class PurchasePagination(PageNumberPagination):
    """Custom pagination for purchases."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class PurchaseViewSet(
    mixins.ListModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for the purchase ledger.

    Purchases are append-only: there is no update or delete.

    list: Own purchases (client) or purchases in owned environments (company)
    retrieve: Get a specific purchase
    create: Record a purchase of a product in an environment (client)
    scan: Record a purchase from a scanned barcode (client)
    """

    serializer_class = PurchaseSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = PurchasePagination
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_permissions(self):
        """Set permissions based on action."""
        if self.action in ['create', 'scan']:
            return [IsAuthenticated(), IsClient()]
        return [IsAuthenticated()]

    @extend_schema(parameters=[
        OpenApiParameter('environment', OpenApiTypes.UUID),
        OpenApiParameter('date_from', OpenApiTypes.DATE),
        OpenApiParameter('date_to', OpenApiTypes.DATE),
    ])
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def get_queryset(self):
        """Filter purchases using input serializer validation."""
        if getattr(self, 'swagger_fake_view', False):
            return Purchase.objects.none()

        user = self.request.user

        filter_serializer = PurchaseFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        environment_id = params.get('environment')
        if environment_id:
            get_visible_environment(environment_id=environment_id, user=user)

        if user.is_company:
            queryset = PurchaseRecorder.get_purchase_history(
                company_id=user.company_profile.id,
                environment_id=environment_id,
            )
        elif user.is_client:
            queryset = PurchaseRecorder.get_purchase_history(
                client_id=user.client_profile.id,
                environment_id=environment_id,
            )
        else:
            return Purchase.objects.none()

        if 'date_from' in params:
            queryset = queryset.filter(created_at__date__gte=params['date_from'])
        if 'date_to' in params:
            queryset = queryset.filter(created_at__date__lte=params['date_to'])

        return queryset

    def retrieve(self, request, *args, **kwargs):
        purchase = PurchaseRecorder.get_purchase_for_user(
            purchase_id=self.kwargs['pk'],
            user=request.user,
        )
        return Response(PurchaseSerializer(purchase).data)

    @extend_schema(request=PurchaseCreateSerializer, responses={201: PurchaseReceiptSerializer})
    def create(self, request, *args, **kwargs):
        serializer = PurchaseCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        client = get_client_for_user(request.user)

        purchase = PurchaseRecorder.record_purchase(
            client_id=client.id,
            environment_id=serializer.validated_data['environment'],
            product_id=serializer.validated_data['product'],
        )

        return Response(
            PurchaseReceiptSerializer(purchase).data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(
        request=ScanSerializer,
        responses={201: PurchaseReceiptSerializer},
        description=(
            "Record a purchase from a scanned barcode. Without an environment the "
            "barcode is resolved across the client's environments; if it matches "
            "products in several of them the request fails with 409 and lists the matches."
        ),
    )
    @action(detail=False, methods=['post'])
    def scan(self, request):
        serializer = ScanSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        client = get_client_for_user(request.user)

        purchase = PurchaseRecorder.record_scan(
            client_id=client.id,
            barcode=serializer.validated_data['barcode'],
            environment_id=serializer.validated_data.get('environment'),
        )

        return Response(
            PurchaseReceiptSerializer(purchase).data,
            status=status.HTTP_201_CREATED
        )
