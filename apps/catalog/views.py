from rest_framework import viewsets, status, mixins
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.accounts.permissions import IsCompany
from apps.accounts.services import get_client_for_user, get_company_for_user
from apps.environments.services import get_visible_environment

from .models import Product
from .serializers import (
    ProductSerializer,
    ProductCreateSerializer,
    ProductUpdateSerializer,
    ProductFilterSerializer,
    BarcodeLookupQuerySerializer,
    BarcodeLookupSerializer,
)
from .services import (
    BarcodeLookup,
    create_product,
    update_product,
    delete_product,
    get_product,
    list_products,
    find_by_barcode,
    lookup_barcode_for_client,
)


class ProductPagination(PageNumberPagination):
    """Custom pagination for products."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


class ProductViewSet(
    mixins.ListModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for Product CRUD operations.

    list: Products of one environment (?environment=<id>), owner or members
    create: Create a product (owning company)
    retrieve: Get a specific product (owner or members)
    partial_update: Change name/price (owning company)
    destroy: Delete a product (owning company)
    """

    serializer_class = ProductSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = ProductPagination
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_permissions(self):
        """Set permissions based on action."""
        if self.action in ['create', 'partial_update', 'destroy']:
            return [IsAuthenticated(), IsCompany()]
        return [IsAuthenticated()]

    @extend_schema(parameters=[
        OpenApiParameter('environment', OpenApiTypes.UUID, required=True),
    ])
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def get_queryset(self):
        if getattr(self, 'swagger_fake_view', False):
            return Product.objects.none()

        filter_serializer = ProductFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        environment = get_visible_environment(
            environment_id=filter_serializer.validated_data['environment'],
            user=self.request.user,
        )
        return list_products(environment_id=environment.id).select_related('environment')

    def retrieve(self, request, *args, **kwargs):
        product = get_product(product_id=self.kwargs['pk'])
        get_visible_environment(environment_id=product.environment_id, user=request.user)
        return Response(ProductSerializer(product).data)

    @extend_schema(request=ProductCreateSerializer, responses={201: ProductSerializer})
    def create(self, request, *args, **kwargs):
        serializer = ProductCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        product = create_product(
            environment_id=data['environment'],
            company=get_company_for_user(request.user),
            name=data['name'],
            price=data['price'],
            barcode=data['barcode'],
        )

        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ProductUpdateSerializer, responses={200: ProductSerializer})
    def partial_update(self, request, *args, **kwargs):
        serializer = ProductUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = update_product(
            product_id=self.kwargs['pk'],
            company=get_company_for_user(request.user),
            name=serializer.validated_data.get('name'),
            price=serializer.validated_data.get('price'),
        )

        return Response(ProductSerializer(product).data)

    def destroy(self, request, *args, **kwargs):
        delete_product(
            product_id=self.kwargs['pk'],
            company=get_company_for_user(request.user),
        )
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    parameters=[
        OpenApiParameter('barcode', OpenApiTypes.STR, required=True, description='Scanned barcode'),
        OpenApiParameter('environment', OpenApiTypes.UUID, description='Restrict lookup to one environment'),
    ],
    responses={200: BarcodeLookupSerializer},
    description=(
        "Look a barcode up in the current client's environments. "
        "Returns every environment-qualified match; status is none, unique or multiple."
    ),
    tags=['catalog'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def barcode_lookup(request):
    """Resolve a scanned barcode - thin HTTP handler."""
    query_serializer = BarcodeLookupQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    environment_id = params.get('environment')
    if environment_id:
        get_visible_environment(environment_id=environment_id, user=request.user)
        product = find_by_barcode(environment_id=environment_id, barcode=params['barcode'])
        lookup = BarcodeLookup(barcode=params['barcode'], matches=[product] if product else [])
    else:
        client = get_client_for_user(request.user)
        lookup = lookup_barcode_for_client(client_id=client.id, barcode=params['barcode'])

    return Response(BarcodeLookupSerializer(lookup).data)
