from rest_framework import viewsets, status, mixins
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import IsClient, IsCompany
from apps.accounts.services import get_client_for_user, get_company_for_user

from .models import Environment
from .serializers import (
    EnvironmentSerializer,
    EnvironmentWriteSerializer,
    MembershipSerializer,
    EnvironmentMemberSerializer,
)

from apps.environments.services import (
    create_environment,
    update_environment,
    get_environment,
    list_company_environments,
    join_environment,
    leave_environment,
    list_memberships,
    get_environment_members,
)


class EnvironmentPagination(PageNumberPagination):
    """Custom pagination for environments."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class EnvironmentViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for environments.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Environments owned (company) or joined (client)
    create: Create an environment (company)
    retrieve: Get an environment
    partial_update: Rename an environment (owning company)
    """

    serializer_class = EnvironmentSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = EnvironmentPagination
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_queryset(self):
        """Company sees its own environments, client sees joined ones."""
        if getattr(self, 'swagger_fake_view', False):
            return Environment.objects.none()

        user = self.request.user
        if user.is_company:
            return list_company_environments(company=user.company_profile)
        return (
            Environment.objects
            .filter(memberships__client__user=user)
            .select_related('company')
            .order_by('created_at')
            .distinct()
        )

    def get_permissions(self):
        """Set permissions based on action."""
        if self.action in ['create', 'partial_update', 'members']:
            return [IsAuthenticated(), IsCompany()]
        if self.action in ['join', 'leave']:
            return [IsAuthenticated(), IsClient()]
        return [IsAuthenticated()]

    def retrieve(self, request, *args, **kwargs):
        """Any authenticated principal may look an environment up to join it."""
        environment = get_environment(environment_id=self.kwargs['pk'])
        return Response(EnvironmentSerializer(environment).data)

    @extend_schema(request=EnvironmentWriteSerializer, responses={201: EnvironmentSerializer})
    def create(self, request, *args, **kwargs):
        """Create a new environment."""
        serializer = EnvironmentWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        environment = create_environment(
            company=get_company_for_user(request.user),
            name=serializer.validated_data['name'],
        )

        return Response(EnvironmentSerializer(environment).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=EnvironmentWriteSerializer, responses={200: EnvironmentSerializer})
    def partial_update(self, request, *args, **kwargs):
        """Rename an environment."""
        serializer = EnvironmentWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        environment = update_environment(
            environment_id=self.kwargs['pk'],
            company=get_company_for_user(request.user),
            name=serializer.validated_data['name'],
        )

        return Response(EnvironmentSerializer(environment).data)

    @extend_schema(request=None, responses={201: MembershipSerializer})
    @action(detail=True, methods=['post'])
    def join(self, request, pk=None):
        """Join an environment."""
        client = get_client_for_user(request.user)
        membership = join_environment(client_id=client.id, environment_id=pk)

        return Response(MembershipSerializer(membership).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={204: None})
    @action(detail=True, methods=['post'])
    def leave(self, request, pk=None):
        """Leave an environment."""
        client = get_client_for_user(request.user)
        leave_environment(client_id=client.id, environment_id=pk)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: EnvironmentMemberSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def members(self, request, pk=None):
        """Get all members of an owned environment."""
        memberships = get_environment_members(
            environment_id=pk,
            company=get_company_for_user(request.user),
        )
        serializer = EnvironmentMemberSerializer(memberships, many=True)
        return Response(serializer.data)


@extend_schema(
    responses={200: MembershipSerializer(many=True)},
    description="Get all memberships of the current client, oldest first.",
    tags=['environments'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsClient])
def my_memberships(request):
    """Get the current client's memberships."""
    client = get_client_for_user(request.user)
    memberships = list_memberships(client_id=client.id)

    serializer = MembershipSerializer(memberships, many=True)
    return Response(serializer.data)
