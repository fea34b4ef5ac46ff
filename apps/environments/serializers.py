from rest_framework import serializers
from .models import Environment, Membership
from apps.accounts.models import Client


class ClientMinimalSerializer(serializers.ModelSerializer):
    """Minimal client info for nested serialization."""

    display_name = serializers.SerializerMethodField()

    class Meta:
        model = Client
        fields = ['id', 'display_name']
        read_only_fields = fields

    def get_display_name(self, obj):
        return obj.get_display_name()


class EnvironmentSerializer(serializers.ModelSerializer):
    """Main serializer for environments."""

    company_id = serializers.UUIDField(read_only=True)
    company_name = serializers.CharField(source='company.name', read_only=True)
    member_count = serializers.SerializerMethodField()

    class Meta:
        model = Environment
        fields = [
            'id',
            'name',
            'company_id',
            'company_name',
            'member_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def get_member_count(self, obj):
        """Use the annotation when the queryset provides it."""
        count = getattr(obj, 'member_count', None)
        if count is None:
            count = obj.memberships.count()
        return count


class EnvironmentWriteSerializer(serializers.Serializer):
    """Input serializer for creating and renaming environments."""

    name = serializers.CharField(max_length=200)


class MembershipSerializer(serializers.ModelSerializer):
    """A client's membership, as seen by that client."""

    environment = EnvironmentSerializer(read_only=True)

    class Meta:
        model = Membership
        fields = ['id', 'environment', 'points', 'joined_at']
        read_only_fields = fields


class EnvironmentMemberSerializer(serializers.ModelSerializer):
    """Member information, as seen by the owning company."""

    client = ClientMinimalSerializer(read_only=True)

    class Meta:
        model = Membership
        fields = ['id', 'client', 'points', 'joined_at']
        read_only_fields = fields
