from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from .models import User, UserRole


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'display_name',
            'role',
            'created_at',
            'last_login',
        ]
        read_only_fields = ['id', 'email', 'role', 'created_at', 'last_login']


class UserRegistrationSerializer(serializers.Serializer):
    """Input serializer for registration. Creation happens in the service."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )
    role = serializers.ChoiceField(choices=UserRole.choices, default=UserRole.CLIENT)
    display_name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    company_name = serializers.CharField(max_length=200, required=False, allow_blank=True)

    def validate(self, attrs):
        """Validate password confirmation."""
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match'
            })
        return attrs


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class ProfileSerializer(serializers.Serializer):
    """
    Render a ``Profile`` variant.

    ``role`` is the tag; ``client`` or ``company`` holds the matching payload
    and the other key is absent. Accounts without a profile record (staff)
    have a null role and neither key.
    """

    user_id = serializers.UUIDField()
    email = serializers.EmailField()
    display_name = serializers.CharField()
    role = serializers.CharField(allow_null=True)

    def to_representation(self, profile):
        data = super().to_representation(profile)
        payload = profile.payload
        if profile.role == UserRole.CLIENT:
            data['client'] = {
                'client_id': str(payload.client_id),
                'points': payload.points,
            }
        elif profile.role == UserRole.COMPANY:
            data['company'] = {
                'company_id': str(payload.company_id),
                'name': payload.name,
            }
        return data


class UserPublicSerializer(serializers.ModelSerializer):
    """Public user info (for displaying in rankings, member lists, etc.)."""

    display_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'display_name']
        read_only_fields = fields

    def get_display_name(self, obj):
        return obj.get_display_name()
