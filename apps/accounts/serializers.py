from rest_framework import serializers

from .models import User, Role


class UserSerializer(serializers.ModelSerializer):
    """Sanitized user record, never exposes the password hash."""

    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'email',
            'role',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class UserRegistrationSerializer(serializers.Serializer):
    """Serializer for user registration."""

    username = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        min_length=6,
        style={'input_type': 'password'}
    )


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class ProfileUpdateSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150, required=False)
    email = serializers.EmailField(required=False)


class AdminUserCreateSerializer(UserRegistrationSerializer):
    role = serializers.ChoiceField(choices=Role.choices, default=Role.USER)


class AdminUserUpdateSerializer(serializers.Serializer):
    """Partial overwrite of an account by an admin."""

    username = serializers.CharField(max_length=150, required=False)
    email = serializers.EmailField(required=False)
    role = serializers.ChoiceField(choices=Role.choices, required=False)
    password = serializers.CharField(
        write_only=True,
        required=False,
        min_length=6,
        style={'input_type': 'password'}
    )
