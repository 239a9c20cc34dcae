from rest_framework import status, serializers
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema

from .permissions import IsAdmin, IsSelf
from .serializers import (
    UserSerializer,
    UserRegistrationSerializer,
    UserLoginSerializer,
    ProfileUpdateSerializer,
    AdminUserCreateSerializer,
    AdminUserUpdateSerializer,
)
from .services import (
    register_user,
    update_profile,
    delete_user_account,
    list_users,
    get_user,
    create_user,
    update_user,
    delete_user,
)
from .tokens import issue_session, issue_anti_forgery_token


# Response serializers for API documentation
class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


class RegisterResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()


class LoginResponseSerializer(serializers.Serializer):
    token = serializers.CharField()
    user = UserSerializer()


class CurrentUserResponseSerializer(serializers.Serializer):
    user = UserSerializer()


class CsrfTokenResponseSerializer(serializers.Serializer):
    csrf_token = serializers.CharField()


# =============================================================================
# Authentication
# =============================================================================

@extend_schema(
    request=UserRegistrationSerializer,
    responses={
        201: RegisterResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Register a new account with the `user` role.",
    tags=['auth'],
)
@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def register(request):
    """Register a new user account."""
    serializer = UserRegistrationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    user = register_user(**serializer.validated_data)

    return Response({
        'message': 'User registered successfully',
        'user': UserSerializer(user).data,
    }, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """
    POST: exchange email and password for a session token.
    GET: re-authenticate with an existing session token.
    """

    def get_authenticators(self):
        # Credentials login is public, the token re-auth is not
        if self.request.method == 'POST':
            return []
        return super().get_authenticators()

    def get_permissions(self):
        if self.request.method == 'POST':
            return [AllowAny()]
        return [IsAuthenticated()]

    @extend_schema(
        responses={200: CurrentUserResponseSerializer, 401: ErrorResponseSerializer},
        description="Return the user behind the current session token.",
        tags=['auth'],
    )
    def get(self, request):
        return Response({'user': UserSerializer(request.user).data})

    @extend_schema(
        request=UserLoginSerializer,
        responses={200: LoginResponseSerializer, 400: ErrorResponseSerializer},
        description="Authenticate with email and password to receive a one hour session token.",
        tags=['auth'],
    )
    def post(self, request):
        serializer = UserLoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        token, user = issue_session(**serializer.validated_data)

        return Response({
            'token': token,
            'user': UserSerializer(user).data,
        })


@extend_schema(
    responses={200: CsrfTokenResponseSerializer, 401: ErrorResponseSerializer},
    description="Issue an anti-forgery token and set its private cookie. "
                "Send it back as the X-CSRFToken header on every unsafe request.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def csrf_token(request):
    """Issue the anti-forgery token for the current session."""
    return Response({'csrf_token': issue_anti_forgery_token(request)})


# =============================================================================
# Self-service profile
# =============================================================================

@extend_schema(
    methods=['GET'],
    responses={200: UserSerializer},
    description="Get the current user's profile.",
    tags=['users'],
)
@extend_schema(
    methods=['PUT'],
    request=ProfileUpdateSerializer,
    responses={200: UserSerializer, 400: ErrorResponseSerializer},
    description="Update the current user's username and/or email.",
    tags=['users'],
)
@extend_schema(
    methods=['DELETE'],
    responses={200: MessageResponseSerializer, 400: ErrorResponseSerializer},
    description="Delete the current user's account. The bootstrap admin cannot be deleted.",
    tags=['users'],
)
@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def profile(request):
    """Read, update or delete the caller's own account."""
    if request.method == 'GET':
        return Response(UserSerializer(request.user).data)

    if request.method == 'PUT':
        serializer = ProfileUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = update_profile(user=request.user, **serializer.validated_data)
        return Response(UserSerializer(user).data)

    delete_user_account(user=request.user)
    return Response({'message': 'User deleted successfully'})


@extend_schema(
    responses={200: UserSerializer, 403: ErrorResponseSerializer},
    description="Get a user by ID. Only the user themself may read it.",
    tags=['users'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsSelf])
def user_detail(request, user_id):
    return Response(UserSerializer(get_user(user_id=user_id)).data)


# =============================================================================
# Admin user management
# =============================================================================

@extend_schema(
    methods=['GET'],
    responses={200: UserSerializer(many=True)},
    description="List every account.",
    tags=['admin'],
)
@extend_schema(
    methods=['POST'],
    request=AdminUserCreateSerializer,
    responses={201: RegisterResponseSerializer, 400: ErrorResponseSerializer},
    description="Create an account with any role.",
    tags=['admin'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdmin])
def admin_users(request):
    if request.method == 'GET':
        return Response(UserSerializer(list_users(), many=True).data)

    serializer = AdminUserCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user = create_user(**serializer.validated_data)

    return Response({
        'message': 'User registered successfully',
        'user': UserSerializer(user).data,
    }, status=status.HTTP_201_CREATED)


@extend_schema(
    methods=['GET'],
    responses={200: UserSerializer, 404: ErrorResponseSerializer},
    tags=['admin'],
)
@extend_schema(
    methods=['PUT'],
    request=AdminUserUpdateSerializer,
    responses={200: UserSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
    tags=['admin'],
)
@extend_schema(
    methods=['DELETE'],
    responses={200: MessageResponseSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
    description="Delete an account. The bootstrap admin cannot be deleted.",
    tags=['admin'],
)
@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdmin])
def admin_user_detail(request, user_id):
    if request.method == 'GET':
        return Response(UserSerializer(get_user(user_id=user_id)).data)

    if request.method == 'PUT':
        serializer = AdminUserUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = update_user(user_id=user_id, data=serializer.validated_data)
        return Response(UserSerializer(user).data)

    delete_user(user_id=user_id)
    return Response({'message': 'User deleted successfully'})
