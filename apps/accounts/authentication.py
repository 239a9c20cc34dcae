"""
DRF authentication backend combining the session token and the anti-forgery check.

Unsafe methods (POST, PUT, PATCH, DELETE) on a bearer-authenticated request
must also carry the ``X-CSRFToken`` header matching the ``csrftoken`` cookie,
the same double-submit check DRF applies to session authentication.
"""
from rest_framework.authentication import CSRFCheck
from rest_framework.permissions import SAFE_METHODS
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed, InvalidToken

from .services.exceptions import InvalidAntiForgeryTokenError, InvalidSessionTokenError
from .tokens import verify_session


class SessionTokenAuthentication(JWTAuthentication):
    """Bearer session token, plus anti-forgery enforcement on unsafe methods."""

    def authenticate(self, request):
        header = self.get_header(request)
        if header is None:
            return None

        raw_token = self.get_raw_token(header)
        if raw_token is None:
            return None

        validated_token = verify_session(raw_token)
        try:
            user = self.get_user(validated_token)
        except (InvalidToken, AuthenticationFailed):
            raise InvalidSessionTokenError()

        if request.method not in SAFE_METHODS:
            self.enforce_csrf(request)

        return user, validated_token

    def enforce_csrf(self, request):
        def dummy_get_response(request):  # pragma: no cover
            return None

        check = CSRFCheck(dummy_get_response)
        # populates request.META['CSRF_COOKIE'] from the cookie
        check.process_request(request)
        reason = check.process_view(request, None, (), {})
        if reason:
            raise InvalidAntiForgeryTokenError()
