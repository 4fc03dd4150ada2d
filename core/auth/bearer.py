"""Bearer token authentication backend for Django REST Framework.

Access tokens are HMAC-signed JWTs issued by the identity provider. The user
id is read from the ``sub`` claim, or ``userId`` for tokens issued by older
clients. The same validation is used for the Socket.IO handshake.
"""

from typing import Any
from uuid import UUID

from django.conf import settings

import jwt
import structlog
from rest_framework import authentication, exceptions

from core.models import User

logger = structlog.get_logger(__name__)


class TokenUser:
    """Simple user object for bearer authenticated requests.

    This is not a Django User model, just a container for the token subject.
    """

    def __init__(self, user_id: UUID, claims: dict[str, Any] | None = None):
        """Initialize token user.

        Args:
            user_id: ID of the authenticated user
            claims: Decoded token payload
        """
        self.user_id = user_id
        self.claims = claims or {}
        self.is_authenticated = True

    def __str__(self):
        """String representation."""
        return f"TokenUser(user_id={self.user_id})"


def decode_access_token(token: str) -> UUID:
    """Validate an access token and return the id of its active user.

    Args:
        token: Encoded JWT

    Returns:
        The user id carried by the token.

    Raises:
        AuthenticationFailed: If the token is invalid, expired, or its user
            does not exist or is inactive.
    """
    if not settings.JWT_SECRET:
        logger.error("jwt_secret_not_configured")
        raise exceptions.AuthenticationFailed("JWT validation not configured")

    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=settings.JWT_ALGORITHMS,
            options={"verify_signature": True, "verify_exp": True},
        )
    except jwt.ExpiredSignatureError as e:
        logger.info("jwt_token_expired")
        raise exceptions.AuthenticationFailed("Token has expired") from e
    except jwt.InvalidTokenError as e:
        logger.warning("jwt_token_invalid", error=str(e))
        raise exceptions.AuthenticationFailed("Invalid token") from e

    subject = payload.get("sub") or payload.get("userId")
    try:
        user_id = UUID(str(subject))
    except ValueError as e:
        logger.warning("jwt_subject_invalid", subject=subject)
        raise exceptions.AuthenticationFailed("Invalid token subject") from e

    if not User.objects.filter(user_id=user_id, is_active=True).exists():
        logger.warning("token_user_inactive_or_missing", user_id=str(user_id))
        raise exceptions.AuthenticationFailed("User not found or inactive")

    return user_id


class BearerTokenAuthentication(authentication.BaseAuthentication):
    """Bearer token authentication.

    Extracts and validates Bearer tokens from the Authorization header.
    """

    def authenticate(self, request):
        """Authenticate the request using its Bearer token.

        Args:
            request: Django request object

        Returns:
            Tuple of (user, token) or None if authentication not attempted

        Raises:
            AuthenticationFailed: If authentication fails
        """
        auth_header = request.headers.get("authorization")
        if not auth_header:
            return None

        token = extract_bearer_token(auth_header)
        user_id = decode_access_token(token)
        return (TokenUser(user_id=user_id), token)

    def authenticate_header(self, _request):
        """Return WWW-Authenticate header value for 401 responses.

        Args:
            _request: Django request object (unused)

        Returns:
            Authentication header value
        """
        return "Bearer"


def extract_bearer_token(auth_header: str) -> str:
    """Return the token of a ``Bearer <token>`` header value.

    Raises:
        AuthenticationFailed: If the header is not a bearer header.
    """
    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise exceptions.AuthenticationFailed("Invalid authorization header format")
    return parts[1]
