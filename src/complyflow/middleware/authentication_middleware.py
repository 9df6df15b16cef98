"""Authentication for Supabase-issued user tokens and scheduled job callers.

User access tokens are HS256 JWTs signed with the project JWT secret; the
``sub`` claim is the auth user id, which is also the ``profiles`` primary key.
Scheduled jobs authenticate with the service-role key as a bearer token.
"""

import logging
import secrets
from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from complyflow.exception.api_exceptions import (
    AuthenticationError,
    AuthorizationError,
    InvalidTokenError,
)

logger = logging.getLogger(__name__)


@dataclass
class AuthenticatedUser:
    """Identity decoded from a user access token.

    Attributes:
        user_id: Auth user identifier (``sub`` claim)
        email: Email claim, when present
        role: Token role claim (``authenticated`` for signed-in users)
    """

    user_id: str
    email: Optional[str] = None
    role: Optional[str] = None


class JWTAuth:
    """JWT authentication validator.

    Attributes:
        secret: Secret used to verify token signatures
        algorithm: JWT algorithm (HS256)
        audience: Expected ``aud`` claim, or None to skip the check
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        audience: Optional[str] = "authenticated",
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.audience = audience

    def validate(self, token: str) -> dict:
        """Validate JWT token.

        Args:
            token: JWT token string

        Returns:
            Decoded JWT payload

        Raises:
            InvalidTokenError: If the signature, expiry or audience is invalid
        """
        import jwt

        options = {} if self.audience else {"verify_aud": False}
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                audience=self.audience,
                options=options,
            )
        except jwt.InvalidTokenError as e:
            logger.warning(f"JWT validation failed: {e}")
            raise InvalidTokenError()

    def authenticate(self, token: str) -> AuthenticatedUser:
        """Validate a token and return the user it identifies."""
        payload = self.validate(token)
        user_id = payload.get("sub")
        if not user_id:
            raise InvalidTokenError("Token has no subject")
        return AuthenticatedUser(
            user_id=user_id,
            email=payload.get("email"),
            role=payload.get("role"),
        )


def extract_bearer(request: Request) -> Optional[str]:
    """Extract the Bearer token from the Authorization header.

    Args:
        request: Incoming request

    Returns:
        Token string or None
    """
    auth = request.headers.get("Authorization", "")
    if auth.startswith("Bearer "):
        return auth[7:].strip() or None
    return None


async def require_user(request: Request) -> AuthenticatedUser:
    """Require a valid user access token.

    Raises:
        AuthenticationError: 401 if no token is supplied
        InvalidTokenError: 401 if the token does not validate
    """
    token = extract_bearer(request)
    if not token:
        raise AuthenticationError("Authentication required")
    jwt_auth: JWTAuth = request.app.state.jwt_auth
    return jwt_auth.authenticate(token)


async def require_service_role(request: Request) -> None:
    """Guard scheduled job endpoints with the service-role key.

    When no service-role key is configured the endpoints are open, which is
    how the jobs run under a local scheduler.

    Raises:
        AuthenticationError: 401 if the key is missing
        AuthorizationError: 403 if the key does not match
    """
    expected = getattr(request.app.state, "service_role_key", None)
    if not expected:
        return

    token = extract_bearer(request)
    if not token:
        raise AuthenticationError("Service role key required")
    if not secrets.compare_digest(token, expected):
        raise AuthorizationError("Invalid service role key")
