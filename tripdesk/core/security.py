"""
Bearer token verification and caller identity dependencies.

Tokens are issued by the account service; this service only verifies them.
``create_access_token`` exists for local tooling and tests.
"""

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from tripdesk.config.settings import settings
from tripdesk.core.exceptions import AuthenticationError, AuthorizationError
from tripdesk.core.logging import get_logger, user_id as user_id_ctx
from tripdesk.schemas.common.enums import UserRole

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    """
    Lightweight representation of the authenticated caller extracted from JWT.
    """

    id: str
    role: str = UserRole.USER.value

    @property
    def is_admin(self) -> bool:
        return self.role == settings.ADMIN_ROLE


def create_access_token(
    user_id: str,
    role: str = UserRole.USER.value,
    expires_delta: Optional[timedelta] = None,
    additional_claims: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Create a signed access token.

    Args:
        user_id: Caller identifier, written to both ``sub`` and ``user_id``
        role: Caller role
        expires_delta: Custom lifetime
        additional_claims: Extra claims to include

    Returns:
        Encoded JWT
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))

    payload: Dict[str, Any] = {
        "sub": str(user_id),
        "user_id": str(user_id),
        "role": role,
        "token_type": "access",
        "iat": now,
        "exp": expire,
        "jti": secrets.token_hex(16),
    }
    if additional_claims:
        payload.update(additional_claims)

    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> CurrentUser:
    """
    Verify ``token`` and build the caller identity from its claims.

    Raises:
        AuthenticationError: bad signature, expired, or missing claims
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except jwt.ExpiredSignatureError:
        logger.warning("Token verification failed: token expired")
        raise AuthenticationError("Token has expired")
    except jwt.InvalidTokenError as e:
        logger.warning(f"Token verification failed: {e}")
        raise AuthenticationError("Not authorized, token failed")

    subject = payload.get("user_id") or payload.get("sub")
    if not subject:
        raise AuthenticationError("Invalid token payload")

    return CurrentUser(id=str(subject), role=str(payload.get("role") or UserRole.USER.value))


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[CurrentUser]:
    """
    Caller identity when a valid bearer token is sent, otherwise None.

    An invalid token is treated the same as no token.
    """
    if credentials is None or not credentials.credentials:
        return None
    try:
        user = decode_access_token(credentials.credentials)
    except AuthenticationError:
        logger.info("Ignoring invalid token on public route")
        return None

    user_id_ctx.set(user.id)
    return user


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> CurrentUser:
    """
    Caller identity for protected routes.

    Raises:
        AuthenticationError: no token or an invalid one
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authorized, no token")

    user = decode_access_token(credentials.credentials)
    user_id_ctx.set(user.id)
    return user


def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """
    Restrict a route to staff.

    Raises:
        AuthorizationError: caller is not an admin
    """
    if not user.is_admin:
        raise AuthorizationError(f"User role '{user.role}' is not authorized to access this route")
    return user


__all__ = [
    "CurrentUser",
    "bearer_scheme",
    "create_access_token",
    "decode_access_token",
    "get_optional_user",
    "get_current_user",
    "require_admin",
]
