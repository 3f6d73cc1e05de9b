"""Email/password login and bearer tokens.

Tokens are HS256 JWTs. ``actor_id`` is the linked customer id, empty when the
identity has not been reconciled yet; consumers that need the customer should
re-read the identity's app_metadata rather than trust a stale token claim.
"""

from datetime import UTC, datetime, timedelta

import structlog
from jose import JWTError, jwt

from identity.auth.auth_identity import EMAILPASS, AuthIdentity, find_auth_identity
from identity.auth.passwords import verify_password
from identity.utils import settings

logger = structlog.get_logger(__name__)

ALGORITHM = "HS256"
ACTOR_TYPE = "customer"


class AuthenticationFailed(Exception):
    """Credentials or token were rejected."""


def authenticate_emailpass(email: str, password: str) -> AuthIdentity:
    """Return the identity whose email and password match, or raise AuthenticationFailed."""
    auth_identity = find_auth_identity(EMAILPASS, email)
    if auth_identity is None:
        logger.info("Login for unknown email")
        raise AuthenticationFailed("Invalid email or password")

    provider_identity = auth_identity.provider_identity_for(EMAILPASS)
    password_hash = provider_identity.provider_metadata_map.get("password_hash") if provider_identity else None
    if not verify_password(password, password_hash):
        logger.info("Login with wrong password", auth_identity_id=str(auth_identity.id))
        raise AuthenticationFailed("Invalid email or password")

    return auth_identity


def issue_token(auth_identity: AuthIdentity, expires_in: int | None = None) -> str:
    app_metadata = auth_identity.app_metadata_map
    now = datetime.now(UTC)
    lifetime = expires_in if expires_in is not None else settings.jwt_expires_in()
    claims = {
        "actor_id": app_metadata.get("customer_id", ""),
        "actor_type": ACTOR_TYPE,
        "auth_identity_id": str(auth_identity.id),
        "app_metadata": app_metadata,
        "iat": now,
        "exp": now + timedelta(seconds=lifetime),
    }
    return jwt.encode(claims, settings.jwt_secret(), algorithm=ALGORITHM)


def decode_token(token: str) -> dict:
    """Validate signature and expiry; return the claims."""
    try:
        claims = jwt.decode(token, settings.jwt_secret(), algorithms=[ALGORITHM])
    except JWTError as exc:
        raise AuthenticationFailed("Invalid or expired token") from exc

    if claims.get("actor_type") != ACTOR_TYPE or not claims.get("auth_identity_id"):
        raise AuthenticationFailed("Token is not a customer token")
    return claims
