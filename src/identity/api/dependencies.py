"""Request dependencies — bearer authentication for customer routes."""

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from identity.auth.auth_identity import AuthIdentity
from identity.auth.authentication import AuthenticationFailed, decode_token

_bearer = HTTPBearer(auto_error=False)


async def require_auth_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> AuthIdentity:
    """Resolve the bearer token to its current AuthIdentity, or respond 401."""
    if credentials is None:
        raise HTTPException(status_code=401, detail="Authentication required")

    try:
        claims = decode_token(credentials.credentials)
    except AuthenticationFailed as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc

    try:
        return current_domain.repository_for(AuthIdentity).get(claims["auth_identity_id"])
    except ObjectNotFoundError as exc:
        raise HTTPException(status_code=401, detail="Authentication required") from exc


async def require_customer_id(auth_identity: AuthIdentity = Depends(require_auth_identity)) -> str:
    """Customer linked to the caller's identity, read from its current app_metadata."""
    customer_id = auth_identity.app_metadata_map.get("customer_id")
    if not customer_id:
        raise HTTPException(status_code=404, detail="Customer not found for this user")
    return customer_id
