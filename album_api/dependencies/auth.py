"""
Authentication and access-control dependencies for FastAPI.
"""
import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from album_api.exceptions import Forbidden, Unauthenticated
from album_api.utils.prometheus_metrics import access_denied_total
from album_api.utils.security import resolve_token

logger = logging.getLogger("app.auth")

# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """
    Dependency resolving the bearer token to a userID.

    Verification is stateless: no store is consulted.

    Raises:
        Unauthenticated: If the token is missing, invalid or expired
    """
    if not credentials:
        access_denied_total.labels(reason="no_token").inc()
        logger.warning("Auth failed", extra={"event": "auth", "reason": "no_token"})
        raise Unauthenticated("Missing authentication token.")

    try:
        return resolve_token(credentials.credentials)
    except Unauthenticated:
        access_denied_total.labels(reason="invalid_token").inc()
        logger.warning("Auth failed", extra={"event": "auth", "reason": "invalid_or_expired_token"})
        raise


def is_owner(identity: str, owner_id: str) -> bool:
    """Access decision: the authenticated identity must equal the owner."""
    return identity == owner_id


def authorize_owner(identity: str, owner_id: str) -> None:
    """
    Raises:
        Forbidden: If ``identity`` is not ``owner_id``
    """
    if not is_owner(identity, owner_id):
        access_denied_total.labels(reason="owner_mismatch").inc()
        logger.warning(
            "Access denied",
            extra={"event": "auth", "reason": "owner_mismatch", "user_id": identity},
        )
        raise Forbidden()


async def require_path_owner(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
) -> str:
    """
    Dependency for ``/users/{user_id}...`` routes: the token's userID must
    match the path. Runs before the handler touches any store.
    """
    authorize_owner(current_user_id, user_id)
    return current_user_id
