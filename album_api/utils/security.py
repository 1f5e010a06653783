"""
Security utility functions for password hashing and JWT token management.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from album_api.config import get_settings
from album_api.exceptions import Unauthenticated
from album_api.schemas.user import TokenPayload

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Salted hash string (includes the cost factor)
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against a hash.

    Args:
        plain_password: Plain text password to verify
        hashed_password: Hashed password to compare against

    Returns:
        True if password matches
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # 손상되었거나 알 수 없는 형식의 해시
        return False


def create_access_token(
    user_id: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a JWT access token.

    Args:
        user_id: userID to encode in the token
        expires_delta: Optional expiration time delta

    Returns:
        Encoded JWT token string

    Raises:
        RuntimeError: If no signing key is configured
    """
    if not settings.jwt_secret_key:
        raise RuntimeError("JWT signing key is not configured")

    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)

    expire = datetime.now(timezone.utc) + expires_delta

    to_encode = {
        "sub": user_id,
        "exp": expire,
    }

    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_access_token(token: str) -> Optional[TokenPayload]:
    """
    Decode and validate a JWT access token.

    Args:
        token: JWT token string

    Returns:
        TokenPayload if valid, None if invalid, tampered or expired
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None

    user_id = payload.get("sub")
    exp = payload.get("exp")

    if not user_id or exp is None:
        return None

    return TokenPayload(
        sub=user_id,
        exp=datetime.fromtimestamp(exp, tz=timezone.utc),
    )


def resolve_token(token: Optional[str]) -> str:
    """
    Resolve a bearer token to the userID it was issued for.

    Raises:
        Unauthenticated: If the token is missing, invalid or expired
    """
    if not token:
        raise Unauthenticated("Missing authentication token.")
    token_payload = decode_access_token(token)
    if token_payload is None:
        raise Unauthenticated("Invalid authentication token.")
    return token_payload.sub
