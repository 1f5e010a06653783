"""
Authentication service: credential verification and token issuance.
"""
from typing import Optional

from album_api.exceptions import Unauthenticated
from album_api.schemas.user import Token
from album_api.services.credential_store import CredentialStore
from album_api.utils.logger import log_info, log_warning
from album_api.utils.security import create_access_token, verify_password


class AuthService:
    """
    Service for handling user authentication.
    """

    def __init__(self, credentials: CredentialStore):
        self.credentials = credentials

    async def authenticate(self, user_id: str, password: str) -> bool:
        """
        Check a userID/password pair against the stored hash.

        Args:
            user_id: User identifier
            password: Plain text password

        Returns:
            True if the user exists and the password matches
        """
        user = await self.credentials.get_user(user_id, include_password=True)

        if not user:
            log_warning("Login failed", event="auth", user_id=user_id, reason="user_not_found")
            return False
        if not verify_password(password, user.get("password") or ""):
            log_warning("Login failed", event="auth", user_id=user_id, reason="invalid_password")
            return False
        return True

    async def login(self, user_id: str, password: str) -> Token:
        """
        Login user and return a bearer token.

        Raises:
            Unauthenticated: If the credentials do not match
        """
        if not await self.authenticate(user_id, password):
            raise Unauthenticated("Invalid credentials.")

        log_info("Login", event="auth", user_id=user_id)
        return Token(token=create_access_token(user_id))

    async def get_profile(self, user_id: str) -> Optional[dict]:
        """User document without its password hash, or None."""
        return await self.credentials.get_user(user_id, include_password=False)
