"""
Credential store: user documents keyed by ``userID``.

Document shape::

    {
        "_id": ObjectId,
        "userID": "alice",
        "email": "alice@example.com",
        "password": "<bcrypt hash>",
        "albums": [1, 4],
        "photos": [7],
    }
"""
from typing import Any, Dict, Optional

from pymongo.errors import DuplicateKeyError, PyMongoError

from album_api.exceptions import Conflict, StoreFailure
from album_api.utils.logger import log_error
from album_api.utils.prometheus_metrics import db_errors_total

# 소유 리소스 종류 → 참조 배열 필드
REFERENCE_FIELDS = {
    "album": "albums",
    "photo": "photos",
}


class CredentialStore:
    """
    Access layer over the users collection.

    ``collection`` is any object exposing the asyncio collection methods
    ``find_one``, ``insert_one`` and ``update_one``.
    """

    def __init__(self, collection: Any):
        self.collection = collection

    def _fail(self, operation: str, exc: Exception, message: str) -> StoreFailure:
        db_errors_total.labels(store="mongo").inc()
        log_error(
            "Credential store call failed",
            event="db",
            operation=operation,
            error_type=type(exc).__name__,
            error_message=str(exc)[:200],
        )
        return StoreFailure(message)

    async def get_user(self, user_id: str, include_password: bool = False) -> Optional[Dict[str, Any]]:
        """
        Fetch a user document by ``userID``.

        Args:
            user_id: Human-chosen user identifier
            include_password: Keep the password hash in the result

        Returns:
            The document, or None if no such user exists
        """
        projection = None if include_password else {"password": 0}
        try:
            return await self.collection.find_one({"userID": user_id}, projection)
        except PyMongoError as e:
            raise self._fail("get_user", e, "Failed to fetch user.") from e

    async def insert_user(self, document: Dict[str, Any]) -> str:
        """
        Insert a new user document.

        Returns:
            The generated document id as a string

        Raises:
            Conflict: If the unique ``userID`` index rejects the insert
        """
        try:
            result = await self.collection.insert_one(document)
        except DuplicateKeyError as e:
            raise Conflict() from e
        except PyMongoError as e:
            raise self._fail("insert_user", e, "Failed to insert new user.") from e
        return str(result.inserted_id)

    async def push_reference(self, user_id: str, kind: str, resource_id: int) -> bool:
        """
        Append ``resource_id`` to the user's reference list for ``kind``.

        Returns:
            True if a user document matched
        """
        field = REFERENCE_FIELDS[kind]
        try:
            result = await self.collection.update_one(
                {"userID": user_id},
                {"$push": {field: resource_id}},
            )
        except PyMongoError as e:
            raise self._fail("push_reference", e, "Failed to update user.") from e
        return result.matched_count > 0
