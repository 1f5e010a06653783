"""
Users router: registration, login, profile and owned-resource listings.
"""
import time
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from album_api.database import get_db
from album_api.dependencies.auth import require_path_owner
from album_api.exceptions import Conflict, InvalidInput, NotFound, Unauthenticated
from album_api.mongo import get_users_collection
from album_api.schemas.album import AlbumList, AlbumResponse
from album_api.schemas.photo import PhotoList, PhotoResponse
from album_api.schemas.user import Token, UserCreated, UserResponse
from album_api.services.auth import AuthService
from album_api.services.credential_store import CredentialStore
from album_api.services.ownership import OwnershipService
from album_api.services.resource_store import ResourceStore
from album_api.utils.logger import log_info, log_warning
from album_api.utils.prometheus_metrics import user_login_total, user_registration_total
from album_api.utils.validation import LOGIN_FIELDS, USER_FIELDS, validate_against_schema

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "",
    response_model=UserCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(
    payload: Any = Body(None),
    users=Depends(get_users_collection),
) -> UserCreated:
    """
    Register a new user account.

    - **userID**: Unique user identifier
    - **email**: Contact email
    - **password**: Plain text password, stored as a bcrypt hash
    """
    if not validate_against_schema(payload, USER_FIELDS):
        user_registration_total.labels(result="invalid").inc()
        raise InvalidInput("Request doesn't contain a valid user.")

    user_id = str(payload["userID"])
    ownership = OwnershipService(None, CredentialStore(users))
    try:
        inserted_id = await ownership.register_user(
            user_id,
            str(payload["email"]),
            str(payload["password"]),
        )
    except Conflict:
        user_registration_total.labels(result="conflict").inc()
        raise

    user_registration_total.labels(result="success").inc()
    log_info("User registration completed", event="user_registration", user_id=user_id)
    return UserCreated(id=inserted_id, links={"user": f"/users/{user_id}"})


@router.post(
    "/login",
    response_model=Token,
    summary="Login to get access token",
)
async def login(
    payload: Any = Body(None),
    users=Depends(get_users_collection),
) -> Token:
    """
    Login with userID and password to get a bearer token.

    Send the token as ``Authorization: Bearer <token>`` on protected routes.
    """
    if not validate_against_schema(payload, LOGIN_FIELDS):
        raise InvalidInput("Request needs a user ID and password.")

    auth_service = AuthService(CredentialStore(users))
    start = time.perf_counter()
    try:
        token = await auth_service.login(str(payload["userID"]), str(payload["password"]))
    except Unauthenticated:
        user_login_total.labels(result="failure").inc()
        log_warning(
            "Login failed - invalid credentials",
            event="user_login",
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        raise

    user_login_total.labels(result="success").inc()
    return token


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get own profile",
)
async def get_user(
    user_id: str,
    _: str = Depends(require_path_owner),
    users=Depends(get_users_collection),
) -> UserResponse:
    """
    Return the caller's own user document without the password hash.
    """
    user = await AuthService(CredentialStore(users)).get_profile(user_id)
    if not user:
        raise NotFound()
    return UserResponse(
        id=str(user["_id"]),
        userID=user["userID"],
        email=user["email"],
        albums=user.get("albums", []),
        photos=user.get("photos", []),
    )


@router.get(
    "/{user_id}/albums",
    response_model=AlbumList,
    summary="List own albums",
)
async def get_user_albums(
    user_id: str,
    _: str = Depends(require_path_owner),
    db: AsyncSession = Depends(get_db),
    users=Depends(get_users_collection),
) -> AlbumList:
    ownership = OwnershipService(ResourceStore(db), CredentialStore(users))
    albums = await ownership.list_owned_albums(user_id)
    return AlbumList(albums=[AlbumResponse.model_validate(a) for a in albums])


@router.get(
    "/{user_id}/photos",
    response_model=PhotoList,
    summary="List own photos",
)
async def get_user_photos(
    user_id: str,
    _: str = Depends(require_path_owner),
    db: AsyncSession = Depends(get_db),
    users=Depends(get_users_collection),
) -> PhotoList:
    ownership = OwnershipService(ResourceStore(db), CredentialStore(users))
    photos = await ownership.list_owned_photos(user_id)
    return PhotoList(photos=[PhotoResponse.model_validate(p) for p in photos])
