"""
Shared fixtures for unit and integration tests.

The relational store runs on a per-test SQLite file. The credential store
is an in-memory stand-in for the users collection that speaks the subset
of the asyncio collection API the application uses.
"""
import asyncio
import copy
import os
import tempfile
from types import SimpleNamespace
from typing import Any, Dict, Iterable, List, Optional

# Must be set before album_api reads its settings
os.environ.setdefault("ENVIRONMENT", "DEV")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="album-api-logs-"))

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import DuplicateKeyError

from album_api.database import build_engine, build_session_maker, get_db, init_db
from album_api.main import app
from album_api.mongo import get_users_collection
from album_api.utils.security import create_access_token


class FakeUsersCollection:
    """In-memory users collection with a unique ``userID`` index."""

    def __init__(self):
        self.documents: List[Dict[str, Any]] = []
        self.indexes: List[Any] = []
        self.fail_with: Optional[Exception] = None

    def _match(self, flt: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        for doc in self.documents:
            if all(doc.get(k) == v for k, v in flt.items()):
                return doc
        return None

    def _check_failure(self):
        if self.fail_with is not None:
            raise self.fail_with

    async def create_index(self, keys, unique: bool = False):
        self.indexes.append((keys, unique))
        return "userID_1"

    async def find_one(self, flt: Dict[str, Any], projection: Optional[Dict[str, int]] = None):
        self._check_failure()
        doc = self._match(flt)
        if doc is None:
            return None
        result = copy.deepcopy(doc)
        for field, include in (projection or {}).items():
            if not include:
                result.pop(field, None)
        return result

    async def insert_one(self, document: Dict[str, Any]):
        self._check_failure()
        if self._match({"userID": document.get("userID")}) is not None:
            raise DuplicateKeyError("E11000 duplicate key error collection: users.users index: userID_1")
        document.setdefault("_id", ObjectId())
        self.documents.append(copy.deepcopy(document))
        return SimpleNamespace(inserted_id=document["_id"])

    async def update_one(self, flt: Dict[str, Any], update: Dict[str, Any]):
        self._check_failure()
        doc = self._match(flt)
        if doc is None:
            return SimpleNamespace(matched_count=0, modified_count=0)
        for field, value in update.get("$push", {}).items():
            doc.setdefault(field, []).append(value)
        return SimpleNamespace(matched_count=1, modified_count=1)


@pytest.fixture
def users() -> FakeUsersCollection:
    """Empty users collection."""
    return FakeUsersCollection()


@pytest.fixture
async def db_session(tmp_path):
    """AsyncSession bound to a fresh SQLite database with all tables created."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'unit.db'}")
    await init_db(engine)
    session_maker = build_session_maker(engine)
    async with session_maker() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def sql_engine(tmp_path):
    """Engine for API tests. Tables are created up front."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'api.db'}")
    asyncio.run(init_db(engine))
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture
def seed_rows(sql_engine):
    """
    Insert rows directly into the API test database.

    Usage:
        seed_rows(Review, [{"userid": "u1", "albumid": 1, "rating": 5}])
    """
    session_maker = build_session_maker(sql_engine)

    def _seed(model, rows: Iterable[Dict[str, Any]]) -> List[int]:
        async def _insert():
            async with session_maker() as session:
                objs = [model(**row) for row in rows]
                session.add_all(objs)
                await session.commit()
                return [obj.id for obj in objs]

        return asyncio.run(_insert())

    return _seed


@pytest.fixture
def client(sql_engine, users):
    """
    TestClient wired to the test stores.

    Used without a ``with`` block so the lifespan (which talks to a real
    Mongo server) does not run.
    """
    session_maker = build_session_maker(sql_engine)

    async def override_get_db():
        async with session_maker() as session:
            yield session
            await session.commit()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_users_collection] = lambda: users
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_header():
    """Build an ``Authorization`` header for a userID."""

    def _header(user_id: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}

    return _header
