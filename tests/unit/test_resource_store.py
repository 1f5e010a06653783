"""
Unit tests for the relational resource store.
"""
import pytest
from sqlalchemy.exc import OperationalError

from album_api.exceptions import StoreFailure
from album_api.models.album import Album
from album_api.models.photo import Photo
from album_api.models.review import Review
from album_api.services.resource_store import ResourceStore


def _album(owner="u1", name="album"):
    return {"ownerid": owner, "name": name, "date": "2024-01-01"}


@pytest.fixture
def store(db_session):
    return ResourceStore(db_session)


class TestResourceStore:

    async def test_insert_returns_increasing_ids(self, store):
        first = await store.insert(Album, _album(name="a"))
        second = await store.insert(Album, _album(name="b"))
        assert second > first

    async def test_client_supplied_id_is_ignored(self, store):
        await store.insert(Album, _album())
        new_id = await store.insert(Album, {**_album(), "id": 500})
        assert new_id != 500
        assert await store.get_by_id(Album, 500) is None

    async def test_count_and_page_are_ordered_by_id(self, store):
        for i in range(5):
            await store.insert(Album, _album(name=f"n{i}"))

        assert await store.count(Album) == 5
        page = await store.get_page(Album, offset=2, limit=2)
        assert [a.name for a in page] == ["n2", "n3"]

    async def test_get_by_id_missing_is_none(self, store):
        assert await store.get_by_id(Photo, 1) is None

    async def test_update_reports_whether_a_row_matched(self, store):
        album_id = await store.insert(Album, _album())

        assert await store.update_by_id(Album, album_id, {**_album(), "name": "renamed"})
        assert not await store.update_by_id(Album, album_id + 100, _album())

        store.db.expire_all()
        assert (await store.get_by_id(Album, album_id)).name == "renamed"

    async def test_delete_reports_whether_a_row_matched(self, store):
        album_id = await store.insert(Album, _album())

        assert await store.delete_by_id(Album, album_id)
        assert not await store.delete_by_id(Album, album_id)
        assert await store.get_by_id(Album, album_id) is None

    async def test_typed_lookups(self, store):
        await store.insert(Photo, {"userid": "u1", "albumid": 1, "data": "a"})
        await store.insert(Photo, {"userid": "u2", "albumid": 2, "data": "b"})
        await store.insert(Review, {"userid": "u2", "albumid": 1, "rating": 4})

        assert [p.data for p in await store.get_photos_by_album(1)] == ["a"]
        assert [p.data for p in await store.get_photos_by_user("u2")] == ["b"]
        assert [r.rating for r in await store.get_reviews_by_album(1)] == [4]
        assert await store.get_reviews_by_album(2) == []

    async def test_database_error_becomes_store_failure(self, store, monkeypatch):
        async def _broken(*args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("database is locked"))

        monkeypatch.setattr(type(store.db), "execute", _broken)
        with pytest.raises(StoreFailure) as exc_info:
            await store.count(Album)
        assert "Please try again later" in exc_info.value.message
