"""
API tests for store failures and ids the relational store cannot hold.
"""
import pytest
from pymongo.errors import ServerSelectionTimeoutError
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

HUGE_ID = "99999999999999999999"
VALID_PHOTO = {"userid": "u1", "albumid": 1, "caption": "beach", "data": "aGVsbG8="}


@pytest.fixture
def broken_sql(monkeypatch):
    async def _broken(*args, **kwargs):
        raise OperationalError("SELECT count(*) FROM albums", {}, Exception("disk I/O error at /var/lib/db"))

    monkeypatch.setattr(AsyncSession, "execute", _broken)


class TestOutOfRangeIds:

    @pytest.mark.parametrize("method", ["get", "delete"])
    def test_huge_album_id_is_not_found(self, client, method):
        response = getattr(client, method)(f"/albums/{HUGE_ID}")

        assert response.status_code == 404
        assert response.json() == {"error": f"Requested resource /albums/{HUGE_ID} does not exist"}

    def test_huge_album_id_on_replace_is_not_found(self, client):
        body = {"ownerid": "u1", "name": "n", "date": "d"}
        assert client.put(f"/albums/{HUGE_ID}", json=body).status_code == 404

    def test_huge_photo_id_is_not_found(self, client):
        assert client.get(f"/photos/{HUGE_ID}").status_code == 404
        assert client.put(f"/photos/{HUGE_ID}", json=VALID_PHOTO).status_code == 404

    def test_huge_albumid_in_photo_body_is_bad_request(self, client):
        response = client.post("/photos", json={**VALID_PHOTO, "albumid": int(HUGE_ID)})

        assert response.status_code == 400
        assert response.json() == {"error": "Request body is not a valid photo object."}


class TestStoreFailures:

    def test_sql_failure_is_generic_500(self, client, broken_sql):
        response = client.get("/albums")

        assert response.status_code == 500
        body = response.json()
        assert body == {"error": "Error fetching list.  Please try again later."}
        assert "disk I/O" not in response.text
        assert "SELECT" not in response.text

    def test_credential_store_failure_on_register_is_generic_500(self, client, users):
        users.fail_with = ServerSelectionTimeoutError("localhost:27017: connection refused")

        response = client.post("/users", json={"userID": "u1", "email": "u1@example.com", "password": "pw"})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch user."}
        assert "27017" not in response.text

    def test_photo_is_created_when_owner_update_fails(self, client, users):
        """Recording the photo on its owner is best-effort."""
        client.post("/users", json={"userID": "u1", "email": "u1@example.com", "password": "pw"})
        users.fail_with = ServerSelectionTimeoutError("no servers available")

        response = client.post("/photos", json=VALID_PHOTO)

        assert response.status_code == 201
        photo_id = response.json()["id"]
        assert client.get(f"/photos/{photo_id}").status_code == 200
        assert users.documents[0]["photos"] == []
