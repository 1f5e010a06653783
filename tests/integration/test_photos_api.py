"""
API tests for /photos.
"""
VALID_PHOTO = {"userid": "u1", "albumid": 1, "caption": "beach", "data": "aGVsbG8="}


class TestPhotosApi:

    def test_create_returns_photo_and_album_links(self, client):
        response = client.post("/photos", json=VALID_PHOTO)

        assert response.status_code == 201
        body = response.json()
        assert body["links"] == {"photo": f"/photos/{body['id']}", "album": "/albums/1"}

    def test_create_records_photo_on_owner(self, client, users):
        client.post("/users", json={"userID": "u1", "email": "u1@example.com", "password": "pw"})

        photo_id = client.post("/photos", json=VALID_PHOTO).json()["id"]

        doc = users.documents[0]
        assert doc["photos"] == [photo_id]
        assert doc["albums"] == []

    def test_get_photo(self, client):
        photo_id = client.post("/photos", json=VALID_PHOTO).json()["id"]

        response = client.get(f"/photos/{photo_id}")

        assert response.status_code == 200
        assert response.json() == {"id": photo_id, **VALID_PHOTO}

    def test_missing_photo_is_not_found(self, client):
        response = client.get("/photos/5")

        assert response.status_code == 404
        assert response.json() == {"error": "Requested resource /photos/5 does not exist"}

    def test_invalid_body_is_bad_request(self, client):
        response = client.post("/photos", json={"userid": "u1", "albumid": "one", "data": "x"})

        assert response.status_code == 400
        assert response.json() == {"error": "Request body is not a valid photo object."}

    def test_replace_keeps_album_and_owner(self, client):
        photo_id = client.post("/photos", json=VALID_PHOTO).json()["id"]

        response = client.put(f"/photos/{photo_id}", json={**VALID_PHOTO, "caption": "sunset"})

        assert response.status_code == 200
        assert response.json() == {"links": {"photo": f"/photos/{photo_id}", "album": "/albums/1"}}
        assert client.get(f"/photos/{photo_id}").json()["caption"] == "sunset"

    def test_changing_album_is_forbidden(self, client):
        photo_id = client.post("/photos", json=VALID_PHOTO).json()["id"]

        response = client.put(f"/photos/{photo_id}", json={**VALID_PHOTO, "albumid": 2})

        assert response.status_code == 403
        assert response.json() == {"error": "Updated photo must have the same albumid and userid"}
        assert client.get(f"/photos/{photo_id}").json()["albumid"] == 1

    def test_changing_owner_is_forbidden(self, client):
        photo_id = client.post("/photos", json=VALID_PHOTO).json()["id"]

        response = client.put(f"/photos/{photo_id}", json={**VALID_PHOTO, "userid": "u2"})

        assert response.status_code == 403

    def test_replace_missing_photo_is_not_found(self, client):
        assert client.put("/photos/77", json=VALID_PHOTO).status_code == 404
