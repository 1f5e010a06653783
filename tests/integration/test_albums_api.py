"""
API tests for /albums.
"""
from album_api.models.album import Album
from album_api.models.photo import Photo
from album_api.models.review import Review

VALID_ALBUM = {"ownerid": "u1", "name": "Summer", "date": "2024-07-01", "email": "u1@example.com"}


def _albums(count, owner="u1"):
    return [{"ownerid": owner, "name": f"album{i}", "date": "2024-01-01"} for i in range(count)]


class TestListAlbums:

    def test_empty_listing(self, client):
        response = client.get("/albums")

        assert response.status_code == 200
        assert response.json() == {
            "albums": [],
            "pageNumber": 1,
            "totalPages": 1,
            "pageSize": 10,
            "totalCount": 0,
            "links": {},
        }

    def test_middle_page_links(self, client, seed_rows):
        seed_rows(Album, _albums(25))

        body = client.get("/albums?page=2").json()

        assert body["pageNumber"] == 2
        assert body["totalPages"] == 3
        assert body["totalCount"] == 25
        assert [a["name"] for a in body["albums"]] == [f"album{i}" for i in range(10, 20)]
        assert body["links"] == {
            "nextPage": "/albums?page=3",
            "lastPage": "/albums?page=3",
            "prevPage": "/albums?page=1",
            "firstPage": "/albums?page=1",
        }

    def test_out_of_range_page_is_clamped(self, client, seed_rows):
        seed_rows(Album, _albums(25))

        body = client.get("/albums?page=99").json()

        assert body["pageNumber"] == 3
        assert len(body["albums"]) == 5
        assert "nextPage" not in body["links"]

    def test_non_numeric_page_means_first(self, client, seed_rows):
        seed_rows(Album, _albums(3))

        response = client.get("/albums?page=abc")

        assert response.status_code == 200
        assert response.json()["pageNumber"] == 1


class TestCreateAlbum:

    def test_create_returns_id_and_link(self, client):
        response = client.post("/albums", json=VALID_ALBUM)

        assert response.status_code == 201
        body = response.json()
        assert body["links"] == {"album": f"/albums/{body['id']}"}

    def test_create_records_album_on_owner(self, client, users):
        client.post("/users", json={"userID": "u1", "email": "u1@example.com", "password": "pw"})

        album_id = client.post("/albums", json=VALID_ALBUM).json()["id"]

        doc = users.documents[0]
        assert doc["albums"] == [album_id]
        assert doc["photos"] == []

    def test_missing_field_is_bad_request(self, client):
        response = client.post("/albums", json={"ownerid": "u1", "name": "x"})

        assert response.status_code == 400
        assert response.json() == {"error": "Request body is not a valid album object."}

    def test_missing_body_is_bad_request(self, client):
        assert client.post("/albums").status_code == 400

    def test_malformed_json_is_bad_request(self, client):
        response = client.post(
            "/albums",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert "error" in response.json()


class TestGetAlbum:

    def test_album_without_children(self, client):
        album_id = client.post("/albums", json=VALID_ALBUM).json()["id"]

        response = client.get(f"/albums/{album_id}")

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == album_id
        assert body["name"] == "Summer"
        assert body["reviews"] == []
        assert body["photos"] == []

    def test_album_with_reviews_and_photos(self, client, seed_rows):
        (album_id,) = seed_rows(Album, _albums(1))
        seed_rows(Review, [{"userid": "u2", "albumid": album_id, "rating": 4, "review": "good"}])
        seed_rows(Photo, [{"userid": "u1", "albumid": album_id, "caption": "c", "data": "d"}])

        body = client.get(f"/albums/{album_id}").json()

        assert [r["rating"] for r in body["reviews"]] == [4]
        assert [p["data"] for p in body["photos"]] == ["d"]

    def test_missing_album_is_not_found(self, client):
        response = client.get("/albums/42")

        assert response.status_code == 404
        assert response.json() == {"error": "Requested resource /albums/42 does not exist"}

    def test_non_numeric_id_is_not_found(self, client):
        assert client.get("/albums/abc").status_code == 404


class TestReplaceAlbum:

    def test_replace_overwrites_fields(self, client):
        album_id = client.post("/albums", json=VALID_ALBUM).json()["id"]
        replacement = {"ownerid": "u1", "name": "Winter", "date": "2024-12-01"}

        response = client.put(f"/albums/{album_id}", json=replacement)

        assert response.status_code == 200
        assert response.json() == {"links": {"album": f"/albums/{album_id}"}}
        body = client.get(f"/albums/{album_id}").json()
        assert body["name"] == "Winter"
        assert body["email"] is None

    def test_replace_missing_album_is_not_found(self, client):
        assert client.put("/albums/7", json=VALID_ALBUM).status_code == 404

    def test_invalid_body_is_bad_request_even_for_missing_album(self, client):
        assert client.put("/albums/7", json={"name": "x"}).status_code == 400


class TestDeleteAlbum:

    def test_delete_then_gone(self, client):
        album_id = client.post("/albums", json=VALID_ALBUM).json()["id"]

        response = client.delete(f"/albums/{album_id}")

        assert response.status_code == 204
        assert response.content == b""
        assert client.get(f"/albums/{album_id}").status_code == 404
        assert client.delete(f"/albums/{album_id}").status_code == 404
