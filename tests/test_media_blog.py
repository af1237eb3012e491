"""Tests for the media blog."""


def entry_payload(**overrides):
    payload = {
        "title": "Studio Visit",
        "type": "video",
        "shortDesc": "A walk through the studio",
        "externalLink": "https://video.example.com/studio",
        "duration": "04:12",
    }
    payload.update(overrides)
    return payload


class TestAdminMediaBlog:
    def test_create_uppercases_type(self, client, admin_headers):
        response = client.post("/admin/media-blog", json=entry_payload(), headers=admin_headers)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["type"] == "VIDEO"
        assert data["shortDesc"] == "A walk through the studio"
        assert data["mediaFiles"] == []

    def test_title_and_type_required(self, client, admin_headers):
        response = client.post("/admin/media-blog", json={"shortDesc": "x"}, headers=admin_headers)

        assert response.status_code == 400
        assert "title" in response.json()["message"]
        assert "type" in response.json()["message"]

    def test_invalid_type(self, client, admin_headers):
        response = client.post(
            "/admin/media-blog", json=entry_payload(type="podcast"), headers=admin_headers
        )

        assert response.status_code == 400

    def test_update_and_sync_files(self, client, admin_headers):
        created = client.post(
            "/admin/media-blog",
            json=entry_payload(
                type="IMAGES",
                mediaFiles=[
                    {"url": "https://cdn.example.com/1.jpg"},
                    {"url": "https://cdn.example.com/2.jpg"},
                ],
            ),
            headers=admin_headers,
        ).json()["data"]
        first = created["mediaFiles"][0]

        response = client.put(
            f"/admin/media-blog/{created['id']}",
            json=entry_payload(type="IMAGES", title="Studio Photos", mediaFiles=[first]),
            headers=admin_headers,
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["title"] == "Studio Photos"
        assert [f["id"] for f in data["mediaFiles"]] == [first["id"]]

    def test_delete(self, client, admin_headers):
        created = client.post("/admin/media-blog", json=entry_payload(), headers=admin_headers).json()["data"]

        response = client.delete(f"/admin/media-blog/{created['id']}", headers=admin_headers)

        assert response.status_code == 200
        assert client.get(f"/media-blog/{created['id']}").status_code == 404

    def test_requires_admin(self, client, user_headers):
        assert client.get("/admin/media-blog").status_code == 401
        assert client.get("/admin/media-blog", headers=user_headers).status_code == 403


class TestPublicMediaBlog:
    def test_list_filters_and_paginates(self, client, admin_headers):
        client.post("/admin/media-blog", json=entry_payload(title="Opening Night"), headers=admin_headers)
        client.post(
            "/admin/media-blog",
            json=entry_payload(title="Process Notes", type="BLOG_POST", shortDesc="On glazing"),
            headers=admin_headers,
        )
        client.post("/admin/media-blog", json=entry_payload(title="Artist Talk"), headers=admin_headers)

        videos = client.get("/media-blog", params={"type": "video"}).json()
        page = client.get("/media-blog", params={"limit": 2, "page": 1}).json()
        found = client.get("/media-blog", params={"search": "glazing"}).json()

        assert videos["total"] == 2
        assert [e["title"] for e in videos["data"]] == ["Artist Talk", "Opening Night"]
        assert page["total"] == 3
        assert len(page["data"]) == 2
        assert [e["title"] for e in found["data"]] == ["Process Notes"]

    def test_get_missing_is_404(self, client):
        assert client.get("/media-blog/999").status_code == 404
