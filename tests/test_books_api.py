import pytest


def _book(**overrides):
    body = {"title": "The Intelligent Investor", "author": "Benjamin Graham",
            "description": "Value investing", "cover_image": "https://example.com/cover.jpg",
            "rating": 5, "status": "reading"}
    body.update(overrides)
    return body


def test_create_and_get(client, auth_headers):
    r = client.post("/api/books", json=_book(), headers=auth_headers)
    assert r.status_code == 201
    b = client.get(f"/api/books/{r.json()['id']}").json()
    assert b["author"] == "Benjamin Graham"
    assert b["status"] == "reading"
    assert b["rating"] == 5
    assert b["created_at"] and b["updated_at"]


def test_status_defaults_to_read(client, auth_headers):
    r = client.post("/api/books", json={"title": "Margin of Safety", "author": "Seth Klarman"},
                    headers=auth_headers)
    b = client.get(f"/api/books/{r.json()['id']}").json()
    assert b["status"] == "read"
    assert b["rating"] is None


def test_cover_image_url_alias(client, auth_headers):
    body = _book()
    body.pop("cover_image")
    body["coverImageUrl"] = "https://example.com/alt.jpg"
    r = client.post("/api/books", json=body, headers=auth_headers)
    assert client.get(f"/api/books/{r.json()['id']}").json()["cover_image"] == "https://example.com/alt.jpg"


@pytest.mark.parametrize("overrides,detail", [
    ({"title": ""}, "missing_required_fields"),
    ({"author": None}, "missing_required_fields"),
    ({"rating": 0}, "invalid_rating"),
    ({"rating": 6}, "invalid_rating"),
    ({"status": "abandoned"}, "invalid_status"),
])
def test_validation(client, auth_headers, overrides, detail):
    r = client.post("/api/books", json=_book(**overrides), headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["detail"] == detail


def test_list_ordered_by_title(client, auth_headers):
    for title in ["Security Analysis", "A Random Walk Down Wall Street", "Common Stocks"]:
        client.post("/api/books", json=_book(title=title), headers=auth_headers)
    titles = [b["title"] for b in client.get("/api/books").json()]
    assert titles == ["A Random Walk Down Wall Street", "Common Stocks", "Security Analysis"]


def test_update_is_full_replace(client, auth_headers):
    new_id = client.post("/api/books", json=_book(), headers=auth_headers).json()["id"]
    r = client.put(f"/api/books/{new_id}", json={"title": "The Intelligent Investor", "author": "Graham"},
                   headers=auth_headers)
    assert r.status_code == 200
    b = client.get(f"/api/books/{new_id}").json()
    assert b["author"] == "Graham"
    assert b["description"] is None
    assert b["status"] == "read"


def test_unknown_ids_are_404(client, auth_headers):
    assert client.get("/api/books/42").status_code == 404
    assert client.put("/api/books/42", json=_book(), headers=auth_headers).status_code == 404
    assert client.delete("/api/books/42", headers=auth_headers).status_code == 404


def test_delete(client, auth_headers):
    new_id = client.post("/api/books", json=_book(), headers=auth_headers).json()["id"]
    assert client.delete(f"/api/books/{new_id}", headers=auth_headers).status_code == 200
    assert client.get(f"/api/books/{new_id}").status_code == 404
