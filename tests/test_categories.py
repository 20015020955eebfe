def test_admin_creates_and_lists_categories(client, make_user):
    admin = make_user("admin")
    res = client.post(
        "/categories",
        json={"name": "Sampah", "image": "https://cdn.lapor.id/sampah.png"},
        headers=admin["headers"],
    )
    assert res.status_code == 201
    assert res.json()["data"]["name"] == "Sampah"

    listed = client.get("/categories/list").json()["data"]
    assert [c["name"] for c in listed] == ["Sampah"]


def test_category_requires_admin(client, make_user):
    user = make_user()
    res = client.post(
        "/categories",
        json={"name": "Sampah", "image": "https://cdn.lapor.id/sampah.png"},
        headers=user["headers"],
    )
    assert res.status_code == 403


def test_category_validation_lists_all_fields(client, make_user):
    admin = make_user("admin")
    res = client.post("/categories", json={"name": "ab", "image": ""}, headers=admin["headers"])
    assert res.status_code == 400
    fields = {d["field"] for d in res.json()["data"]["details"]}
    assert fields == {"name", "image"}


def test_delete_category(client, make_user, category_id):
    admin = make_user("admin")
    res = client.delete(f"/categories/{category_id}", headers=admin["headers"])
    assert res.status_code == 200
    assert client.get("/categories/list").json()["data"] == []

    res = client.delete(f"/categories/{category_id}", headers=admin["headers"])
    assert res.status_code == 404
