def test_admin_creates_and_lists_unit_works(client, make_user):
    admin = make_user("admin")
    res = client.post(
        "/unit-works",
        json={"name": "Dinas Kebersihan", "detail": "Sampah dan drainase"},
        headers=admin["headers"],
    )
    assert res.status_code == 200
    assert res.json()["data"]["image"] == []

    listed = client.get("/unit-works/list", headers=admin["headers"]).json()["data"]
    assert [u["name"] for u in listed] == ["Dinas Kebersihan"]


def test_unit_work_list_requires_login(client):
    assert client.get("/unit-works/list").status_code == 401


def test_unit_work_validation(client, make_user):
    admin = make_user("admin")
    res = client.post("/unit-works", json={"name": "", "image": "bukan-list"}, headers=admin["headers"])
    assert res.status_code == 400
    fields = {d["field"] for d in res.json()["data"]["details"]}
    assert {"name", "image", "detail"} <= fields


def test_delete_unit_work_cascades(client, make_user, make_unit, create_report):
    admin = make_user("admin")
    citizen = make_user()
    unit_id = make_unit()
    other_unit = make_unit("Dinas Perhubungan")
    staff = make_user("officer", unit_work_id=unit_id)
    other_staff = make_user("officer", unit_work_id=other_unit)

    routed = create_report(citizen["headers"], title="Routed report")
    elsewhere = create_report(citizen["headers"], title="Elsewhere report")
    waiting = create_report(citizen["headers"], title="Waiting report")
    for report_id, target in ((routed["id"], unit_id), (elsewhere["id"], other_unit)):
        client.post(
            "/reports/assign",
            json={"report_id": report_id, "unit_work_id": target},
            headers=admin["headers"],
        )
    client.post(
        "/comments",
        json={"id_report": routed["id"], "message": "Komentar"},
        headers=citizen["headers"],
    )

    res = client.delete(f"/unit-works/{unit_id}", headers=admin["headers"])
    assert res.status_code == 200
    assert res.json()["data"] == {"users_deleted": 1, "reports_deleted": 1}

    assert client.get(f"/users/{staff['id']}", headers=admin["headers"]).status_code == 404
    assert client.get(f"/reports/{routed['id']}", headers=admin["headers"]).status_code == 404

    assert client.get(f"/users/{other_staff['id']}", headers=admin["headers"]).status_code == 200
    assert client.get(f"/reports/{elsewhere['id']}", headers=admin["headers"]).status_code == 200
    assert client.get(f"/reports/{waiting['id']}", headers=admin["headers"]).status_code == 200


def test_delete_missing_unit_work(client, make_user):
    admin = make_user("admin")
    res = client.delete("/unit-works/00000000-0000-0000-0000-000000000000", headers=admin["headers"])
    assert res.status_code == 404


def test_delete_unit_work_requires_admin(client, make_user, make_unit):
    officer = make_user("officer")
    assert client.delete(f"/unit-works/{make_unit()}", headers=officer["headers"]).status_code == 403
