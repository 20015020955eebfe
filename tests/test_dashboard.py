from io import BytesIO

from openpyxl import load_workbook


def build_population(client, make_user, make_unit, create_report):
    user = make_user()
    admin = make_user("admin")
    officer = make_user("officer")
    unit_id = make_unit()

    waiting = [create_report(user["headers"], title=f"Menunggu ke-{i}") for i in range(3)]
    processing = [create_report(user["headers"], title=f"Diproses ke-{i}") for i in range(2)]
    done = create_report(user["headers"], title="Sudah selesai")

    for report in processing + [done]:
        client.post(
            "/reports/assign",
            json={"report_id": report["id"], "unit_work_id": unit_id},
            headers=admin["headers"],
        )
    client.post(
        "/reports/officer/done",
        json={"id_report": done["id"], "message": "Beres", "imageReport": ["https://cdn.lapor.id/x.jpg"]},
        headers=officer["headers"],
    )
    return {"admin": admin, "waiting": waiting, "processing": processing, "done": done}


def test_summary_on_empty_store_has_every_key(client):
    res = client.get("/dashboard/summary")
    assert res.status_code == 200
    assert res.json()["data"] == {"Menunggu": 0, "Diproses": 0, "Selesai": 0, "Ditolak": 0}


def test_summary_counts_sum_to_total(client, make_user, make_unit, create_report):
    build_population(client, make_user, make_unit, create_report)

    summary = client.get("/dashboard/summary").json()["data"]
    assert summary == {"Menunggu": 3, "Diproses": 2, "Selesai": 1, "Ditolak": 0}
    assert sum(summary.values()) == len(client.get("/reports/list").json()["data"])


def test_coordinates_exclude_waiting_reports(client, make_user, make_unit, create_report):
    build_population(client, make_user, make_unit, create_report)

    points = client.get("/dashboard/coordinates").json()["data"]
    titles = {p["title"] for p in points}
    assert titles == {"Diproses ke-0", "Diproses ke-1", "Sudah selesai"}
    assert set(points[0]) == {"title", "address", "latitude", "longitude"}


def test_coordinates_empty_when_everything_waits(client, make_user, create_report):
    user = make_user()
    create_report(user["headers"])
    assert client.get("/dashboard/coordinates").json()["data"] == []


def test_export_requires_admin(client, make_user):
    user = make_user()
    assert client.get("/dashboard/export", headers=user["headers"]).status_code == 403


def test_export_writes_one_row_per_report(client, make_user, make_unit, create_report):
    population = build_population(client, make_user, make_unit, create_report)

    res = client.get("/dashboard/export", headers=population["admin"]["headers"])
    assert res.status_code == 200
    assert res.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )

    ws = load_workbook(BytesIO(res.content)).active
    rows = list(ws.iter_rows(values_only=True))
    assert rows[0][:3] == ("id", "title", "status")
    assert len(rows) == 1 + 6
    done_row = next(r for r in rows if r[1] == "Sudah selesai")
    assert done_row[2] == "Selesai"
    assert done_row[11] == "Beres"
