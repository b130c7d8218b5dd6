import io
from datetime import timedelta

from openpyxl import load_workbook

from utils.errors import PersistenceError


def mark(client, photo=b"\xff\xd8jpeg\xff\xd9", **fields):
    data = {
        "timestamp": "2024-03-01T09:00:00.000Z",
        "employerId": "EPPI-007",
        "loggerName": "Jane Doe",
    }
    data.update(fields)
    if photo is not None:
        data["photo"] = (io.BytesIO(photo), "capture.jpeg", "image/jpeg")
    return client.post("/attendance", data=data, content_type="multipart/form-data")


def test_mark_attendance_end_to_end(client, collections, upload_dir):
    resp = mark(client)

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["record"]["date"] == "03/01/2024"
    assert body["record"]["time"] == "02:15:00 PM"

    doc = collections["attendances"].docs[0]
    assert doc["employerId"] == "EPPI-007"
    assert doc["loggerName"] == "Jane Doe"
    assert doc["photoUrl"] == body["record"]["photoUrl"]
    assert doc["photoPath"] == "EPPI-007_1709288100000.jpeg"
    assert (upload_dir / doc["photoPath"]).exists()


def test_photo_url_is_served_without_auth(client):
    body = mark(client).get_json()
    path = body["record"]["photoUrl"].replace("http://localhost", "")

    resp = client.get(path)

    assert resp.status_code == 200
    assert resp.data == b"\xff\xd8jpeg\xff\xd9"


def test_legacy_mark_route(client, collections):
    resp = client.post("/api/attendance/mark", data={
        "employerId": "EPPI-007",
        "loggerName": "Jane Doe",
        "photo": (io.BytesIO(b"img"), "capture.jpeg"),
    }, content_type="multipart/form-data")

    assert resp.status_code == 200
    assert len(collections["attendances"].docs) == 1


def test_client_timestamp_is_advisory(client):
    a = mark(client, timestamp="1990-01-01T00:00:00Z").get_json()["record"]
    b = mark(client, timestamp="2050-01-01T00:00:00Z").get_json()["record"]

    assert (a["date"], a["time"]) == (b["date"], b["time"]) == ("03/01/2024", "02:15:00 PM")


def test_missing_photo_is_rejected(client, collections):
    resp = mark(client, photo=None)

    assert resp.status_code == 400
    assert resp.get_json() == {"success": False, "message": "No photo file was uploaded."}
    assert collections["attendances"].docs == []


def test_empty_photo_is_rejected(client, collections):
    resp = mark(client, photo=b"")

    assert resp.status_code == 400
    assert collections["attendances"].docs == []


def test_missing_identity_is_rejected(client, collections, upload_dir):
    resp = mark(client, employerId="", loggerName="  ")

    assert resp.status_code == 400
    body = resp.get_json()
    assert body["success"] is False
    assert "employerId" in body["message"] and "loggerName" in body["message"]
    assert collections["attendances"].docs == []
    assert not upload_dir.exists()


def test_store_failure_creates_no_record(client, services, collections, failing_photo_store):
    services.photo_store = failing_photo_store

    resp = mark(client)

    assert resp.status_code == 500
    assert resp.get_json()["success"] is False
    assert collections["attendances"].docs == []


def test_database_failure_removes_stored_photo(client, collections, upload_dir):
    collections["attendances"].fail_writes = True

    resp = mark(client)

    assert resp.status_code == 500
    assert resp.get_json()["message"] == PersistenceError.default_message
    assert list(upload_dir.iterdir()) == []


def test_same_millisecond_submissions_are_both_kept(client, services):
    first = mark(client, employerId="EPPI-010", loggerName="Ann")
    second = mark(client, employerId="EPPI-011", loggerName="Ben")

    assert first.status_code == second.status_code == 200
    assert [r.employer_id for r in services.attendance.list()] == ["EPPI-010", "EPPI-011"]


def test_report_for_admin(client, clock):
    base = clock.now
    clock.now = base.replace(hour=12)
    mark(client, employerId="EPPI-020", loggerName="Later")
    clock.now = base
    mark(client, employerId="EPPI-007", loggerName="Jane Doe")

    resp = client.get("/attendance/report?employerId=EPPI-001")

    assert resp.status_code == 200
    assert resp.mimetype == "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    assert "attendance_report.xlsx" in resp.headers["Content-Disposition"]

    ws = load_workbook(io.BytesIO(resp.data)).active
    rows = list(ws.iter_rows(values_only=True))
    assert rows[0] == ("Date", "Time", "Logger Name", "Employer ID", "Photo URL")
    assert [row[3] for row in rows[1:]] == ["EPPI-007", "EPPI-020"]
    assert rows[1][:3] == ("03/01/2024", "02:15:00 PM", "Jane Doe")


def test_report_denied_for_other_identity(client):
    mark(client)

    resp = client.get("/api/attendance/report?employerId=EPPI-007")

    assert resp.status_code == 403
    assert resp.mimetype == "application/json"
    assert resp.get_json()["success"] is False
    assert "EPPI-007" not in resp.get_data(as_text=True)


def test_report_denied_without_identity(client):
    resp = client.get("/attendance/report")

    assert resp.status_code == 403


def test_photo_name_matches_record_timestamp(client, services, collections, clock):
    start = clock.now
    ticks = iter(range(100))
    services.attendance.clock = lambda: start + timedelta(milliseconds=next(ticks))

    mark(client)

    doc = collections["attendances"].docs[0]
    millis = int(doc["timestamp"].timestamp() * 1000)
    assert doc["photoPath"] == f"EPPI-007_{millis}.jpeg"
