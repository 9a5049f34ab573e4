import json
from datetime import datetime

import requests

import cleaning_service_client
from cleaning_service_client import CleaningServiceAPI, validate_booking


def make_response(status_code, payload=None):
    response = requests.Response()
    response.status_code = status_code
    response._content = json.dumps(payload).encode() if payload is not None else b""
    response.headers["Content-Type"] = "application/json"
    return response


class FakeSession:
    """Stand‑in for requests.Session that replays queued responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, params=None, json=None, headers=None, timeout=None):
        self.calls.append({"method": method, "url": url, "params": params, "json": json, "headers": headers})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


AUTH = {"access_token": "tok-123", "token_type": "bearer", "user": {"id": 2, "username": "alice"}}

FUTURE_BOOKING = {
    "customer_name": "Jane Doe",
    "address": "12 High Street",
    "date_time": "2099-01-01T10:00:00",
    "service_id": 1,
}


def test_login_keeps_token_for_later_requests():
    session = FakeSession(make_response(200, AUTH), make_response(200, []))
    api = CleaningServiceAPI(base_url="http://api.test/api/", session=session)

    data, error = api.login("alice", "pw")
    assert error is None
    assert api.user == {"id": 2, "username": "alice"}
    assert session.calls[0]["url"] == "http://api.test/api/login"
    assert "Authorization" not in session.calls[0]["headers"]

    bookings, error = api.list_bookings()
    assert (bookings, error) == ([], None)
    assert session.calls[1]["headers"]["Authorization"] == "Bearer tok-123"


def test_failed_login_reports_server_detail():
    session = FakeSession(make_response(401, {"detail": "Invalid credentials"}))
    api = CleaningServiceAPI(session=session)

    data, error = api.login("alice", "wrong")
    assert data is None
    assert error == {"status_code": 401, "message": "Invalid credentials"}
    assert api.token is None


def test_register_checks_password_confirmation_locally():
    session = FakeSession()
    api = CleaningServiceAPI(session=session)

    data, error = api.register("alice", "pw-1", confirm_password="pw-2")
    assert data is None
    assert error["message"] == "Passwords do not match"
    assert session.calls == []


def test_protected_calls_need_login():
    session = FakeSession()
    api = CleaningServiceAPI(session=session)
    assert api.list_bookings() == ([], {"status_code": None, "message": "Not logged in"})
    assert session.calls == []


def test_create_booking_validates_before_sending():
    session = FakeSession()
    api = CleaningServiceAPI(token="tok", session=session)

    data, error = api.create_booking(dict(FUTURE_BOOKING, date_time="2000-01-01T10:00:00", address=""))
    assert data is None
    assert set(error["fields"]) == {"date_time", "address"}
    assert session.calls == []


def test_update_booking_sends_status():
    session = FakeSession(make_response(200, {"id": 5, "status": "cancelled"}))
    api = CleaningServiceAPI(token="tok", session=session)

    data, error = api.update_booking(5, dict(FUTURE_BOOKING, status="cancelled"))
    assert error is None
    assert session.calls[0]["method"] == "PUT"
    assert session.calls[0]["url"].endswith("/bookings/5")
    assert session.calls[0]["json"]["status"] == "cancelled"


def test_delete_booking_not_found():
    session = FakeSession(make_response(404, {"detail": "Booking not found or not authorized"}))
    api = CleaningServiceAPI(token="tok", session=session)
    ok, error = api.delete_booking(9)
    assert ok is False
    assert error["status_code"] == 404


def test_network_errors_are_reported():
    session = FakeSession(requests.ConnectionError("refused"))
    api = CleaningServiceAPI(session=session)
    services, error = api.list_services()
    assert services == []
    assert error["status_code"] is None
    assert "refused" in error["message"]


def test_dashboard_counts():
    bookings = [{"id": 1, "status": "pending"}, {"id": 2, "status": "confirmed"}, {"id": 3, "status": "pending"}]
    services = [{"id": i} for i in range(5)]
    session = FakeSession(make_response(200, bookings), make_response(200, services))
    api = CleaningServiceAPI(token="tok", session=session)

    summary, error = api.dashboard()
    assert error is None
    assert summary["total_bookings"] == 3
    assert summary["pending_bookings"] == 2
    assert summary["available_services"] == 5


def test_validate_booking():
    now = datetime(2030, 1, 1, 12, 0)
    assert validate_booking(dict(FUTURE_BOOKING, date_time="2030-01-02T09:00"), now=now) == {}
    assert validate_booking(dict(FUTURE_BOOKING, date_time="2030-01-01T12:00"), now=now) == {
        "date_time": "Please select a future date and time"
    }
    assert validate_booking({}, now=now).keys() == {"customer_name", "address", "date_time", "service_id"}
    assert "date_time" in validate_booking(dict(FUTURE_BOOKING, date_time="tomorrow"), now=now)


def test_cli_lists_services(monkeypatch, capsys):
    services = [{"id": 1, "name": "Deep Cleaning", "description": "x", "price": 150.0}]
    session = FakeSession(make_response(200, services))
    monkeypatch.setattr(cleaning_service_client.requests, "Session", lambda: session)
    monkeypatch.delenv("CLEANING_SERVICE_TOKEN", raising=False)

    assert cleaning_service_client.main(["--base-url", "http://api.test/api", "services"]) == 0
    assert json.loads(capsys.readouterr().out) == services
    assert session.calls[0]["url"] == "http://api.test/api/services"


def test_cli_reports_errors(monkeypatch, capsys):
    session = FakeSession()
    monkeypatch.setattr(cleaning_service_client.requests, "Session", lambda: session)
    monkeypatch.delenv("CLEANING_SERVICE_TOKEN", raising=False)

    assert cleaning_service_client.main(["bookings"]) == 1
    assert "Not logged in" in capsys.readouterr().err
