"""Cleaning Service API client.

This module wraps the REST API of :mod:`cleaning_service_api` for use
from scripts and from the ``cleaning-service`` command line tool.  It
covers what the booking dashboard needs:

* :meth:`CleaningServiceAPI.register` and :meth:`CleaningServiceAPI.login`
  obtain a bearer token, which the client keeps for later calls.
* :meth:`CleaningServiceAPI.list_services` fetches the catalog.
* :meth:`CleaningServiceAPI.list_bookings`,
  :meth:`CleaningServiceAPI.create_booking`,
  :meth:`CleaningServiceAPI.update_booking` and
  :meth:`CleaningServiceAPI.delete_booking` manage the user's bookings.
* :meth:`CleaningServiceAPI.dashboard` summarises bookings and services.

Every operation returns a tuple ``(data, error)``.  On success
``error`` is ``None``; on failure ``data`` is empty and ``error`` is a
dictionary with ``status_code`` and ``message`` (and ``fields`` for
client‑side validation failures).  The client uses the ``requests``
library internally.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/api"

BOOKING_FIELDS = ("customer_name", "address", "date_time", "service_id")

Error = Dict[str, Any]


def validate_booking(payload: Dict[str, Any], now: Optional[datetime] = None) -> Dict[str, str]:
    """Check a booking form before it is sent to the server.

    Every field is required and ``date_time`` must be an ISO timestamp
    in the future.  Returns a mapping of field name to error message;
    an empty mapping means the payload is valid.

    Args:
        payload: Booking fields as entered by the user.
        now: Reference time for the future check.  Defaults to the
            current local time.  Timezone‑aware timestamps are compared
            in UTC.
    """
    errors: Dict[str, str] = {}
    if not str(payload.get("customer_name") or "").strip():
        errors["customer_name"] = "Customer name is required"
    if not str(payload.get("address") or "").strip():
        errors["address"] = "Address is required"
    if not payload.get("service_id"):
        errors["service_id"] = "Service selection is required"
    raw = payload.get("date_time")
    if not raw:
        errors["date_time"] = "Date and time are required"
        return errors
    try:
        when = raw if isinstance(raw, datetime) else datetime.fromisoformat(str(raw))
    except ValueError:
        errors["date_time"] = "Date and time must be an ISO timestamp"
        return errors
    if when.tzinfo is not None:
        reference = now or datetime.now(when.tzinfo)
        if reference.tzinfo is None:
            reference = reference.astimezone()
    else:
        reference = now or datetime.now()
        if reference.tzinfo is not None:
            reference = reference.replace(tzinfo=None)
    if when <= reference:
        errors["date_time"] = "Please select a future date and time"
    return errors


class CleaningServiceAPI:
    """Client for the cleaning service booking API.

    The token obtained by :meth:`register` or :meth:`login` is held in
    memory only and sent as ``Authorization: Bearer <token>`` on
    subsequent requests.
    """

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL including the API prefix, e.g.
                ``http://localhost:8000/api``.
            token: Optional bearer token from an earlier login.
            session: Optional requests session.  If not supplied a
                session is created automatically.
            timeout: Per‑request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.user: Optional[Dict[str, Any]] = None
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None, auth: bool = True,
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/bookings``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
            auth: Whether to send the bearer token.
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if auth:
            if not self.token:
                return None, {"status_code": None, "message": "Not logged in"}
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    message = exc.response.json().get("detail") or ""
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def _store_session(self, data: Dict[str, Any]) -> None:
        self.token = data.get("access_token")
        self.user = data.get("user")

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------
    def register(
        self, username: str, password: str, confirm_password: Optional[str] = None
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create an account and keep its token.

        If ``confirm_password`` is given it must equal ``password``;
        otherwise no request is sent.
        """
        if confirm_password is not None and confirm_password != password:
            return None, {"status_code": None, "message": "Passwords do not match"}
        data, error = self._request(
            "POST", "/register", json_body={"username": username, "password": password}, auth=False
        )
        if error:
            return None, error
        self._store_session(data)
        return data, None

    def login(self, username: str, password: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Exchange credentials for a token and keep it."""
        data, error = self._request(
            "POST", "/login", json_body={"username": username, "password": password}, auth=False
        )
        if error:
            return None, error
        self._store_session(data)
        return data, None

    def logout(self) -> None:
        self.token = None
        self.user = None

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------
    def list_services(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", "/services", auth=False)
        if error:
            return [], error
        return data or [], None

    # ------------------------------------------------------------------
    # Bookings
    # ------------------------------------------------------------------
    def list_bookings(self, status: Optional[str] = None) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Return the current user's bookings, newest first."""
        params = {"status": status} if status else None
        data, error = self._request("GET", "/bookings", params=params)
        if error:
            return [], error
        return data or [], None

    def create_booking(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Validate and create a booking.

        Args:
            payload: ``customer_name``, ``address``, ``date_time`` (ISO
                string) and ``service_id``.
        """
        fields = validate_booking(payload)
        if fields:
            return None, {"status_code": None, "message": "Invalid booking", "fields": fields}
        return self._request("POST", "/bookings", json_body=self._booking_body(payload))

    def update_booking(
        self, booking_id: Any, payload: Dict[str, Any]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Validate and replace a booking.  ``status`` may be included."""
        fields = validate_booking(payload)
        if fields:
            return None, {"status_code": None, "message": "Invalid booking", "fields": fields}
        body = self._booking_body(payload)
        if payload.get("status"):
            body["status"] = payload["status"]
        return self._request("PUT", f"/bookings/{booking_id}", json_body=body)

    def delete_booking(self, booking_id: Any) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("DELETE", f"/bookings/{booking_id}")
        if error:
            return False, error
        return True, None

    def dashboard(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Collect the figures shown on the booking dashboard."""
        bookings, error = self.list_bookings()
        if error:
            return None, error
        services, error = self.list_services()
        if error:
            return None, error
        return {
            "total_bookings": len(bookings),
            "pending_bookings": sum(1 for b in bookings if b.get("status") == "pending"),
            "available_services": len(services),
            "bookings": bookings,
            "services": services,
        }, None

    @staticmethod
    def _booking_body(payload: Dict[str, Any]) -> Dict[str, Any]:
        body = {field: payload.get(field) for field in BOOKING_FIELDS}
        if isinstance(body["date_time"], datetime):
            body["date_time"] = body["date_time"].isoformat()
        return body


# ----------------------------------------------------------------------
# Command line interface
# ----------------------------------------------------------------------
def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="cleaning-service", description="Cleaning Service booking client.")
    ap.add_argument("--base-url", default=os.getenv("CLEANING_SERVICE_URL", DEFAULT_BASE_URL))
    ap.add_argument("--token", default=os.getenv("CLEANING_SERVICE_TOKEN"),
                    help="Bearer token (default: $CLEANING_SERVICE_TOKEN)")
    ap.add_argument("-v", "--verbose", action="store_true")
    sub = ap.add_subparsers(dest="command", required=True)

    for name in ("register", "login"):
        p = sub.add_parser(name, help=f"{name} and print the token")
        p.add_argument("username")
        p.add_argument("password")

    sub.add_parser("services", help="list the service catalog")

    p = sub.add_parser("bookings", help="list your bookings")
    p.add_argument("--status", choices=["pending", "confirmed", "cancelled"])

    for name in ("book", "update"):
        p = sub.add_parser(name, help=f"{'create' if name == 'book' else 'update'} a booking")
        if name == "update":
            p.add_argument("booking_id", type=int)
            p.add_argument("--status", choices=["pending", "confirmed", "cancelled"])
        p.add_argument("--customer-name", required=True)
        p.add_argument("--address", required=True)
        p.add_argument("--date-time", required=True, help="ISO timestamp, e.g. 2030-05-01T10:00")
        p.add_argument("--service-id", type=int, required=True)

    p = sub.add_parser("cancel", help="delete a booking")
    p.add_argument("booking_id", type=int)

    sub.add_parser("dashboard", help="show booking statistics")
    return ap


def _booking_args(args: argparse.Namespace) -> Dict[str, Any]:
    payload = {
        "customer_name": args.customer_name,
        "address": args.address,
        "date_time": args.date_time,
        "service_id": args.service_id,
    }
    if getattr(args, "status", None):
        payload["status"] = args.status
    return payload


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    api = CleaningServiceAPI(base_url=args.base_url, token=args.token)

    if args.command == "register":
        data, error = api.register(args.username, args.password)
    elif args.command == "login":
        data, error = api.login(args.username, args.password)
    elif args.command == "services":
        data, error = api.list_services()
    elif args.command == "bookings":
        data, error = api.list_bookings(status=args.status)
    elif args.command == "book":
        data, error = api.create_booking(_booking_args(args))
    elif args.command == "update":
        data, error = api.update_booking(args.booking_id, _booking_args(args))
    elif args.command == "cancel":
        data, error = api.delete_booking(args.booking_id)
    else:
        data, error = api.dashboard()

    if error:
        print(f"[!] {error['message']}", file=sys.stderr)
        for field, message in (error.get("fields") or {}).items():
            print(f"    {field}: {message}", file=sys.stderr)
        return 1
    print(json.dumps(data, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
