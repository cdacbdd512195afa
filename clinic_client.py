"""HealthCare+ clinic API client.

This module defines a small client wrapper around the clinic REST API.
It is what the admin panel script uses, and it mirrors what the site's
browser script does: submit appointment and contact forms, list the
stored submissions, fetch the admin statistics and clear all data.

Every public method returns a tuple ``(data, error)``.  On success
``data`` is the ``data`` member of the response envelope and ``error``
is ``None``.  On failure ``data`` is ``None`` (or an empty list for
listing methods) and ``error`` is a dictionary with keys
``status_code`` and ``message``; the message is taken from the
envelope's ``error`` member when the server sent one.

The client uses the ``requests`` library internally.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

ApiError = Dict[str, Any]


class ClinicAPI:
    """Client for the clinic submissions API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:3000``.
                The ``/api`` prefix is added by the client.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per‑request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Perform an HTTP request and return the parsed envelope.

        Args:
            method: HTTP method (``GET``, ``POST``, ``DELETE``).
            path: Path below ``/api`` (e.g. ``/appointments``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(envelope, error)``.
        """
        url = f"{self.base_url}/api{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return {}, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("error") or err_json.get("message") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = f"HTTP {status}"
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}
        except ValueError as exc:
            logger.error("API returned invalid JSON: %s", exc)
            return None, {"status_code": None, "message": "Invalid JSON in response"}

    def _list(self, path: str) -> Tuple[List[Dict[str, Any]], Optional[ApiError]]:
        envelope, error = self._request("GET", path)
        if error:
            return [], error
        data = (envelope or {}).get("data")
        return (data if isinstance(data, list) else []), None

    def _create(self, path: str, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        envelope, error = self._request("POST", path, json_body=payload)
        if error:
            return None, error
        return (envelope or {}).get("data"), None

    # ------------------------------------------------------------------
    # Submissions
    # ------------------------------------------------------------------
    def list_appointments(self) -> Tuple[List[Dict[str, Any]], Optional[ApiError]]:
        """Retrieve every stored appointment in creation order."""
        return self._list("/appointments")

    def create_appointment(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Book an appointment.

        Args:
            payload: Mapping with ``name``, ``email``, ``phone``,
                ``doctor``, ``date`` and ``time``.
        Returns:
            A tuple ``(appointment, error)``.
        """
        return self._create("/appointments", payload)

    def list_contacts(self) -> Tuple[List[Dict[str, Any]], Optional[ApiError]]:
        """Retrieve every stored contact message."""
        return self._list("/contacts")

    def create_contact(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Send a contact message (``name``, ``email``, ``message``)."""
        return self._create("/contacts", payload)

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------
    def get_stats(self) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        envelope, error = self._request("GET", "/admin/stats")
        if error:
            return None, error
        return (envelope or {}).get("data"), None

    def clear_data(self) -> Tuple[bool, Optional[ApiError]]:
        """Delete all appointments and contact messages on the server."""
        envelope, error = self._request("DELETE", "/admin/clear")
        if error:
            return False, error
        return bool((envelope or {}).get("success")), None

    def health(self) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        envelope, error = self._request("GET", "/health")
        if error:
            return None, error
        return (envelope or {}).get("data"), None
