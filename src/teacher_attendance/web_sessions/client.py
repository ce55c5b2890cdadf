from __future__ import annotations

import logging
import time
from typing import Callable, Optional

import requests

from ..core.constants import DEFAULT_WEB_SESSION_TTL_SECONDS, WEB_SESSION_POLL_SECONDS
from ..core.exceptions import LoginTimeoutError

logger = logging.getLogger(__name__)


class WebSessionClient:
    """Browser-side half of the QR login, for scripts and kiosks.

    Example:
        client = WebSessionClient("http://localhost:5000")
        issued = client.request_qr(company_id="1")
        # show issued["qrData"] to the teacher, then
        token = client.wait_for_authentication(issued["sessionId"])
    """

    def __init__(
        self,
        base_url: str,
        *,
        session: Optional[requests.Session] = None,
        poll_seconds: float = WEB_SESSION_POLL_SECONDS,
        timeout_seconds: float = DEFAULT_WEB_SESSION_TTL_SECONDS,
        request_timeout: float = 10,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._base_url = base_url.rstrip("/")
        self._http = session or requests.Session()
        self._poll_seconds = poll_seconds
        self._timeout_seconds = timeout_seconds
        self._request_timeout = request_timeout
        self._sleep = sleep
        self._clock = clock
        self.last_auth: Optional[dict] = None

    def _url(self, path: str) -> str:
        return f"{self._base_url}/api/web-session/{path}"

    def request_qr(self, company_id: Optional[str] = None) -> dict:
        payload = {"companyId": company_id} if company_id else {}
        response = self._http.post(self._url("generate-qr"), json=payload, timeout=self._request_timeout)
        response.raise_for_status()
        return response.json()

    def check_auth(self, session_id: str) -> dict:
        response = self._http.get(self._url(f"check-auth/{session_id}"), timeout=self._request_timeout)
        response.raise_for_status()
        return response.json()

    def wait_for_authentication(self, session_id: str) -> str:
        """Poll until the companion app verifies the session; return the token."""
        deadline = self._clock() + self._timeout_seconds
        while True:
            try:
                data = self.check_auth(session_id)
            except requests.HTTPError as e:
                status = e.response.status_code if e.response is not None else None
                if status is not None and 400 <= status < 500:
                    raise LoginTimeoutError(f"Session rejected by server ({status})") from e
                logger.warning("Polling check-auth for %s failed: %s", session_id[:8], e)
            except requests.RequestException as e:
                logger.warning("Polling check-auth for %s failed: %s", session_id[:8], e)
            else:
                if data.get("authenticated") and data.get("token"):
                    self.last_auth = data
                    return data["token"]
                if data.get("expired"):
                    raise LoginTimeoutError("QR code expired before it was scanned")
                if data.get("status") == "disconnected":
                    raise LoginTimeoutError("Session was disconnected")

            if self._clock() + self._poll_seconds > deadline:
                raise LoginTimeoutError("Timed out waiting for QR login")
            self._sleep(self._poll_seconds)

    def disconnect(self, session_id: str) -> None:
        response = self._http.post(
            self._url("disconnect"),
            json={"sessionId": session_id},
            timeout=self._request_timeout,
        )
        response.raise_for_status()
