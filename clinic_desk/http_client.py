"""HTTP client for the front-desk API with retry and connection pooling.

Pattern: requests.Session with urllib3 status retries for idempotent calls,
plus tenacity retries with exponential backoff on connection-level failures.
Non-success envelopes surface as ClinicApiError carrying the server's code.
"""
import logging
from typing import Any, Dict, List, Optional

import requests
from requests.adapters import HTTPAdapter
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from urllib3.util.retry import Retry

from clinic_desk import config

logger = logging.getLogger(__name__)

IDEMPOTENT_METHODS = ("GET", "PUT", "DELETE")


class ClinicApiError(Exception):
    """Raised when the API answers with success false (or not JSON at all)."""

    def __init__(self, status_code: int, code: Optional[str], message: str):
        super().__init__(f"[{status_code}] {code}: {message}")
        self.status_code = status_code
        self.code = code
        self.message = message


def create_http_session(max_retries: int = 3, backoff_factor: float = 1.0) -> requests.Session:
    """
    Create HTTP session with status retries and connection pooling.

    Args:
        max_retries: Maximum number of retry attempts (default: 3)
        backoff_factor: Backoff multiplier; retry delays 1s, 2s, 4s

    Returns:
        Configured requests.Session
    """
    session = requests.Session()

    # 5xx/429 retries only for calls that are safe to repeat
    retry_strategy = Retry(
        total=max_retries,
        backoff_factor=backoff_factor,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=list(IDEMPOTENT_METHODS),
        raise_on_status=False,
    )

    adapter = HTTPAdapter(
        max_retries=retry_strategy,
        pool_connections=10,
        pool_maxsize=10,
    )
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


class ClinicDeskClient:
    """Thin Python wrapper over the front-desk HTTP API."""

    def __init__(
        self,
        base_url: str = config.API_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: int = config.HTTP_TIMEOUT_SECONDS,
        max_retries: int = config.HTTP_MAX_RETRIES,
        retry_wait=None,
    ):
        """
        Args:
            base_url: API root, e.g. http://localhost:8000
            session: Session to reuse; a pooled one is created when omitted
            timeout: Per-request timeout in seconds
            max_retries: Connection-level retries after the first attempt
            retry_wait: tenacity wait strategy (default: exponential 1-8s)
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or create_http_session(max_retries=max_retries)
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_wait = retry_wait or wait_exponential(multiplier=1, min=1, max=8)

    def _request(self, method: str, path: str, **kwargs) -> Any:
        method = method.upper()
        retryable = (requests.exceptions.ConnectionError,)
        if method in IDEMPOTENT_METHODS:
            retryable += (requests.exceptions.Timeout,)

        kwargs.setdefault("timeout", self.timeout)
        url = f"{self.base_url}{path}"

        for attempt in Retrying(
            stop=stop_after_attempt(self.max_retries + 1),
            wait=self.retry_wait,
            retry=retry_if_exception_type(retryable),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                response = self.session.request(method, url, **kwargs)

        try:
            body = response.json()
        except ValueError:
            raise ClinicApiError(response.status_code, "INVALID_RESPONSE", response.text[:200])

        if not body.get("success"):
            raise ClinicApiError(
                response.status_code,
                body.get("code"),
                body.get("message", "Request failed"),
            )
        return body.get("data")

    @staticmethod
    def _params(**filters) -> Dict[str, Any]:
        return {k: v for k, v in filters.items() if v is not None}

    # Doctors
    def list_doctors(self, search=None, specialization=None, location=None) -> List[Dict]:
        params = self._params(search=search, specialization=specialization, location=location)
        return self._request("GET", "/api/v1/doctors", params=params)

    def get_doctor(self, doctor_id: int) -> Dict:
        return self._request("GET", f"/api/v1/doctors/{doctor_id}")

    def doctor_slots(self, doctor_id: int) -> List[str]:
        return self._request("GET", f"/api/v1/doctors/{doctor_id}/slots")

    def create_doctor(self, **fields) -> Dict:
        return self._request("POST", "/api/v1/doctors", json=fields)

    def update_doctor(self, doctor_id: int, **changes) -> Dict:
        return self._request("PATCH", f"/api/v1/doctors/{doctor_id}", json=changes)

    def delete_doctor(self, doctor_id: int) -> Dict:
        return self._request("DELETE", f"/api/v1/doctors/{doctor_id}")

    # Walk-in queue
    def current_queue(self) -> Dict:
        return self._request("GET", "/api/v1/queue")

    def queue_stats(self) -> Dict[str, int]:
        return self._request("GET", "/api/v1/queue/stats")

    def enqueue(self, patient_name: str, phone: Optional[str] = None) -> Dict:
        return self._request(
            "POST", "/api/v1/queue", json={"patient_name": patient_name, "phone": phone}
        )

    def advance(self, entry_id: int, status: str) -> Dict:
        return self._request("PATCH", f"/api/v1/queue/{entry_id}/status", json={"status": status})

    def remove_from_queue(self, entry_id: int) -> None:
        return self._request("DELETE", f"/api/v1/queue/{entry_id}")

    # Appointments
    def list_appointments(self, search=None, doctor_id=None, date=None, status=None) -> List[Dict]:
        params = self._params(search=search, doctor_id=doctor_id, date=date, status=status)
        return self._request("GET", "/api/v1/appointments", params=params)

    def todays_appointments(self) -> List[Dict]:
        return self._request("GET", "/api/v1/appointments/today")

    def appointment_stats(self) -> Dict[str, int]:
        return self._request("GET", "/api/v1/appointments/stats")

    def get_appointment(self, appointment_id: int) -> Dict:
        return self._request("GET", f"/api/v1/appointments/{appointment_id}")

    def book(
        self,
        patient_name: str,
        doctor_id: int,
        date: str,
        time_slot: str,
        phone: Optional[str] = None,
    ) -> Dict:
        payload = {
            "patient_name": patient_name,
            "doctor_id": doctor_id,
            "date": date,
            "time_slot": time_slot,
            "phone": phone,
        }
        return self._request("POST", "/api/v1/appointments", json=payload)

    def update_appointment(self, appointment_id: int, **changes) -> Dict:
        return self._request("PATCH", f"/api/v1/appointments/{appointment_id}", json=changes)

    def reschedule(self, appointment_id: int, date: str, time_slot: str) -> Dict:
        return self._request(
            "PUT",
            f"/api/v1/appointments/{appointment_id}/reschedule",
            json={"date": date, "time_slot": time_slot},
        )

    def complete(self, appointment_id: int) -> Dict:
        return self._request("POST", f"/api/v1/appointments/{appointment_id}/complete")

    def cancel(self, appointment_id: int) -> Dict:
        return self._request("PATCH", f"/api/v1/appointments/{appointment_id}/cancel")

    # Dashboard
    def dashboard_stats(self) -> Dict[str, int]:
        return self._request("GET", "/api/v1/dashboard/stats")
