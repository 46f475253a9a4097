"""HTTP client for the EHR API used by the portal and the admin shell."""

import logging
from typing import Any, Dict, List, Optional

import requests

from ehr_api.config import settings

logger = logging.getLogger(__name__)


class EHRClientError(Exception):
    """The API answered with an error status or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class EHRNotFoundError(EHRClientError):
    """The API answered 404."""


class EHRClient:
    """Thin wrapper over the REST endpoints.

    ``session`` only needs a ``requests``-style ``request()`` method, so a
    ``requests.Session`` and Starlette's ``TestClient`` both work.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[Any] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (settings.API_URL if base_url is None else base_url).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout or settings.REQUEST_TIMEOUT

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        params = {k: v for k, v in (params or {}).items() if v is not None}
        try:
            response = self.session.request(
                method,
                f"{self.base_url}{path}",
                params=params or None,
                json=json,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise EHRClientError(f"Could not reach EHR API: {e}") from e

        if response.status_code >= 400:
            message = _error_message(response)
            logger.warning(f"{method} {path} returned {response.status_code}: {message}")
            if response.status_code == 404:
                raise EHRNotFoundError(message, response.status_code)
            raise EHRClientError(message, response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # Service

    def status(self) -> Dict[str, Any]:
        return self._request("GET", "/status")

    def stats(self) -> Dict[str, Any]:
        return self._request("GET", "/api/dashboard/stats")

    def search(self, query: str, limit: Optional[int] = None) -> Dict[str, Any]:
        return self._request("GET", "/api/search", params={"q": query, "limit": limit})

    # Patients

    def list_patients(
        self,
        search: Optional[str] = None,
        gender: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        data = self._request("GET", "/api/patients", params={"search": search, "gender": gender, "limit": limit})
        return data["patients"]

    def get_patient(self, patient_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/patients/{patient_id}")

    def create_patient(self, patient: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/patients", json=patient)

    def update_patient(self, patient_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PATCH", f"/api/patients/{patient_id}", json=changes)

    def delete_patient(self, patient_id: str) -> None:
        self._request("DELETE", f"/api/patients/{patient_id}")

    def patient_dashboard(self, patient_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/patients/{patient_id}/dashboard")

    def patient_vitals(self, patient_id: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        data = self._request("GET", f"/api/patients/{patient_id}/vitals", params={"limit": limit})
        return data["vitals"]

    # Appointments

    def list_appointments(
        self,
        patient_id: Optional[str] = None,
        status: Optional[str] = None,
        date: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        data = self._request(
            "GET",
            "/api/appointments",
            params={"patientId": patient_id, "status": status, "date": date},
        )
        return data["appointments"]

    def create_appointment(self, appointment: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/appointments", json=appointment)

    def cancel_appointment(self, appointment_id: str) -> Dict[str, Any]:
        return self._request("PATCH", f"/api/appointments/{appointment_id}/cancel")


def _error_message(response: Any) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("error"):
        return body["error"]
    return f"HTTP {response.status_code}"
