"""Patient portal state.

Holds what the portal screen shows: the patient list, the selected patient
with their appointments, and an error banner. Actions talk to the API
through ``EHRClient`` and never raise; failures end up in ``error``.
"""

import logging
from typing import Any, Dict, List, Optional

from ehr_api.client import EHRClient, EHRClientError, EHRNotFoundError

logger = logging.getLogger(__name__)

STATUS_COLORS = {
    "cancelled": "red",
    "completed": "green",
}


class PatientPortal:
    """Patient list / detail view backed by the EHR API."""

    def __init__(self, client: Optional[EHRClient] = None):
        self.client = client or EHRClient()
        self.patients: List[Dict[str, Any]] = []
        self.selected_patient: Optional[Dict[str, Any]] = None
        self.appointments: List[Dict[str, Any]] = []
        self.error: str = ""
        self.loading: bool = False
        self._cache: Dict[str, Dict[str, Any]] = {}

    def load_patients(self) -> List[Dict[str, Any]]:
        self.loading = True
        try:
            self.patients = self.client.list_patients()
            self.error = ""
        except EHRClientError as e:
            logger.warning(f"Error fetching patients: {e}")
            self.error = "Failed to fetch patients"
        finally:
            self.loading = False
        return self.patients

    def filtered_patients(self, term: str = "") -> List[Dict[str, Any]]:
        """Patients whose first name, last name or email contains ``term``."""
        needle = term.lower()
        return [
            p for p in self.patients
            if needle in p.get("firstName", "").lower()
            or needle in p.get("lastName", "").lower()
            or needle in p.get("email", "").lower()
        ]

    def select_patient(self, patient_id: str, use_cache: bool = True) -> Optional[Dict[str, Any]]:
        """Show a patient and their appointments."""
        if use_cache and patient_id in self._cache:
            cached = self._cache[patient_id]
            self.error = ""
            self.selected_patient = cached["patient"]
            self.appointments = cached["appointments"]
            return self.selected_patient

        try:
            patient = self.client.get_patient(patient_id)
            appointments = self.client.list_appointments(patient_id=patient_id)
        except EHRNotFoundError:
            self.error = "Patient not found"
            return None
        except EHRClientError as e:
            logger.warning(f"Error loading patient {patient_id}: {e}")
            self.error = "Error loading patient details"
            return None

        self.selected_patient = patient
        self.appointments = appointments
        self.error = ""
        self._cache[patient_id] = {"patient": patient, "appointments": appointments}
        return patient

    def refresh_appointments(self) -> List[Dict[str, Any]]:
        """Re-fetch the selected patient's appointments."""
        if not self.selected_patient:
            return self.appointments
        patient_id = self.selected_patient["id"]
        try:
            self.appointments = self.client.list_appointments(patient_id=patient_id)
        except EHRClientError as e:
            logger.warning(f"Failed to fetch appointments: {e}")
            return self.appointments
        if patient_id in self._cache:
            self._cache[patient_id]["appointments"] = self.appointments
        return self.appointments

    def delete_patient(self, patient_id: str) -> bool:
        try:
            self.client.delete_patient(patient_id)
        except EHRClientError as e:
            logger.warning(f"Delete failed: {e}")
            self.error = f"Failed to delete patient: {e.message}"
            return False

        self.patients = [p for p in self.patients if p.get("id") != patient_id]
        if self.selected_patient and self.selected_patient.get("id") == patient_id:
            self.selected_patient = None
            self.appointments = []
        self._cache.pop(patient_id, None)
        return True

    def cancel_appointment(self, appointment_id: str) -> Optional[Dict[str, Any]]:
        try:
            updated = self.client.cancel_appointment(appointment_id)
        except EHRClientError as e:
            logger.warning(f"Cancel failed: {e}")
            self.error = f"Failed to cancel appointment: {e.message}"
            return None

        self.appointments = _replace(self.appointments, updated)
        cached = self._cache.get(updated.get("patientId"))
        if cached:
            cached["appointments"] = _replace(cached["appointments"], updated)
        return updated

    @staticmethod
    def status_color(status: str) -> str:
        return STATUS_COLORS.get(status, "orange")


def _replace(records: List[Dict[str, Any]], updated: Dict[str, Any]) -> List[Dict[str, Any]]:
    return [updated if r.get("id") == updated.get("id") else r for r in records]
