"""Schemas for composite read endpoints."""

from typing import Dict, List, Optional

from ehr_api.schemas.common import CamelModel
from ehr_api.schemas.appointment import Appointment
from ehr_api.schemas.lab_result import LabResult
from ehr_api.schemas.medical_record import MedicalRecord
from ehr_api.schemas.patient import Patient
from ehr_api.schemas.prescription import Prescription
from ehr_api.schemas.vital import Vital


class PatientDashboard(CamelModel):
    """Summary of one patient's chart."""
    patient: Patient
    upcoming_appointments: int
    next_appointment: Optional[Appointment] = None
    active_prescriptions: int
    latest_vitals: Optional[Vital] = None
    pending_lab_results: int
    abnormal_lab_results: int
    recent_records: List[MedicalRecord]


class DashboardStats(CamelModel):
    """Collection-wide counters shown in the admin shell."""
    patients: int
    appointments: int
    prescriptions: int
    lab_results: int
    vitals: int
    medical_records: int
    appointments_today: int
    appointments_by_status: Dict[str, int]
    active_prescriptions: int
    pending_lab_results: int


class SearchResults(CamelModel):
    """Matches for a free-text query across collections."""
    query: str
    patients: List[Patient]
    medical_records: List[MedicalRecord]
    prescriptions: List[Prescription]
    lab_results: List[LabResult]
    total: int
