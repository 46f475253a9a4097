"""API schemas."""

from ehr_api.schemas.common import CamelModel, ErrorResponse, StoredRecord, UtcDateTime
from ehr_api.schemas.patient import (
    Address,
    EmergencyContact,
    Gender,
    Patient,
    PatientCreate,
    PatientList,
    PatientUpdate,
)
from ehr_api.schemas.appointment import (
    Appointment,
    AppointmentCreate,
    AppointmentList,
    AppointmentStatus,
    AppointmentType,
    AppointmentUpdate,
)
from ehr_api.schemas.prescription import (
    Prescription,
    PrescriptionCreate,
    PrescriptionList,
    PrescriptionStatus,
    PrescriptionUpdate,
    RefillRequest,
)
from ehr_api.schemas.lab_result import (
    LabFlag,
    LabResult,
    LabResultCreate,
    LabResultList,
    LabResultUpdate,
    LabStatus,
)
from ehr_api.schemas.vital import (
    Vital,
    VitalCreate,
    VitalList,
    VitalReading,
    VitalUpdate,
)
from ehr_api.schemas.medical_record import (
    MedicalRecord,
    MedicalRecordCreate,
    MedicalRecordList,
    MedicalRecordUpdate,
    RecordType,
)
from ehr_api.schemas.dashboard import DashboardStats, PatientDashboard, SearchResults

__all__ = [
    "CamelModel",
    "ErrorResponse",
    "StoredRecord",
    "UtcDateTime",
    "Address",
    "EmergencyContact",
    "Gender",
    "Patient",
    "PatientCreate",
    "PatientList",
    "PatientUpdate",
    "Appointment",
    "AppointmentCreate",
    "AppointmentList",
    "AppointmentStatus",
    "AppointmentType",
    "AppointmentUpdate",
    "Prescription",
    "PrescriptionCreate",
    "PrescriptionList",
    "PrescriptionStatus",
    "PrescriptionUpdate",
    "RefillRequest",
    "LabFlag",
    "LabResult",
    "LabResultCreate",
    "LabResultList",
    "LabResultUpdate",
    "LabStatus",
    "Vital",
    "VitalCreate",
    "VitalList",
    "VitalReading",
    "VitalUpdate",
    "MedicalRecord",
    "MedicalRecordCreate",
    "MedicalRecordList",
    "MedicalRecordUpdate",
    "RecordType",
    "DashboardStats",
    "PatientDashboard",
    "SearchResults",
]
