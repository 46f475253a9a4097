"""Schemas for appointments."""

from enum import Enum
from typing import List, Optional

from pydantic import Field

from ehr_api.schemas.common import CamelModel, StoredRecord, UtcDateTime


class AppointmentType(str, Enum):
    CHECKUP = "checkup"
    FOLLOWUP = "followup"
    EMERGENCY = "emergency"
    CONSULTATION = "consultation"
    PROCEDURE = "procedure"


class AppointmentStatus(str, Enum):
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Appointments in these states never count as upcoming.
CLOSED_STATUSES = (AppointmentStatus.COMPLETED.value, AppointmentStatus.CANCELLED.value)


class AppointmentBase(CamelModel):
    patient_id: str
    provider_id: str
    provider_name: str
    department: str
    date: UtcDateTime = Field(description="Start of the appointment (ISO-8601)")
    duration: int = Field(gt=0, description="Length in minutes")
    type: AppointmentType
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    notes: Optional[str] = None


class AppointmentCreate(AppointmentBase):
    """Request body for booking an appointment."""

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "patientId": "P001",
                    "providerId": "DR001",
                    "providerName": "Dr. Smith",
                    "department": "Cardiology",
                    "date": "2025-12-20T09:00:00Z",
                    "duration": 30,
                    "type": "followup",
                    "notes": "Follow-up for hypertension management",
                }
            ]
        }
    }


class AppointmentUpdate(CamelModel):
    patient_id: Optional[str] = None
    provider_id: Optional[str] = None
    provider_name: Optional[str] = None
    department: Optional[str] = None
    date: Optional[UtcDateTime] = None
    duration: Optional[int] = Field(default=None, gt=0)
    type: Optional[AppointmentType] = None
    status: Optional[AppointmentStatus] = None
    notes: Optional[str] = None


class Appointment(AppointmentBase, StoredRecord):
    """Appointment as stored and returned by the API."""


class AppointmentList(CamelModel):
    appointments: List[Appointment]
    total: int
