"""Schemas for prescriptions."""

from enum import Enum
from typing import List, Optional

from pydantic import Field

from ehr_api.schemas.common import CamelModel, StoredRecord, UtcDateTime


class PrescriptionStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    DISCONTINUED = "discontinued"
    ON_HOLD = "on-hold"


class PrescriptionBase(CamelModel):
    patient_id: str
    provider_id: str
    provider_name: str
    medication: str = Field(min_length=1)
    dosage: str = Field(description="e.g. '10 mg'")
    frequency: str = Field(description="e.g. 'once daily'")
    route: Optional[str] = Field(default=None, description="e.g. 'oral'")
    start_date: UtcDateTime
    end_date: Optional[UtcDateTime] = None
    refills_remaining: int = Field(default=0, ge=0)
    status: PrescriptionStatus = PrescriptionStatus.ACTIVE
    instructions: Optional[str] = None
    pharmacy: Optional[str] = None


class PrescriptionCreate(PrescriptionBase):
    """Request body for writing a prescription."""


class PrescriptionUpdate(CamelModel):
    provider_id: Optional[str] = None
    provider_name: Optional[str] = None
    medication: Optional[str] = Field(default=None, min_length=1)
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    route: Optional[str] = None
    start_date: Optional[UtcDateTime] = None
    end_date: Optional[UtcDateTime] = None
    refills_remaining: Optional[int] = Field(default=None, ge=0)
    status: Optional[PrescriptionStatus] = None
    instructions: Optional[str] = None
    pharmacy: Optional[str] = None


class Prescription(PrescriptionBase, StoredRecord):
    """Prescription as stored and returned by the API."""
    last_refilled_at: Optional[str] = None


class RefillRequest(CamelModel):
    """Body for ``POST /api/prescriptions/{id}/refill``."""
    refills: Optional[int] = Field(default=None, description="Number of refills to add")


class PrescriptionList(CamelModel):
    prescriptions: List[Prescription]
    total: int
