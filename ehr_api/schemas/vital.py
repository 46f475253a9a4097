"""Schemas for vital signs."""

from typing import List, Optional

from pydantic import Field

from ehr_api.schemas.common import CamelModel, StoredRecord, UtcDateTime


class VitalMeasurements(CamelModel):
    """Measurements taken at one sitting. All are optional."""
    recorded_by: Optional[str] = None
    blood_pressure_systolic: Optional[int] = Field(default=None, gt=0)
    blood_pressure_diastolic: Optional[int] = Field(default=None, gt=0)
    heart_rate: Optional[int] = Field(default=None, gt=0, description="Beats per minute")
    temperature: Optional[float] = Field(default=None, description="Degrees Celsius")
    respiratory_rate: Optional[int] = Field(default=None, gt=0)
    oxygen_saturation: Optional[float] = Field(default=None, ge=0, le=100)
    weight: Optional[float] = Field(default=None, gt=0, description="Kilograms")
    height: Optional[float] = Field(default=None, gt=0, description="Centimetres")


class VitalReading(VitalMeasurements):
    """Body for ``POST /api/patients/{id}/vitals``."""
    recorded_at: Optional[UtcDateTime] = None


class VitalCreate(VitalReading):
    """Body for ``POST /api/vitals``."""
    patient_id: str


class VitalUpdate(VitalReading):
    """Partial update of a vital sign reading."""


class Vital(VitalMeasurements, StoredRecord):
    """Vital sign reading as stored and returned by the API."""
    patient_id: str
    recorded_at: UtcDateTime
    bmi: Optional[float] = None


class VitalList(CamelModel):
    vitals: List[Vital]
    total: int
