"""Schemas for medical records."""

from enum import Enum
from typing import List, Optional

from pydantic import Field

from ehr_api.schemas.common import CamelModel, StoredRecord, UtcDateTime


class RecordType(str, Enum):
    VISIT_NOTE = "visit-note"
    DIAGNOSIS = "diagnosis"
    PROCEDURE = "procedure"
    IMAGING = "imaging"
    DISCHARGE_SUMMARY = "discharge-summary"
    IMMUNIZATION = "immunization"


class MedicalRecordBase(CamelModel):
    patient_id: str
    provider_id: str
    provider_name: str
    record_type: RecordType
    title: str = Field(min_length=1)
    description: str = ""
    date: UtcDateTime
    diagnosis_codes: List[str] = Field(default_factory=list, description="ICD-10 codes")
    attachments: List[str] = Field(default_factory=list)


class MedicalRecordCreate(MedicalRecordBase):
    """Request body for filing a medical record."""


class MedicalRecordUpdate(CamelModel):
    provider_id: Optional[str] = None
    provider_name: Optional[str] = None
    record_type: Optional[RecordType] = None
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    date: Optional[UtcDateTime] = None
    diagnosis_codes: Optional[List[str]] = None
    attachments: Optional[List[str]] = None


class MedicalRecord(MedicalRecordBase, StoredRecord):
    """Medical record as stored and returned by the API."""


class MedicalRecordList(CamelModel):
    medical_records: List[MedicalRecord]
    total: int
