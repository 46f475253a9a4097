"""Schemas for lab results."""

from enum import Enum
from typing import List, Optional, Union

from pydantic import Field

from ehr_api.schemas.common import CamelModel, StoredRecord, UtcDateTime


class LabFlag(str, Enum):
    NORMAL = "normal"
    ABNORMAL = "abnormal"
    CRITICAL = "critical"


class LabStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    REVIEWED = "reviewed"


class LabResultBase(CamelModel):
    patient_id: str
    provider_id: Optional[str] = None
    test_name: str = Field(min_length=1, description="e.g. 'Hemoglobin A1c'")
    test_code: Optional[str] = Field(default=None, description="LOINC or local code")
    category: str = Field(default="general", description="e.g. 'hematology', 'chemistry'")
    value: Optional[Union[float, str]] = None
    unit: Optional[str] = None
    reference_range: Optional[str] = None
    flag: LabFlag = LabFlag.NORMAL
    status: LabStatus = LabStatus.PENDING
    collected_at: UtcDateTime
    resulted_at: Optional[UtcDateTime] = None
    notes: Optional[str] = None


class LabResultCreate(LabResultBase):
    """Request body for recording a lab result."""


class LabResultUpdate(CamelModel):
    provider_id: Optional[str] = None
    test_name: Optional[str] = Field(default=None, min_length=1)
    test_code: Optional[str] = None
    category: Optional[str] = None
    value: Optional[Union[float, str]] = None
    unit: Optional[str] = None
    reference_range: Optional[str] = None
    flag: Optional[LabFlag] = None
    status: Optional[LabStatus] = None
    collected_at: Optional[UtcDateTime] = None
    resulted_at: Optional[UtcDateTime] = None
    notes: Optional[str] = None


class LabResult(LabResultBase, StoredRecord):
    """Lab result as stored and returned by the API."""


class LabResultList(CamelModel):
    lab_results: List[LabResult]
    total: int
