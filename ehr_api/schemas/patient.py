"""Schemas for patients."""

from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import Field

from ehr_api.schemas.common import CamelModel, StoredRecord


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class Address(CamelModel):
    """Postal address."""
    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = ""


class EmergencyContact(CamelModel):
    """Person to call in an emergency."""
    name: str
    relationship: str = ""
    phone: str = ""


class PatientBase(CamelModel):
    first_name: str = Field(min_length=1, description="Given name")
    last_name: str = Field(min_length=1, description="Family name")
    date_of_birth: date = Field(description="Date of birth (YYYY-MM-DD)")
    gender: Gender
    email: str = Field(min_length=3)
    phone: str = ""
    address: Optional[Address] = None
    emergency_contact: Optional[EmergencyContact] = None
    blood_type: Optional[str] = Field(default=None, description="e.g. 'O+'")
    allergies: List[str] = Field(default_factory=list)
    chronic_conditions: List[str] = Field(default_factory=list)
    insurance_provider: Optional[str] = None
    insurance_number: Optional[str] = None


class PatientCreate(PatientBase):
    """Request body for registering a patient."""

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "firstName": "John",
                    "lastName": "Doe",
                    "dateOfBirth": "1985-03-15",
                    "gender": "male",
                    "email": "john.doe@example.com",
                    "phone": "+1-555-0101",
                    "address": {
                        "street": "123 Main St",
                        "city": "Springfield",
                        "state": "IL",
                        "zipCode": "62701",
                        "country": "USA",
                    },
                    "emergencyContact": {
                        "name": "Jane Doe",
                        "relationship": "Spouse",
                        "phone": "+1-555-0102",
                    },
                    "bloodType": "O+",
                    "allergies": ["Penicillin"],
                    "chronicConditions": ["Hypertension"],
                }
            ]
        }
    }


class PatientUpdate(CamelModel):
    """Partial update; omitted fields keep their current value."""
    first_name: Optional[str] = Field(default=None, min_length=1)
    last_name: Optional[str] = Field(default=None, min_length=1)
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[Address] = None
    emergency_contact: Optional[EmergencyContact] = None
    blood_type: Optional[str] = None
    allergies: Optional[List[str]] = None
    chronic_conditions: Optional[List[str]] = None
    insurance_provider: Optional[str] = None
    insurance_number: Optional[str] = None


class Patient(PatientBase, StoredRecord):
    """Patient as stored and returned by the API."""


class PatientList(CamelModel):
    patients: List[Patient]
    total: int
