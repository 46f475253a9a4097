"""Patient API router."""

from typing import List, Optional

from fastapi import APIRouter, Query, Response, status

from ehr_api.dependencies import StoreDep
from ehr_api.records import (
    apply_limit,
    contains,
    create_record,
    delete_record,
    get_or_404,
    update_record,
)
from ehr_api.schemas.common import ErrorResponse
from ehr_api.schemas.patient import Gender, Patient, PatientCreate, PatientList, PatientUpdate
from ehr_api.store import EHRStore, Record

router = APIRouter(prefix="/api/patients", tags=["Patients"], responses={404: {"model": ErrorResponse}})


def patient_sort_key(patient: Record):
    return (patient.get("lastName", "").lower(), patient.get("firstName", "").lower())


def filter_patients(
    store: EHRStore,
    search: Optional[str] = None,
    gender: Optional[str] = None,
) -> List[Record]:
    """Filter patients and sort them by last name, then first name."""
    patients = store.patients.values()

    if search:
        match = contains(search)
        patients = [
            p for p in patients
            if match(p.get("firstName"), p.get("lastName"), p.get("email"), p.get("id"))
        ]

    if gender:
        patients = [p for p in patients if p.get("gender") == gender]

    patients.sort(key=patient_sort_key)
    return patients


@router.get("", response_model=PatientList)
async def list_patients(
    store: StoreDep,
    search: Optional[str] = Query(default=None, description="Substring of name, email or id"),
    gender: Optional[Gender] = None,
    limit: Optional[int] = Query(default=None, ge=0),
):
    """List patients, optionally filtered by search term and gender."""
    patients = filter_patients(store, search, gender.value if gender else None)
    patients = apply_limit(patients, limit)
    return {"patients": patients, "total": len(patients)}


@router.get("/{patient_id}", response_model=Patient)
async def get_patient(patient_id: str, store: StoreDep):
    return get_or_404(store.patients, patient_id, "Patient")


@router.post("", response_model=Patient, status_code=status.HTTP_201_CREATED)
async def create_patient(data: PatientCreate, store: StoreDep):
    """Register a new patient."""
    return create_record(store, store.patients, data.to_record())


@router.put("/{patient_id}", response_model=Patient)
@router.patch("/{patient_id}", response_model=Patient)
async def update_patient(patient_id: str, data: PatientUpdate, store: StoreDep):
    """Merge the given fields into an existing patient."""
    return update_record(store.patients, patient_id, data.to_changes(), "Patient")


@router.delete("/{patient_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_patient(patient_id: str, store: StoreDep):
    """Remove a patient. Related records are left in place."""
    delete_record(store.patients, patient_id, "Patient")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
