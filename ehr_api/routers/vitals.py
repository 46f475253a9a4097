"""Vital signs API router."""

from typing import List, Optional

from fastapi import APIRouter, Query, Response, status

from ehr_api.dependencies import StoreDep
from ehr_api.exceptions import NotFoundError
from ehr_api.records import (
    apply_limit,
    create_record,
    delete_record,
    get_or_404,
    require_patient,
    sort_by_time,
    update_record,
)
from ehr_api.schemas.common import ErrorResponse
from ehr_api.schemas.vital import Vital, VitalCreate, VitalList, VitalReading, VitalUpdate
from ehr_api.store import EHRStore, Record, utc_now_iso

router = APIRouter(prefix="/api", tags=["Vitals"], responses={404: {"model": ErrorResponse}})


def calculate_bmi(weight: Optional[float], height: Optional[float]) -> Optional[float]:
    """Body mass index from kilograms and centimetres."""
    if not weight or not height:
        return None
    metres = height / 100
    return round(weight / (metres * metres), 1)


def with_bmi(record: Record) -> Record:
    record["bmi"] = calculate_bmi(record.get("weight"), record.get("height"))
    return record


def filter_vitals(store: EHRStore, patient_id: Optional[str] = None) -> List[Record]:
    """Filter vitals, most recent reading first."""
    vitals = store.vitals.values()
    if patient_id:
        vitals = [v for v in vitals if v.get("patientId") == patient_id]
    return sort_by_time(vitals, "recordedAt", newest_first=True)


def latest_vitals(store: EHRStore, patient_id: str) -> Optional[Record]:
    vitals = filter_vitals(store, patient_id)
    return vitals[0] if vitals else None


def _record_vitals(store: EHRStore, patient_id: str, reading: VitalReading) -> Record:
    require_patient(store, patient_id)
    fields = reading.to_record()
    fields["patientId"] = patient_id
    if not fields.get("recordedAt"):
        fields["recordedAt"] = utc_now_iso()
    return create_record(store, store.vitals, with_bmi(fields))


@router.get("/vitals", response_model=VitalList)
async def list_vitals(
    store: StoreDep,
    patient_id: Optional[str] = Query(default=None, alias="patientId"),
    limit: Optional[int] = Query(default=None, ge=0),
):
    vitals = apply_limit(filter_vitals(store, patient_id), limit)
    return {"vitals": vitals, "total": len(vitals)}


@router.get("/patients/{patient_id}/vitals", response_model=VitalList)
async def list_patient_vitals(
    patient_id: str,
    store: StoreDep,
    limit: Optional[int] = Query(default=None, ge=0),
):
    """Vital sign history of one patient, newest first."""
    require_patient(store, patient_id)
    vitals = apply_limit(filter_vitals(store, patient_id), limit)
    return {"vitals": vitals, "total": len(vitals)}


@router.get("/patients/{patient_id}/vitals/latest", response_model=Vital)
async def get_latest_patient_vitals(patient_id: str, store: StoreDep):
    require_patient(store, patient_id)
    latest = latest_vitals(store, patient_id)
    if latest is None:
        raise NotFoundError("Vitals")
    return latest


@router.post("/patients/{patient_id}/vitals", response_model=Vital, status_code=status.HTTP_201_CREATED)
async def create_patient_vitals(patient_id: str, data: VitalReading, store: StoreDep):
    """Record a set of vital signs for a patient."""
    return _record_vitals(store, patient_id, data)


@router.get("/vitals/{vital_id}", response_model=Vital)
async def get_vital(vital_id: str, store: StoreDep):
    return get_or_404(store.vitals, vital_id, "Vital")


@router.post("/vitals", response_model=Vital, status_code=status.HTTP_201_CREATED)
async def create_vital(data: VitalCreate, store: StoreDep):
    return _record_vitals(store, data.patient_id, data)


@router.put("/vitals/{vital_id}", response_model=Vital)
@router.patch("/vitals/{vital_id}", response_model=Vital)
async def update_vital(vital_id: str, data: VitalUpdate, store: StoreDep):
    updated = update_record(store.vitals, vital_id, data.to_changes(), "Vital")
    return with_bmi(updated)


@router.delete("/vitals/{vital_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vital(vital_id: str, store: StoreDep):
    delete_record(store.vitals, vital_id, "Vital")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
