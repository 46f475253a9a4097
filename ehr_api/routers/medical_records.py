"""Medical record API router."""

from typing import List, Optional

from fastapi import APIRouter, Query, Response, status

from ehr_api.dependencies import StoreDep
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
from ehr_api.schemas.medical_record import (
    MedicalRecord,
    MedicalRecordCreate,
    MedicalRecordList,
    MedicalRecordUpdate,
    RecordType,
)
from ehr_api.store import EHRStore, Record

router = APIRouter(prefix="/api", tags=["Medical Records"], responses={404: {"model": ErrorResponse}})


def filter_medical_records(
    store: EHRStore,
    patient_id: Optional[str] = None,
    provider_id: Optional[str] = None,
    record_type: Optional[str] = None,
) -> List[Record]:
    """Filter medical records, newest first."""
    records = store.medical_records.values()

    if patient_id:
        records = [r for r in records if r.get("patientId") == patient_id]
    if provider_id:
        records = [r for r in records if r.get("providerId") == provider_id]
    if record_type:
        records = [r for r in records if r.get("recordType") == record_type]

    return sort_by_time(records, "date", newest_first=True)


@router.get("/medical-records", response_model=MedicalRecordList)
async def list_medical_records(
    store: StoreDep,
    patient_id: Optional[str] = Query(default=None, alias="patientId"),
    provider_id: Optional[str] = Query(default=None, alias="providerId"),
    record_type: Optional[RecordType] = Query(default=None, alias="recordType"),
    limit: Optional[int] = Query(default=None, ge=0),
):
    records = filter_medical_records(
        store,
        patient_id=patient_id,
        provider_id=provider_id,
        record_type=record_type.value if record_type else None,
    )
    records = apply_limit(records, limit)
    return {"medicalRecords": records, "total": len(records)}


@router.get("/patients/{patient_id}/medical-records", response_model=MedicalRecordList)
async def list_patient_medical_records(
    patient_id: str,
    store: StoreDep,
    record_type: Optional[RecordType] = Query(default=None, alias="recordType"),
    limit: Optional[int] = Query(default=None, ge=0),
):
    """The chart of one patient, newest entry first."""
    require_patient(store, patient_id)
    records = filter_medical_records(
        store, patient_id=patient_id, record_type=record_type.value if record_type else None
    )
    records = apply_limit(records, limit)
    return {"medicalRecords": records, "total": len(records)}


@router.get("/medical-records/{record_id}", response_model=MedicalRecord)
async def get_medical_record(record_id: str, store: StoreDep):
    return get_or_404(store.medical_records, record_id, "Medical record")


@router.post("/medical-records", response_model=MedicalRecord, status_code=status.HTTP_201_CREATED)
async def create_medical_record(data: MedicalRecordCreate, store: StoreDep):
    """File a medical record for an existing patient."""
    require_patient(store, data.patient_id)
    return create_record(store, store.medical_records, data.to_record())


@router.put("/medical-records/{record_id}", response_model=MedicalRecord)
@router.patch("/medical-records/{record_id}", response_model=MedicalRecord)
async def update_medical_record(record_id: str, data: MedicalRecordUpdate, store: StoreDep):
    return update_record(store.medical_records, record_id, data.to_changes(), "Medical record")


@router.delete("/medical-records/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_medical_record(record_id: str, store: StoreDep):
    delete_record(store.medical_records, record_id, "Medical record")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
