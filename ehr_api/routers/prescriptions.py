"""Prescription API router."""

from typing import List, Optional

from fastapi import APIRouter, Body, Query, Response, status

from ehr_api.dependencies import StoreDep
from ehr_api.exceptions import BadRequestError
from ehr_api.records import (
    apply_limit,
    contains,
    create_record,
    delete_record,
    get_or_404,
    require_patient,
    sort_by_time,
    update_record,
)
from ehr_api.schemas.common import ErrorResponse
from ehr_api.schemas.prescription import (
    Prescription,
    PrescriptionCreate,
    PrescriptionList,
    PrescriptionStatus,
    PrescriptionUpdate,
    RefillRequest,
)
from ehr_api.store import EHRStore, Record, next_timestamp

router = APIRouter(prefix="/api", tags=["Prescriptions"], responses={404: {"model": ErrorResponse}})


def filter_prescriptions(
    store: EHRStore,
    patient_id: Optional[str] = None,
    status: Optional[str] = None,
    medication: Optional[str] = None,
) -> List[Record]:
    """Filter prescriptions, newest start date first."""
    prescriptions = store.prescriptions.values()

    if patient_id:
        prescriptions = [p for p in prescriptions if p.get("patientId") == patient_id]
    if status:
        prescriptions = [p for p in prescriptions if p.get("status") == status]
    if medication:
        match = contains(medication)
        prescriptions = [p for p in prescriptions if match(p.get("medication"))]

    return sort_by_time(prescriptions, "startDate", newest_first=True)


@router.get("/prescriptions", response_model=PrescriptionList)
async def list_prescriptions(
    store: StoreDep,
    patient_id: Optional[str] = Query(default=None, alias="patientId"),
    status: Optional[PrescriptionStatus] = None,
    medication: Optional[str] = None,
    limit: Optional[int] = Query(default=None, ge=0),
):
    prescriptions = filter_prescriptions(
        store, patient_id=patient_id, status=status.value if status else None, medication=medication
    )
    prescriptions = apply_limit(prescriptions, limit)
    return {"prescriptions": prescriptions, "total": len(prescriptions)}


@router.get("/patients/{patient_id}/prescriptions", response_model=PrescriptionList)
async def list_patient_prescriptions(
    patient_id: str,
    store: StoreDep,
    status: Optional[PrescriptionStatus] = None,
    limit: Optional[int] = Query(default=None, ge=0),
):
    require_patient(store, patient_id)
    prescriptions = filter_prescriptions(
        store, patient_id=patient_id, status=status.value if status else None
    )
    prescriptions = apply_limit(prescriptions, limit)
    return {"prescriptions": prescriptions, "total": len(prescriptions)}


@router.get("/prescriptions/{prescription_id}", response_model=Prescription)
async def get_prescription(prescription_id: str, store: StoreDep):
    return get_or_404(store.prescriptions, prescription_id, "Prescription")


@router.post("/prescriptions", response_model=Prescription, status_code=status.HTTP_201_CREATED)
async def create_prescription(data: PrescriptionCreate, store: StoreDep):
    """Write a prescription for an existing patient."""
    require_patient(store, data.patient_id)
    return create_record(store, store.prescriptions, data.to_record())


@router.put("/prescriptions/{prescription_id}", response_model=Prescription)
@router.patch("/prescriptions/{prescription_id}", response_model=Prescription)
async def update_prescription(prescription_id: str, data: PrescriptionUpdate, store: StoreDep):
    return update_record(store.prescriptions, prescription_id, data.to_changes(), "Prescription")


@router.post("/prescriptions/{prescription_id}/refill", response_model=Prescription)
async def refill_prescription(
    prescription_id: str,
    store: StoreDep,
    data: Optional[RefillRequest] = Body(default=None),
):
    """Add refills to a prescription and re-activate it if it had run out."""
    prescription = get_or_404(store.prescriptions, prescription_id, "Prescription")
    if data is None or data.refills is None:
        raise BadRequestError("Refill count is required")
    if data.refills < 1:
        raise BadRequestError("Refill count must be a positive integer")

    now = next_timestamp(prescription.get("updatedAt"))
    prescription["refillsRemaining"] = prescription.get("refillsRemaining", 0) + data.refills
    prescription["lastRefilledAt"] = now
    if prescription.get("status") == PrescriptionStatus.COMPLETED.value:
        prescription["status"] = PrescriptionStatus.ACTIVE.value
    prescription["updatedAt"] = now
    store.prescriptions.set(prescription_id, prescription)
    return prescription


@router.patch("/prescriptions/{prescription_id}/discontinue", response_model=Prescription)
async def discontinue_prescription(prescription_id: str, store: StoreDep):
    prescription = get_or_404(store.prescriptions, prescription_id, "Prescription")
    prescription["status"] = PrescriptionStatus.DISCONTINUED.value
    prescription["updatedAt"] = next_timestamp(prescription.get("updatedAt"))
    store.prescriptions.set(prescription_id, prescription)
    return prescription


@router.delete("/prescriptions/{prescription_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_prescription(prescription_id: str, store: StoreDep):
    delete_record(store.prescriptions, prescription_id, "Prescription")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
