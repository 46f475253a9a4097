"""Lab result API router."""

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
from ehr_api.schemas.lab_result import (
    LabFlag,
    LabResult,
    LabResultCreate,
    LabResultList,
    LabResultUpdate,
    LabStatus,
)
from ehr_api.store import EHRStore, Record, next_timestamp

router = APIRouter(prefix="/api", tags=["Lab Results"], responses={404: {"model": ErrorResponse}})

ABNORMAL_FLAGS = (LabFlag.ABNORMAL.value, LabFlag.CRITICAL.value)


def filter_lab_results(
    store: EHRStore,
    patient_id: Optional[str] = None,
    status: Optional[str] = None,
    flag: Optional[str] = None,
    category: Optional[str] = None,
) -> List[Record]:
    """Filter lab results, most recently collected first."""
    results = store.lab_results.values()

    if patient_id:
        results = [r for r in results if r.get("patientId") == patient_id]
    if status:
        results = [r for r in results if r.get("status") == status]
    if flag:
        results = [r for r in results if r.get("flag") == flag]
    if category:
        results = [r for r in results if r.get("category") == category]

    return sort_by_time(results, "collectedAt", newest_first=True)


@router.get("/lab-results", response_model=LabResultList)
async def list_lab_results(
    store: StoreDep,
    patient_id: Optional[str] = Query(default=None, alias="patientId"),
    status: Optional[LabStatus] = None,
    flag: Optional[LabFlag] = None,
    category: Optional[str] = None,
    limit: Optional[int] = Query(default=None, ge=0),
):
    results = filter_lab_results(
        store,
        patient_id=patient_id,
        status=status.value if status else None,
        flag=flag.value if flag else None,
        category=category,
    )
    results = apply_limit(results, limit)
    return {"labResults": results, "total": len(results)}


@router.get("/patients/{patient_id}/lab-results", response_model=LabResultList)
async def list_patient_lab_results(
    patient_id: str,
    store: StoreDep,
    status: Optional[LabStatus] = None,
    flag: Optional[LabFlag] = None,
    limit: Optional[int] = Query(default=None, ge=0),
):
    require_patient(store, patient_id)
    results = filter_lab_results(
        store,
        patient_id=patient_id,
        status=status.value if status else None,
        flag=flag.value if flag else None,
    )
    results = apply_limit(results, limit)
    return {"labResults": results, "total": len(results)}


@router.get("/lab-results/{result_id}", response_model=LabResult)
async def get_lab_result(result_id: str, store: StoreDep):
    return get_or_404(store.lab_results, result_id, "Lab result")


@router.post("/lab-results", response_model=LabResult, status_code=status.HTTP_201_CREATED)
async def create_lab_result(data: LabResultCreate, store: StoreDep):
    """Record a lab result for an existing patient."""
    require_patient(store, data.patient_id)
    return create_record(store, store.lab_results, data.to_record())


@router.put("/lab-results/{result_id}", response_model=LabResult)
@router.patch("/lab-results/{result_id}", response_model=LabResult)
async def update_lab_result(result_id: str, data: LabResultUpdate, store: StoreDep):
    return update_record(store.lab_results, result_id, data.to_changes(), "Lab result")


@router.patch("/lab-results/{result_id}/review", response_model=LabResult)
async def review_lab_result(result_id: str, store: StoreDep):
    """Mark a lab result as reviewed by a clinician."""
    result = get_or_404(store.lab_results, result_id, "Lab result")
    result["status"] = LabStatus.REVIEWED.value
    result["updatedAt"] = next_timestamp(result.get("updatedAt"))
    store.lab_results.set(result_id, result)
    return result


@router.delete("/lab-results/{result_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_lab_result(result_id: str, store: StoreDep):
    delete_record(store.lab_results, result_id, "Lab result")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
