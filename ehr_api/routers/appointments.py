"""Appointment API router."""

import datetime as dt
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
from ehr_api.schemas.appointment import (
    CLOSED_STATUSES,
    Appointment,
    AppointmentCreate,
    AppointmentList,
    AppointmentStatus,
    AppointmentType,
    AppointmentUpdate,
)
from ehr_api.schemas.common import ErrorResponse
from ehr_api.store import EHRStore, Record, next_timestamp, parse_timestamp

router = APIRouter(prefix="/api", tags=["Appointments"], responses={404: {"model": ErrorResponse}})


def filter_appointments(
    store: EHRStore,
    patient_id: Optional[str] = None,
    provider_id: Optional[str] = None,
    status: Optional[str] = None,
    type: Optional[str] = None,
    on_date: Optional[dt.date] = None,
) -> List[Record]:
    """Filter appointments and sort them by start time, earliest first."""
    appointments = store.appointments.values()

    if patient_id:
        appointments = [a for a in appointments if a.get("patientId") == patient_id]
    if provider_id:
        appointments = [a for a in appointments if a.get("providerId") == provider_id]
    if status:
        appointments = [a for a in appointments if a.get("status") == status]
    if type:
        appointments = [a for a in appointments if a.get("type") == type]
    if on_date:
        appointments = [a for a in appointments if parse_timestamp(a["date"]).date() == on_date]

    return sort_by_time(appointments, "date")


def upcoming_appointments(store: EHRStore, patient_id: str, until: Optional[dt.datetime] = None) -> List[Record]:
    """Open appointments that start after now, earliest first."""
    now = dt.datetime.now(dt.timezone.utc)
    upcoming = []
    for appointment in filter_appointments(store, patient_id=patient_id):
        if appointment.get("status") in CLOSED_STATUSES:
            continue
        start = parse_timestamp(appointment["date"])
        if start > now and (until is None or start <= until):
            upcoming.append(appointment)
    return upcoming


@router.get("/appointments", response_model=AppointmentList)
async def list_appointments(
    store: StoreDep,
    patient_id: Optional[str] = Query(default=None, alias="patientId"),
    provider_id: Optional[str] = Query(default=None, alias="providerId"),
    status: Optional[AppointmentStatus] = None,
    type: Optional[AppointmentType] = None,
    date: Optional[dt.date] = Query(default=None, description="Calendar day (UTC), YYYY-MM-DD"),
    limit: Optional[int] = Query(default=None, ge=0),
):
    """List appointments sorted by date."""
    appointments = filter_appointments(
        store,
        patient_id=patient_id,
        provider_id=provider_id,
        status=status.value if status else None,
        type=type.value if type else None,
        on_date=date,
    )
    appointments = apply_limit(appointments, limit)
    return {"appointments": appointments, "total": len(appointments)}


@router.get("/patients/{patient_id}/appointments", response_model=AppointmentList)
async def list_patient_appointments(
    patient_id: str,
    store: StoreDep,
    status: Optional[AppointmentStatus] = None,
    limit: Optional[int] = Query(default=None, ge=0),
):
    """List one patient's appointments sorted by date."""
    require_patient(store, patient_id)
    appointments = filter_appointments(
        store, patient_id=patient_id, status=status.value if status else None
    )
    appointments = apply_limit(appointments, limit)
    return {"appointments": appointments, "total": len(appointments)}


@router.get("/appointments/{appointment_id}", response_model=Appointment)
async def get_appointment(appointment_id: str, store: StoreDep):
    return get_or_404(store.appointments, appointment_id, "Appointment")


@router.post("/appointments", response_model=Appointment, status_code=status.HTTP_201_CREATED)
async def create_appointment(data: AppointmentCreate, store: StoreDep):
    """Book an appointment for an existing patient."""
    require_patient(store, data.patient_id)
    return create_record(store, store.appointments, data.to_record())


@router.put("/appointments/{appointment_id}", response_model=Appointment)
@router.patch("/appointments/{appointment_id}", response_model=Appointment)
async def update_appointment(appointment_id: str, data: AppointmentUpdate, store: StoreDep):
    return update_record(store.appointments, appointment_id, data.to_changes(), "Appointment")


@router.patch("/appointments/{appointment_id}/cancel", response_model=Appointment)
async def cancel_appointment(appointment_id: str, store: StoreDep):
    """Mark an appointment as cancelled."""
    appointment = get_or_404(store.appointments, appointment_id, "Appointment")
    appointment["status"] = AppointmentStatus.CANCELLED.value
    appointment["updatedAt"] = next_timestamp(appointment.get("updatedAt"))
    store.appointments.set(appointment_id, appointment)
    return appointment


@router.delete("/appointments/{appointment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_appointment(appointment_id: str, store: StoreDep):
    delete_record(store.appointments, appointment_id, "Appointment")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
