"""Composite read endpoints: patient dashboard, admin stats and search.

These scan every collection on each request; nothing is cached.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import APIRouter, Query

from ehr_api.dependencies import SettingsDep, StoreDep
from ehr_api.exceptions import BadRequestError
from ehr_api.records import apply_limit, contains, require_patient
from ehr_api.routers.appointments import upcoming_appointments
from ehr_api.routers.lab_results import ABNORMAL_FLAGS, filter_lab_results
from ehr_api.routers.medical_records import filter_medical_records
from ehr_api.routers.patients import filter_patients
from ehr_api.routers.prescriptions import filter_prescriptions
from ehr_api.routers.vitals import latest_vitals
from ehr_api.schemas.appointment import AppointmentStatus
from ehr_api.schemas.common import ErrorResponse
from ehr_api.schemas.dashboard import DashboardStats, PatientDashboard, SearchResults
from ehr_api.schemas.lab_result import LabStatus
from ehr_api.schemas.prescription import PrescriptionStatus
from ehr_api.store import parse_timestamp

router = APIRouter(prefix="/api", tags=["Dashboard"], responses={404: {"model": ErrorResponse}})


@router.get("/patients/{patient_id}/dashboard", response_model=PatientDashboard)
async def get_patient_dashboard(patient_id: str, store: StoreDep, settings: SettingsDep):
    """
    Summarize a patient's chart.

    Counts upcoming appointments, active prescriptions and outstanding
    labs, and includes the latest vital signs and the most recent records.
    """
    patient = require_patient(store, patient_id)

    until = None
    if settings.UPCOMING_WINDOW_DAYS > 0:
        until = datetime.now(timezone.utc) + timedelta(days=settings.UPCOMING_WINDOW_DAYS)
    upcoming = upcoming_appointments(store, patient_id, until=until)

    labs = filter_lab_results(store, patient_id=patient_id)
    records = filter_medical_records(store, patient_id=patient_id)

    return {
        "patient": patient,
        "upcomingAppointments": len(upcoming),
        "nextAppointment": upcoming[0] if upcoming else None,
        "activePrescriptions": len(
            filter_prescriptions(store, patient_id=patient_id, status=PrescriptionStatus.ACTIVE.value)
        ),
        "latestVitals": latest_vitals(store, patient_id),
        "pendingLabResults": sum(1 for r in labs if r.get("status") == LabStatus.PENDING.value),
        "abnormalLabResults": sum(1 for r in labs if r.get("flag") in ABNORMAL_FLAGS),
        "recentRecords": records[:settings.RECENT_RECORDS_LIMIT],
    }


@router.get("/dashboard/stats", response_model=DashboardStats)
async def get_dashboard_stats(store: StoreDep):
    """Collection totals and today's workload for the admin shell."""
    today = datetime.now(timezone.utc).date()

    by_status = {s.value: 0 for s in AppointmentStatus}
    appointments_today = 0
    for appointment in store.appointments.values():
        by_status[appointment.get("status")] = by_status.get(appointment.get("status"), 0) + 1
        if parse_timestamp(appointment["date"]).date() == today:
            appointments_today += 1

    return {
        "patients": len(store.patients),
        "appointments": len(store.appointments),
        "prescriptions": len(store.prescriptions),
        "labResults": len(store.lab_results),
        "vitals": len(store.vitals),
        "medicalRecords": len(store.medical_records),
        "appointmentsToday": appointments_today,
        "appointmentsByStatus": by_status,
        "activePrescriptions": len(store.prescriptions.where(status=PrescriptionStatus.ACTIVE.value)),
        "pendingLabResults": len(store.lab_results.where(status=LabStatus.PENDING.value)),
    }


@router.get("/search", response_model=SearchResults)
async def search(
    store: StoreDep,
    q: Optional[str] = Query(default=None, description="Free-text query"),
    limit: Optional[int] = Query(default=None, ge=0, description="Maximum matches per collection"),
):
    """Search patients, medical records, prescriptions and lab results."""
    if not q or not q.strip():
        raise BadRequestError("Search query is required")
    query = q.strip()
    match = contains(query)

    patients = apply_limit(filter_patients(store, search=query), limit)
    records = apply_limit(
        [r for r in filter_medical_records(store) if match(r.get("title"), r.get("description"))],
        limit,
    )
    prescriptions = apply_limit(filter_prescriptions(store, medication=query), limit)
    labs = apply_limit(
        [r for r in filter_lab_results(store) if match(r.get("testName"))],
        limit,
    )

    return {
        "query": query,
        "patients": patients,
        "medicalRecords": records,
        "prescriptions": prescriptions,
        "labResults": labs,
        "total": len(patients) + len(records) + len(prescriptions) + len(labs),
    }
