"""API routers."""

from ehr_api.routers import (
    appointments,
    dashboard,
    lab_results,
    medical_records,
    patients,
    prescriptions,
    vitals,
)

__all__ = [
    "appointments",
    "dashboard",
    "lab_results",
    "medical_records",
    "patients",
    "prescriptions",
    "vitals",
]
