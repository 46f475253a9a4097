"""Tests for the API client, the patient portal and the admin shell.

The client is driven through Starlette's TestClient, so no server or
network is needed.
"""

from unittest.mock import MagicMock

import pytest
import requests

from ehr_api import admin
from ehr_api.client import EHRClient, EHRClientError, EHRNotFoundError
from ehr_api.portal import PatientPortal


@pytest.fixture
def api(client):
    return EHRClient(base_url="", session=client)


@pytest.fixture
def portal(api):
    return PatientPortal(client=api)


class TestEHRClient:
    """Test cases for EHRClient."""

    def test_status(self, api):
        assert api.status() == {"ok": True}

    def test_patient_round_trip(self, api, patient_payload):
        created = api.create_patient(patient_payload)

        assert api.get_patient(created["id"])["email"] == "john.doe@example.com"
        assert [p["id"] for p in api.list_patients(search="john")] == [created["id"]]

        updated = api.update_patient(created["id"], {"phone": "+1-555-0000"})
        assert updated["phone"] == "+1-555-0000"

        assert api.delete_patient(created["id"]) is None

    def test_not_found_raises(self, api):
        with pytest.raises(EHRNotFoundError) as exc_info:
            api.get_patient("P404")

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Patient not found"

    def test_bad_request_raises(self, api):
        with pytest.raises(EHRClientError) as exc_info:
            api.search("")

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Search query is required"

    def test_appointments(self, api, patient, create_appointment):
        appointment = create_appointment(patient["id"])

        listed = api.list_appointments(patient_id=patient["id"])
        assert [a["id"] for a in listed] == [appointment["id"]]

        cancelled = api.cancel_appointment(appointment["id"])
        assert cancelled["status"] == "cancelled"

    def test_connection_error(self):
        session = MagicMock()
        session.request.side_effect = requests.exceptions.ConnectionError("refused")
        api = EHRClient(base_url="http://localhost:1", session=session)

        with pytest.raises(EHRClientError) as exc_info:
            api.status()

        assert exc_info.value.status_code is None
        session.request.assert_called_once()
        assert session.request.call_args.args == ("GET", "http://localhost:1/status")


class TestPatientPortal:
    """Test cases for PatientPortal."""

    def test_load_patients(self, portal, create_patient):
        create_patient()

        patients = portal.load_patients()

        assert len(patients) == 1
        assert portal.error == ""
        assert portal.loading is False

    def test_load_patients_failure(self):
        failing = MagicMock()
        failing.list_patients.side_effect = EHRClientError("down")
        portal = PatientPortal(client=failing)

        assert portal.load_patients() == []
        assert portal.error == "Failed to fetch patients"

    def test_filtered_patients(self, portal, create_patient):
        create_patient()
        create_patient(firstName="Sarah", lastName="Johnson", email="sarah.j@example.com")
        portal.load_patients()

        assert [p["firstName"] for p in portal.filtered_patients("SARAH")] == ["Sarah"]
        assert len(portal.filtered_patients("")) == 2

    def test_select_patient(self, portal, patient, create_appointment):
        appointment = create_appointment(patient["id"])

        selected = portal.select_patient(patient["id"])

        assert selected["id"] == patient["id"]
        assert [a["id"] for a in portal.appointments] == [appointment["id"]]

    def test_select_patient_uses_cache(self, portal, api, patient, create_appointment):
        portal.select_patient(patient["id"])
        create_appointment(patient["id"])

        portal.select_patient(patient["id"])
        assert portal.appointments == []

        portal.select_patient(patient["id"], use_cache=False)
        assert len(portal.appointments) == 1

    def test_select_missing_patient(self, portal):
        assert portal.select_patient("P404") is None
        assert portal.error == "Patient not found"

    def test_cached_selection_clears_error(self, portal, patient):
        portal.select_patient(patient["id"])
        portal.select_patient("P404")
        assert portal.error == "Patient not found"

        selected = portal.select_patient(patient["id"])

        assert selected["id"] == patient["id"]
        assert portal.error == ""

    def test_refresh_appointments(self, portal, patient, create_appointment):
        portal.select_patient(patient["id"])
        create_appointment(patient["id"])

        assert len(portal.refresh_appointments()) == 1

    def test_delete_selected_patient(self, portal, patient, create_appointment):
        create_appointment(patient["id"])
        portal.load_patients()
        portal.select_patient(patient["id"])

        assert portal.delete_patient(patient["id"]) is True
        assert portal.patients == []
        assert portal.selected_patient is None
        assert portal.appointments == []

    def test_delete_missing_patient(self, portal):
        assert portal.delete_patient("P404") is False
        assert "Patient not found" in portal.error

    def test_cancel_appointment(self, portal, patient, create_appointment):
        appointment = create_appointment(patient["id"])
        portal.select_patient(patient["id"])

        updated = portal.cancel_appointment(appointment["id"])

        assert updated["status"] == "cancelled"
        assert portal.appointments[0]["status"] == "cancelled"
        # the cached copy is updated too
        portal.select_patient(patient["id"])
        assert portal.appointments[0]["status"] == "cancelled"

    def test_cancel_missing_appointment(self, portal):
        assert portal.cancel_appointment("A404") is None
        assert "Appointment not found" in portal.error

    @pytest.mark.parametrize(
        "status,color",
        [("cancelled", "red"), ("completed", "green"), ("scheduled", "orange"), ("confirmed", "orange")],
    )
    def test_status_color(self, status, color):
        assert PatientPortal.status_color(status) == color


class TestAdminShell:
    """Test cases for the admin CLI."""

    def test_stats(self, api, patient, capsys):
        assert admin.main(["stats"], client=api) == 0

        out = capsys.readouterr().out
        assert "patients" in out
        assert "Appointments today: 0" in out

    def test_patients(self, api, patient, capsys):
        assert admin.main(["patients", "--search", "doe"], client=api) == 0

        out = capsys.readouterr().out
        assert patient["id"] in out
        assert "1 patient(s)" in out

    def test_appointments_and_cancel(self, api, patient, create_appointment, capsys):
        appointment = create_appointment(patient["id"])

        assert admin.main(["appointments", "--patient", patient["id"]], client=api) == 0
        assert appointment["id"] in capsys.readouterr().out

        assert admin.main(["cancel", appointment["id"]], client=api) == 0
        assert "is now cancelled" in capsys.readouterr().out

    def test_error_exit_code(self, api, capsys):
        assert admin.main(["delete-patient", "P404"], client=api) == 1
        assert "Patient not found" in capsys.readouterr().err
