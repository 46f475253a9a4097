"""Tests for the dashboard, stats and search endpoints."""

import pytest


class TestPatientDashboard:
    """Test cases for GET /api/patients/{id}/dashboard."""

    def test_empty_chart(self, client, patient):
        data = client.get(f"/api/patients/{patient['id']}/dashboard").json()

        assert data["patient"]["id"] == patient["id"]
        assert data["upcomingAppointments"] == 0
        assert data["nextAppointment"] is None
        assert data["activePrescriptions"] == 0
        assert data["latestVitals"] is None
        assert data["pendingLabResults"] == 0
        assert data["abnormalLabResults"] == 0
        assert data["recentRecords"] == []

    def test_missing_patient(self, client):
        response = client.get("/api/patients/P404/dashboard")

        assert response.status_code == 404
        assert response.json() == {"error": "Patient not found"}

    def test_summary(
        self,
        client,
        create_patient,
        create_appointment,
        prescription_payload,
        lab_payload,
        record_payload,
        relative_time,
    ):
        patient = create_patient()
        other = create_patient(email="other@example.com")
        pid = patient["id"]

        soon = create_appointment(pid, date=relative_time(days=2))
        create_appointment(pid, date=relative_time(days=10), status="confirmed")
        create_appointment(pid, date=relative_time(days=5), status="cancelled")
        create_appointment(pid, date=relative_time(days=-3))
        create_appointment(other["id"], date=relative_time(days=1))

        client.post("/api/prescriptions", json=prescription_payload(pid))
        client.post("/api/prescriptions", json=prescription_payload(pid, status="discontinued"))

        client.post("/api/lab-results", json=lab_payload(pid, flag="critical", status="pending"))
        client.post("/api/lab-results", json=lab_payload(pid, flag="normal"))

        client.post(f"/api/patients/{pid}/vitals", json={"heartRate": 70, "recordedAt": "2025-01-01T09:00:00Z"})
        client.post(f"/api/patients/{pid}/vitals", json={"heartRate": 90, "recordedAt": "2025-02-01T09:00:00Z"})

        for month in range(1, 8):
            client.post("/api/medical-records", json=record_payload(pid, date=f"2025-0{month}-01T10:00:00Z"))

        data = client.get(f"/api/patients/{pid}/dashboard").json()

        assert data["upcomingAppointments"] == 2
        assert data["nextAppointment"]["id"] == soon["id"]
        assert data["activePrescriptions"] == 1
        assert data["latestVitals"]["heartRate"] == 90
        assert data["pendingLabResults"] == 1
        assert data["abnormalLabResults"] == 1
        assert len(data["recentRecords"]) == 5
        assert data["recentRecords"][0]["date"].startswith("2025-07-01")

    def test_upcoming_window(self, settings, create_patient, create_appointment, client, relative_time):
        """A configured window caps which appointments count as upcoming."""
        settings.UPCOMING_WINDOW_DAYS = 7
        patient = create_patient()
        create_appointment(patient["id"], date=relative_time(days=3))
        create_appointment(patient["id"], date=relative_time(days=30))

        data = client.get(f"/api/patients/{patient['id']}/dashboard").json()

        assert data["upcomingAppointments"] == 1


class TestStats:
    """Test cases for GET /api/dashboard/stats."""

    def test_stats(self, client, patient, create_appointment, prescription_payload, relative_time):
        create_appointment(patient["id"], date=relative_time(hours=0))
        create_appointment(patient["id"], date=relative_time(days=20), status="confirmed")
        client.post("/api/prescriptions", json=prescription_payload(patient["id"]))

        data = client.get("/api/dashboard/stats").json()

        assert data["patients"] == 1
        assert data["appointments"] == 2
        assert data["prescriptions"] == 1
        assert data["labResults"] == 0
        assert data["appointmentsToday"] == 1
        assert data["appointmentsByStatus"]["scheduled"] == 1
        assert data["appointmentsByStatus"]["confirmed"] == 1
        assert data["appointmentsByStatus"]["cancelled"] == 0
        assert data["activePrescriptions"] == 1


class TestSearch:
    """Test cases for GET /api/search."""

    @pytest.mark.parametrize("params", [{}, {"q": ""}, {"q": "   "}])
    def test_missing_query(self, client, params):
        response = client.get("/api/search", params=params)

        assert response.status_code == 400
        assert response.json() == {"error": "Search query is required"}

    def test_search_across_collections(self, client, create_patient, prescription_payload, lab_payload, record_payload):
        patient = create_patient(firstName="Hemi", email="hemi@example.com")
        create_patient(firstName="Sarah", lastName="Johnson", email="sarah.j@example.com")
        client.post("/api/prescriptions", json=prescription_payload(patient["id"]))
        client.post("/api/lab-results", json=lab_payload(patient["id"]))
        client.post("/api/medical-records", json=record_payload(patient["id"], title="Hematology consult"))

        data = client.get("/api/search", params={"q": "hem"}).json()

        assert data["query"] == "hem"
        assert [p["firstName"] for p in data["patients"]] == ["Hemi"]
        assert [r["title"] for r in data["medicalRecords"]] == ["Hematology consult"]
        assert [r["testName"] for r in data["labResults"]] == ["Hemoglobin A1c"]
        assert data["prescriptions"] == []
        assert data["total"] == 3
