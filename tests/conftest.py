"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from ehr_api.config import Settings
from ehr_api.main import create_app


def iso_in(days: float = 0, hours: float = 0) -> str:
    """ISO timestamp relative to now."""
    moment = datetime.now(timezone.utc) + timedelta(days=days, hours=hours)
    return moment.isoformat().replace("+00:00", "Z")


@pytest.fixture
def settings():
    return Settings(CORS_ORIGINS=["http://localhost:3002"])


@pytest.fixture
def app(settings):
    """Application with an empty store."""
    return create_app(settings)


@pytest.fixture
def store(app):
    return app.state.store


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def patient_payload():
    """Sample patient registration body."""
    return {
        "firstName": "John",
        "lastName": "Doe",
        "dateOfBirth": "1985-03-15",
        "gender": "male",
        "email": "john.doe@example.com",
        "phone": "+1-555-0101",
        "address": {
            "street": "123 Main St",
            "city": "Springfield",
            "state": "IL",
            "zipCode": "62701",
            "country": "USA",
        },
        "emergencyContact": {
            "name": "Jane Doe",
            "relationship": "Spouse",
            "phone": "+1-555-0102",
        },
        "bloodType": "O+",
        "allergies": ["Penicillin", "Peanuts"],
        "chronicConditions": ["Hypertension"],
        "insuranceProvider": "Blue Cross",
        "insuranceNumber": "BC123456789",
    }


@pytest.fixture
def create_patient(client, patient_payload):
    """Factory registering a patient through the API."""

    def _create(**overrides):
        response = client.post("/api/patients", json={**patient_payload, **overrides})
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def patient(create_patient):
    return create_patient()


@pytest.fixture
def create_appointment(client):
    """Factory booking an appointment through the API."""

    def _create(patient_id, **overrides):
        body = {
            "patientId": patient_id,
            "providerId": "DR001",
            "providerName": "Dr. Smith",
            "department": "Cardiology",
            "date": iso_in(days=7),
            "duration": 30,
            "type": "followup",
            "notes": "Follow-up for hypertension management",
        }
        body.update(overrides)
        response = client.post("/api/appointments", json=body)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def prescription_payload():
    def _payload(patient_id, **overrides):
        body = {
            "patientId": patient_id,
            "providerId": "DR001",
            "providerName": "Dr. Smith",
            "medication": "Lisinopril",
            "dosage": "10 mg",
            "frequency": "once daily",
            "route": "oral",
            "startDate": "2025-01-15T00:00:00Z",
            "refillsRemaining": 2,
        }
        body.update(overrides)
        return body

    return _payload


@pytest.fixture
def lab_payload():
    def _payload(patient_id, **overrides):
        body = {
            "patientId": patient_id,
            "testName": "Hemoglobin A1c",
            "testCode": "4548-4",
            "category": "chemistry",
            "value": 6.1,
            "unit": "%",
            "referenceRange": "4.0-5.6",
            "flag": "abnormal",
            "status": "completed",
            "collectedAt": "2025-03-01T08:30:00Z",
        }
        body.update(overrides)
        return body

    return _payload


@pytest.fixture
def record_payload():
    def _payload(patient_id, **overrides):
        body = {
            "patientId": patient_id,
            "providerId": "DR003",
            "providerName": "Dr. Garcia",
            "recordType": "visit-note",
            "title": "Annual physical",
            "description": "Blood pressure well controlled on current regimen.",
            "date": "2025-02-10T11:00:00Z",
            "diagnosisCodes": ["I10"],
        }
        body.update(overrides)
        return body

    return _payload


@pytest.fixture
def relative_time():
    """Build ISO timestamps relative to now."""
    return iso_in
