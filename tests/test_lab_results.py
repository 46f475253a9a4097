"""Tests for the lab result endpoints."""


class TestLabResults:
    """Test cases for lab result CRUD and review."""

    def test_create(self, client, patient, lab_payload):
        response = client.post("/api/lab-results", json=lab_payload(patient["id"]))

        assert response.status_code == 201
        data = response.json()
        assert data["id"].startswith("L")
        assert data["value"] == 6.1
        assert data["flag"] == "abnormal"

    def test_create_defaults(self, client, patient):
        data = client.post(
            "/api/lab-results",
            json={
                "patientId": patient["id"],
                "testName": "Lipid panel",
                "collectedAt": "2025-03-02T08:00:00Z",
            },
        ).json()

        assert data["status"] == "pending"
        assert data["flag"] == "normal"
        assert data["category"] == "general"

    def test_text_value(self, client, patient, lab_payload):
        data = client.post(
            "/api/lab-results",
            json=lab_payload(patient["id"], testName="Urine culture", value="No growth"),
        ).json()

        assert data["value"] == "No growth"

    def test_create_for_missing_patient(self, client, store, lab_payload):
        response = client.post("/api/lab-results", json=lab_payload("P404"))

        assert response.status_code == 404
        assert len(store.lab_results) == 0

    def test_list_filters_and_sort(self, client, patient, lab_payload):
        client.post("/api/lab-results", json=lab_payload(patient["id"], collectedAt="2025-01-01T08:00:00Z"))
        client.post(
            "/api/lab-results",
            json=lab_payload(patient["id"], flag="normal", status="pending", collectedAt="2025-04-01T08:00:00Z"),
        )
        client.post(
            "/api/lab-results",
            json=lab_payload(patient["id"], flag="critical", category="hematology", collectedAt="2025-02-01T08:00:00Z"),
        )

        everything = client.get("/api/lab-results").json()
        assert [r["collectedAt"][:10] for r in everything["labResults"]] == ["2025-04-01", "2025-02-01", "2025-01-01"]

        critical = client.get("/api/lab-results", params={"flag": "critical"}).json()
        assert critical["total"] == 1
        assert critical["labResults"][0]["category"] == "hematology"

        pending = client.get("/api/lab-results", params={"status": "pending"}).json()
        assert pending["total"] == 1

        chemistry = client.get("/api/lab-results", params={"category": "chemistry"}).json()
        assert chemistry["total"] == 2

    def test_patient_scoped_listing(self, client, patient, lab_payload):
        client.post("/api/lab-results", json=lab_payload(patient["id"]))

        data = client.get(f"/api/patients/{patient['id']}/lab-results").json()

        assert data["total"] == 1
        assert client.get("/api/patients/P404/lab-results").status_code == 404

    def test_review(self, client, patient, lab_payload):
        created = client.post("/api/lab-results", json=lab_payload(patient["id"])).json()

        data = client.patch(f"/api/lab-results/{created['id']}/review").json()

        assert data["status"] == "reviewed"
        assert data["createdAt"] == created["createdAt"]

    def test_update_and_delete(self, client, patient, lab_payload):
        created = client.post("/api/lab-results", json=lab_payload(patient["id"])).json()

        updated = client.put(f"/api/lab-results/{created['id']}", json={"notes": "Repeat in 3 months"}).json()
        assert updated["notes"] == "Repeat in 3 months"
        assert updated["testName"] == "Hemoglobin A1c"

        assert client.delete(f"/api/lab-results/{created['id']}").status_code == 204
        response = client.get(f"/api/lab-results/{created['id']}")
        assert response.status_code == 404
        assert response.json() == {"error": "Lab result not found"}
