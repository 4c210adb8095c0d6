"""API tests for the doctor, dashboard and report endpoints."""
from careforme.core.exceptions import ResourceNotFoundError


class TestListDoctors:
    """Test GET /api/doctors."""

    def test_lists_all(self, client, auth_headers):
        response = client.get("/api/doctors", headers=auth_headers)

        data = response.get_json()["data"]
        assert response.status_code == 200
        assert data["totalCount"] == 3
        assert [d["id"] for d in data["doctors"]] == ["doc1", "doc2", "doc3"]
        assert data["doctors"][2]["status"] == "Suspended"

    def test_filters(self, client, auth_headers):
        response = client.get(
            "/api/doctors?specialty=Cardiology&availability=available", headers=auth_headers
        )

        data = response.get_json()["data"]
        assert [d["id"] for d in data["doctors"]] == ["doc1"]
        assert data["filteredCount"] == 1
        assert data["filters"]["specialty"] == "Cardiology"

    def test_search(self, client, auth_headers):
        response = client.get("/api/doctors?q=CHICAGO", headers=auth_headers)

        assert [d["id"] for d in response.get_json()["data"]["doctors"]] == ["doc3"]

    def test_invalid_availability(self, client, auth_headers):
        response = client.get("/api/doctors?availability=maybe", headers=auth_headers)

        assert response.status_code == 400

    def test_store_failure(self, client, auth_headers, doctor_store):
        doctor_store.fail("list")

        response = client.get("/api/doctors", headers=auth_headers)

        assert response.status_code == 502
        assert response.get_json()["error"]["code"] == "EXTERNAL_SERVICE_ERROR"


class TestDoctorOptions:
    def test_options_are_public(self, client):
        response = client.get("/api/doctors/options")

        data = response.get_json()["data"]
        assert response.status_code == 200
        assert "Cardiology" in data["specialties"]
        assert data["weekdays"][0] == "Monday"
        assert data["availability"] == ["all", "available", "unavailable", "suspended"]


class TestGetDoctor:
    def test_display_normalized(self, client, auth_headers, doctor_store):
        doctor_store.documents["doc4"] = {"name": "Dr. Partial"}

        response = client.get("/api/doctors/doc4", headers=auth_headers)

        data = response.get_json()["data"]
        assert data["id"] == "doc4"
        assert data["bio"] == "N/A"
        assert data["rating"] == 0.0
        assert data["isAvailable"] is True

    def test_member_since(self, client, auth_headers):
        response = client.get("/api/doctors/doc1", headers=auth_headers)

        assert response.get_json()["data"]["memberSince"] == "March 5, 2024"

    def test_not_found(self, client, auth_headers):
        response = client.get("/api/doctors/missing", headers=auth_headers)

        assert response.status_code == 404
        assert response.get_json()["error"]["code"] == "RESOURCE_NOT_FOUND"


class TestCreateAndUpdate:
    """Test POST and PUT/PATCH /api/doctors."""

    payload = {
        "name": "Dr. Ana Lopez",
        "specialty": "Neurology",
        "city": "Boston",
        "address": "1 Main St",
        "email": "ana.lopez@careforme.com",
        "phone": "+1 (617) 555-0000",
    }

    def test_create(self, client, auth_headers, doctor_store):
        response = client.post("/api/doctors", json=self.payload, headers=auth_headers)

        assert response.status_code == 201
        data = response.get_json()["data"]
        assert data["id"] in doctor_store.documents
        assert data["status"] == "Available"

    def test_create_missing_fields(self, client, auth_headers):
        response = client.post("/api/doctors", json={"name": "Dr. A"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.get_json()["error"]["code"] == "VALIDATION_ERROR"

    def test_patch(self, client, auth_headers, doctor_store):
        response = client.patch("/api/doctors/doc2", json={"isAvailable": True}, headers=auth_headers)

        assert response.status_code == 200
        assert response.get_json()["data"]["status"] == "Available"
        assert doctor_store.documents["doc2"]["isAvailable"] is True

    def test_put_missing(self, client, auth_headers):
        response = client.put("/api/doctors/missing", json={"bio": "x"}, headers=auth_headers)

        assert response.status_code == 404


class TestSuspensionAndDelete:
    """Test state transitions over HTTP."""

    def test_toggle_suspension(self, client, auth_headers, doctor_store):
        response = client.post("/api/doctors/doc1/suspension", headers=auth_headers)

        body = response.get_json()
        assert response.status_code == 200
        assert body["data"]["suspended"] is True
        assert body["message"] == "Doctor suspended"
        assert doctor_store.documents["doc1"]["suspended"] is True

    def test_toggle_failure(self, client, auth_headers, doctor_store):
        doctor_store.fail("update")

        response = client.post("/api/doctors/doc1/suspension", headers=auth_headers)

        assert response.status_code == 502
        assert doctor_store.documents["doc1"]["suspended"] is False

    def test_delete(self, client, auth_headers, doctor_store):
        response = client.delete("/api/doctors/doc2", headers=auth_headers)

        assert response.status_code == 200
        listing = client.get("/api/doctors", headers=auth_headers).get_json()["data"]
        assert "doc2" not in [d["id"] for d in listing["doctors"]]
        assert listing["totalCount"] == 2

    def test_delete_already_gone(self, client, auth_headers, doctor_store):
        doctor_store.fail("delete", ResourceNotFoundError("Doctor", "doc9"))

        response = client.delete("/api/doctors/doc9", headers=auth_headers)

        assert response.status_code == 200


class TestDashboardAndReports:
    def test_dashboard(self, client, auth_headers):
        response = client.get("/api/dashboard", headers=auth_headers)

        data = response.get_json()["data"]
        assert data["totalDoctors"] == 3
        assert data["topRatedDoctor"]["name"] == "Dr. Michael Chen"
        assert data["topSpecialties"][0]["name"] == "Cardiology"

    def test_report(self, client, auth_headers):
        response = client.get("/api/reports?city=Chicago&year=2024", headers=auth_headers)

        data = response.get_json()["data"]
        assert data["filteredCount"] == 1
        assert data["totalCount"] == 3
        assert data["monthlyRegistrations"][6] == {"name": "Jul", "value": 1}

    def test_report_invalid_year(self, client, auth_headers):
        response = client.get("/api/reports?year=twenty", headers=auth_headers)

        assert response.status_code == 400

    def test_export(self, client, auth_headers):
        response = client.get("/api/reports/export?availability=unavailable", headers=auth_headers)

        assert response.status_code == 200
        assert response.mimetype == "text/csv"
        assert response.headers["Content-Disposition"] == "attachment; filename=doctors_report.csv"
        lines = response.get_data(as_text=True).split("\n")
        assert lines[0] == "Name,Specialty,City,Rating,Reviews,Available,Suspended"
        assert lines[1] == '"Dr. Michael Chen","Dermatology","San Francisco",4.9,203,No,No'
