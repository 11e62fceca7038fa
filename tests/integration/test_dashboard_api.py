"""API tests for the dashboard, health and request-id handling."""


def test_dashboard_on_empty_desk(api_client):
    response = api_client.get("/api/v1/dashboard/stats")

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Dashboard stats retrieved successfully",
        "data": {
            "total_doctors": 0,
            "today_appointments": 0,
            "patients_in_queue": 0,
            "completed_today": 0,
        },
        "code": None,
    }


def test_dashboard_follows_mutations(api_client):
    api_client.post("/api/v1/queue", json={"patient_name": "P1"})
    doctor = api_client.post(
        "/api/v1/doctors",
        json={"name": "Dr. A", "specialization": "S", "location": "L", "phone": "p", "email": "e"},
    ).json()["data"]
    api_client.delete(f"/api/v1/doctors/{doctor['id']}")

    data = api_client.get("/api/v1/dashboard/stats").json()["data"]

    assert data["patients_in_queue"] == 1
    assert data["total_doctors"] == 0


def test_health_reports_counts(api_client):
    api_client.post("/api/v1/queue", json={"patient_name": "P1"})
    body = api_client.get("/health").json()
    assert body["status"] == "healthy"
    assert body["queue_entries"] == 1


def test_every_response_carries_request_id(api_client):
    response = api_client.get("/api/v1/doctors/1")

    assert response.status_code == 404
    assert response.headers["X-Request-ID"].startswith("req-")


def test_request_id_is_echoed(api_client):
    response = api_client.get("/api/v1/dashboard/stats", headers={"X-Request-ID": "req-frontdesk01"})
    assert response.headers["X-Request-ID"] == "req-frontdesk01"
