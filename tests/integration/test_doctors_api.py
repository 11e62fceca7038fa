"""API tests for the doctor endpoints."""
DOCTOR = {
    "name": "Dr. John Smith",
    "specialization": "Cardiology",
    "location": "Floor 1, Room 101",
    "phone": "+1 234-567-8900",
    "email": "john.smith@clinic.com",
}


def create(api_client, **overrides):
    response = api_client.post("/api/v1/doctors", json=dict(DOCTOR, **overrides))
    assert response.status_code == 201
    return response.json()["data"]


def test_create_returns_envelope(api_client):
    response = api_client.post("/api/v1/doctors", json=DOCTOR)

    body = response.json()
    assert response.status_code == 201
    assert body["success"] is True
    assert body["message"] == "Doctor created successfully"
    assert body["data"]["id"] == 1
    assert body["data"]["is_active"] is True
    assert body["data"]["available_slots"] == ["09:00 AM", "10:00 AM", "02:00 PM"]
    assert body["code"] is None


def test_create_with_blank_name_is_400(api_client):
    response = api_client.post("/api/v1/doctors", json=dict(DOCTOR, name="  "))

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_create_missing_field_is_422(api_client):
    payload = {k: v for k, v in DOCTOR.items() if k != "email"}
    response = api_client.post("/api/v1/doctors", json=payload)

    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_list_with_filters(api_client):
    create(api_client)
    create(api_client, name="Dr. Sarah Johnson", specialization="Dermatology", location="Floor 2")

    response = api_client.get("/api/v1/doctors", params={"specialization": "DERMATOLOGY"})
    assert [d["name"] for d in response.json()["data"]] == ["Dr. Sarah Johnson"]

    response = api_client.get("/api/v1/doctors", params={"search": "john"})
    assert len(response.json()["data"]) == 2


def test_get_unknown_is_404(api_client):
    response = api_client.get("/api/v1/doctors/99")

    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"
    assert response.json()["message"] == "Doctor 99 not found"


def test_slots(api_client):
    doctor = create(api_client, available_slots=["09:30 AM", "11:00 AM"])
    response = api_client.get(f"/api/v1/doctors/{doctor['id']}/slots")
    assert response.json()["data"] == ["09:30 AM", "11:00 AM"]


def test_patch_updates_given_fields(api_client):
    doctor = create(api_client)

    response = api_client.patch(f"/api/v1/doctors/{doctor['id']}", json={"location": "Annex"})

    assert response.status_code == 200
    assert response.json()["data"]["location"] == "Annex"
    assert response.json()["data"]["name"] == DOCTOR["name"]


def test_patch_rejects_is_active(api_client):
    doctor = create(api_client)
    response = api_client.patch(f"/api/v1/doctors/{doctor['id']}", json={"is_active": True})
    assert response.status_code == 422


def test_delete_is_soft(api_client):
    doctor = create(api_client)

    response = api_client.delete(f"/api/v1/doctors/{doctor['id']}")

    assert response.status_code == 200
    assert response.json()["data"]["is_active"] is False
    listed = api_client.get("/api/v1/doctors").json()["data"]
    assert [d["id"] for d in listed] == [doctor["id"]]
