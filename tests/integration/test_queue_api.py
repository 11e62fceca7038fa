"""API tests for the walk-in queue endpoints."""


def enqueue(api_client, name, phone=None):
    response = api_client.post("/api/v1/queue", json={"patient_name": name, "phone": phone})
    assert response.status_code == 201
    return response.json()["data"]


def test_enqueue_and_list_current(api_client):
    enqueue(api_client, "John Doe", "+1 555-0101")
    enqueue(api_client, "Jane Smith")

    body = api_client.get("/api/v1/queue").json()

    assert body["success"] is True
    assert [e["queue_number"] for e in body["data"]["queue"]] == [1, 2]
    assert body["data"]["queue"][0]["status"] == "waiting"
    assert body["data"]["stats"] == {"waiting": 2, "with-doctor": 0, "completed": 0}


def test_status_moves_forward(api_client):
    entry = enqueue(api_client, "John Doe")

    response = api_client.patch(f"/api/v1/queue/{entry['id']}/status", json={"status": "with-doctor"})

    assert response.status_code == 200
    assert response.json()["message"] == "Queue status updated successfully"
    assert response.json()["data"]["status"] == "with-doctor"


def test_skipping_a_step_is_409(api_client):
    entry = enqueue(api_client, "John Doe")

    response = api_client.patch(f"/api/v1/queue/{entry['id']}/status", json={"status": "completed"})

    assert response.status_code == 409
    assert response.json()["code"] == "INVALID_TRANSITION"


def test_unknown_status_is_409(api_client):
    entry = enqueue(api_client, "John Doe")
    response = api_client.patch(f"/api/v1/queue/{entry['id']}/status", json={"status": "gone"})
    assert response.status_code == 409


def test_remove_then_numbering_continues(api_client):
    first = enqueue(api_client, "P1")
    enqueue(api_client, "P2")

    response = api_client.delete(f"/api/v1/queue/{first['id']}")
    assert response.status_code == 200
    assert response.json()["data"] is None

    assert enqueue(api_client, "P3")["queue_number"] == 3
    assert api_client.delete(f"/api/v1/queue/{first['id']}").status_code == 404


def test_blank_name_is_400(api_client):
    response = api_client.post("/api/v1/queue", json={"patient_name": ""})
    assert response.status_code == 400


def test_queue_stats(api_client):
    enqueue(api_client, "P1")
    data = api_client.get("/api/v1/queue/stats").json()["data"]
    assert data == {"waiting": 1, "with-doctor": 0, "completed": 0, "total": 1}
