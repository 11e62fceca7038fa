"""Shared test fixtures."""
from datetime import date

import pytest
from fastapi.testclient import TestClient

from clinic_desk.front_desk import create_front_desk

TODAY = date(2025, 9, 1)


@pytest.fixture
def today() -> date:
    """The pinned 'today' every fixture desk uses."""
    return TODAY


@pytest.fixture
def desk():
    """Fresh, empty front desk per test."""
    return create_front_desk(today=lambda: TODAY)


@pytest.fixture
def doctors(desk):
    return desk.doctors


@pytest.fixture
def queue(desk):
    return desk.queue


@pytest.fixture
def appointments(desk):
    return desk.appointments


@pytest.fixture
def stats(desk):
    return desk.stats


@pytest.fixture
def make_doctor(doctors):
    """Factory creating a valid doctor; keyword arguments override fields."""
    def _create(**overrides):
        fields = {
            "name": "Dr. A",
            "specialization": "Cardiology",
            "location": "L1",
            "phone": "p",
            "email": "e",
        }
        fields.update(overrides)
        return doctors.create(**fields)
    return _create


@pytest.fixture
def api_client(desk):
    """TestClient whose requests all hit the fixture desk."""
    from clinic_desk.api.dependencies import get_front_desk
    from clinic_desk.api_server import app

    app.dependency_overrides[get_front_desk] = lambda: desk
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
