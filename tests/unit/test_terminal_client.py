"""Tests for terminal client command dispatch."""
from unittest.mock import Mock

import pytest

from clinic_desk.http_client import ClinicDeskClient
from terminal_client import run_command


@pytest.fixture
def client():
    return Mock(spec=ClinicDeskClient)


def test_quit_stops_loop(client):
    assert run_command(client, "/quit") is False


def test_walkin_splits_name_and_phone(client):
    client.enqueue.return_value = {"patient_name": "John Doe", "queue_number": 4}

    assert run_command(client, "/walkin John Doe | +1 555-0101") is True

    client.enqueue.assert_called_once_with("John Doe", "+1 555-0101")


def test_walkin_without_phone(client):
    client.enqueue.return_value = {"patient_name": "Jane", "queue_number": 1}
    run_command(client, "/walkin Jane")
    client.enqueue.assert_called_once_with("Jane", None)


def test_book_parses_slot_and_patient(client):
    client.book.return_value = {"id": 3, "doctor_name": "Dr. A"}

    run_command(client, "/book 2 2025-09-01 09:00 AM | Alice Johnson")

    client.book.assert_called_once_with("Alice Johnson", 2, "2025-09-01", "09:00 AM")


def test_move_and_cancel(client):
    client.reschedule.return_value = {"id": 3, "date": "2025-09-02", "time_slot": "02:00 PM"}

    run_command(client, "/move 3 2025-09-02 02:00 PM")
    run_command(client, "/cancel 3")

    client.reschedule.assert_called_once_with(3, "2025-09-02", "02:00 PM")
    client.cancel.assert_called_once_with(3)


def test_bad_arguments_raise_for_main_loop(client):
    with pytest.raises(ValueError):
        run_command(client, "/done abc")


def test_unknown_command_keeps_running(client, capsys):
    assert run_command(client, "/nope") is True
    assert "Unknown command" in capsys.readouterr().out
