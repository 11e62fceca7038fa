"""Unit tests for environment parsing helpers."""
import pytest

from clinic_desk import config


@pytest.mark.parametrize("raw, expected", [("true", True), ("1", True), (" Yes ", True), ("false", False), ("0", False)])
def test_env_bool_parses_values(monkeypatch, raw, expected):
    monkeypatch.setenv("CLINIC_TEST_FLAG", raw)
    assert config._env_bool("CLINIC_TEST_FLAG", not expected) is expected


def test_env_bool_falls_back_to_default(monkeypatch):
    monkeypatch.delenv("CLINIC_TEST_FLAG", raising=False)
    assert config._env_bool("CLINIC_TEST_FLAG", True) is True


def test_env_list_splits_and_strips(monkeypatch):
    monkeypatch.setenv("CLINIC_TEST_LIST", "http://a, http://b ,,")
    assert config._env_list("CLINIC_TEST_LIST", []) == ["http://a", "http://b"]


def test_env_list_default_is_copied(monkeypatch):
    monkeypatch.delenv("CLINIC_TEST_LIST", raising=False)
    default = ["x"]
    result = config._env_list("CLINIC_TEST_LIST", default)
    result.append("y")
    assert default == ["x"]


def test_default_slots():
    assert config.DEFAULT_AVAILABLE_SLOTS == ["09:00 AM", "10:00 AM", "02:00 PM"]
