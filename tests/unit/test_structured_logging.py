"""Tests for structured logging and request ids."""
import json
import logging
from unittest.mock import patch

import structlog
from fastapi import FastAPI
from fastapi.testclient import TestClient

from clinic_desk.logging_config import (
    RequestIDMiddleware,
    generate_request_id,
    get_logger,
    setup_structured_logging,
)


class TestStructuredLogging:
    """Test structured logging with request IDs."""

    def test_setup_configures_structlog(self):
        """Should configure structlog processors."""
        setup_structured_logging(log_level="INFO")
        logger = get_logger(__name__)

        assert hasattr(logger, "info")
        assert hasattr(logger, "warning")
        assert hasattr(logger, "error")

    def test_logger_emits_json(self, capsys):
        """Events should render as one JSON object per line."""
        structlog.reset_defaults()
        setup_structured_logging(log_level="INFO")
        # basicConfig is a no-op once handlers exist; point one at captured stdout
        root = logging.getLogger()
        handler = logging.StreamHandler()
        previous_level = root.level
        root.addHandler(handler)
        root.setLevel(logging.INFO)
        try:
            get_logger("clinic_desk.test").info("queue_entry_added", queue_number=3)
        finally:
            root.removeHandler(handler)
            root.setLevel(previous_level)

        line = capsys.readouterr().err.strip().splitlines()[-1]
        event = json.loads(line)
        assert event["event"] == "queue_entry_added"
        assert event["queue_number"] == 3
        assert event["level"] == "info"

    def test_generate_request_id_format(self):
        """Should generate request IDs with correct format."""
        request_id = generate_request_id()

        assert request_id.startswith("req-")
        assert len(request_id) == 16  # "req-" (4) + 12 hex chars
        assert request_id != generate_request_id()


class TestRequestIDMiddleware:
    """X-Request-ID handling."""

    def make_app(self):
        app = FastAPI()
        app.add_middleware(RequestIDMiddleware)

        @app.get("/test")
        def test_route():
            return structlog.contextvars.get_contextvars()

        return app

    def test_adds_header(self):
        with TestClient(self.make_app()) as client:
            response = client.get("/test")

        request_id = response.headers["X-Request-ID"]
        assert request_id.startswith("req-")
        assert len(request_id) == 16

    def test_reuses_incoming_header(self):
        with TestClient(self.make_app()) as client:
            response = client.get("/test", headers={"X-Request-ID": "req-fromcaller"})

        assert response.headers["X-Request-ID"] == "req-fromcaller"

    def test_binds_request_context_for_handlers(self):
        with TestClient(self.make_app()) as client:
            response = client.get("/test", headers={"X-Request-ID": "req-abc"})

        assert response.json() == {"request_id": "req-abc", "method": "GET", "path": "/test"}


class TestUnexpectedErrors:
    """Unhandled exceptions inside a request."""

    def make_app(self):
        app = FastAPI()
        app.add_middleware(RequestIDMiddleware)

        @app.get("/boom")
        def boom():
            raise RuntimeError("store exploded")

        return app

    def test_returns_500_envelope_with_request_id(self):
        with TestClient(self.make_app()) as client:
            response = client.get("/boom", headers={"X-Request-ID": "req-failing01"})

        assert response.status_code == 500
        assert response.headers["X-Request-ID"] == "req-failing01"
        assert response.json()["success"] is False
        assert response.json()["code"] == "INTERNAL_ERROR"

    def test_error_is_logged_with_request_context(self):
        seen = {}

        def record(event, **kwargs):
            seen.update(structlog.contextvars.get_contextvars(), event=event)

        with patch("clinic_desk.logging_config.logger") as mock_logger:
            mock_logger.error.side_effect = record
            with TestClient(self.make_app()) as client:
                client.get("/boom", headers={"X-Request-ID": "req-failing02"})

        assert seen["event"] == "unexpected_error"
        assert seen["request_id"] == "req-failing02"
        assert seen["path"] == "/boom"
