"""Configuration for the clinic front-desk service.

Environment variables (or a local .env file) override the defaults below.
Business constants that are not deployment-specific live here as plain values.
"""
import os
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: List[str]) -> List[str]:
    value = os.getenv(name)
    if not value:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


# Slots given to a doctor created without any
DEFAULT_AVAILABLE_SLOTS = ["09:00 AM", "10:00 AM", "02:00 PM"]

# API server
API_HOST = os.getenv("CLINIC_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("CLINIC_API_PORT", "8000"))
API_BASE_URL = os.getenv("CLINIC_API_BASE_URL", f"http://localhost:{API_PORT}")
CORS_ORIGINS = _env_list("CLINIC_CORS_ORIGINS", ["http://localhost:3000"])

# Load the demo doctors/queue/appointments into a fresh store on startup
SEED_DEMO_DATA = _env_bool("CLINIC_SEED_DEMO_DATA", True)

LOG_LEVEL = os.getenv("CLINIC_LOG_LEVEL", "INFO")

# HTTP client
HTTP_TIMEOUT_SECONDS = 15
HTTP_MAX_RETRIES = 3
