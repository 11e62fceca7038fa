"""API package initialization."""
from clinic_desk.api.models import ApiResponse

__all__ = ["ApiResponse"]
