"""API schemas package."""

from .requests import ExportRequest
from .responses import (
    ErrorResponse,
    HealthResponse,
    MergeResponse,
    RosterResponse,
    TopicResponse,
)

__all__ = [
    # Requests
    "ExportRequest",
    # Responses
    "ErrorResponse",
    "HealthResponse",
    "MergeResponse",
    "RosterResponse",
    "TopicResponse",
]
