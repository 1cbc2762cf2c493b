"""
Response schemas for the API.

Every list response carries its count so the client can report
"parsed N rows" without counting.
"""

from pydantic import BaseModel, Field

from roster_merge.models import MergedRow, RosterEntry, TopicEntry


class ErrorResponse(BaseModel):
    """Body of every request-level failure."""
    error: str = Field(..., description="Human-readable message")
    kind: str = Field(..., description="missing_input, malformed_input, unsupported_format, zero_yield or decoder_failure")


class RosterResponse(BaseModel):
    """Parsed roster."""
    rows: list[RosterEntry]
    count: int


class TopicResponse(BaseModel):
    """Parsed, deduplicated topic table."""
    rows: list[TopicEntry]
    count: int


class MergeResponse(BaseModel):
    """One merged row per roster entry, in roster order."""
    rows: list[MergedRow]
    count: int
    matched_count: int = Field(..., description="Rows with a matched question")


class HealthResponse(BaseModel):
    """Service liveness."""
    status: str
    version: str
