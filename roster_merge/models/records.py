"""Value records flowing through one merge request.

Stage Flow:
1. Roster Extractor      → list[RosterEntry]
2. Topic Table Builder   → list[TopicEntry]
3. Transcript Scanner    → dict[name, MatchResult] (via TranscriptLine)
4. Row Assembler         → list[MergedRow]

Nothing here outlives a single request.
"""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RosterEntry(BaseModel):
    """One person from the roster PDF."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Person name, unique within a run")
    title: str = Field(default="", description="Job title / background, may be empty")
    seniority: str = Field(default="", description="Tenure-bucket label, may be empty")

    @field_validator("name", "title", "seniority", mode="before")
    @classmethod
    def _strip(cls, v):
        return v.strip() if isinstance(v, str) else v


class TopicEntry(BaseModel):
    """A date → topic pair from the topic table."""

    model_config = ConfigDict(frozen=True)

    date: str = Field(..., pattern=r"^\d{4}/\d{2}/\d{2}$", description="YYYY/MM/DD")
    topic: str = Field(default="", description="Topic discussed on that date")


@dataclass
class TranscriptLine:
    """Speaker/content pair extracted from one chat line."""

    speaker: str
    content: str
    date: str = ""


class MatchResult(BaseModel):
    """First question attributed to a roster name."""

    model_config = ConfigDict(frozen=True)

    question: str = Field(..., description="Message content containing the question")
    date: str = Field(default="", description="YYYY/MM/DD the question was asked, if known")
    score: float = Field(..., ge=0.0, le=1.0, description="Speaker-to-name similarity")


class MergedRow(BaseModel):
    """Final output row; one per roster entry, editable by a reviewer.

    Serialized by alias (``matchScore``) for API clients; either name is
    accepted on input.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    title: str = ""
    seniority: str = ""
    question: str = ""
    date: str = ""
    topic: str = ""
    match_score: float = Field(default=0.0, ge=0.0, le=1.0, alias="matchScore")
