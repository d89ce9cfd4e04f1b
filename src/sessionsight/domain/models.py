"""Core domain models for the sessionsight system.

These models represent the data flowing out of a vision provider: the
structured summary of a captured session and the static capability
record each provider advertises.
"""

from __future__ import annotations

import enum
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class ActivityCategory(str, enum.Enum):
    """Coarse activity classes a session can be tagged with."""

    WORK = "work"
    COMMUNICATION = "communication"
    LEARNING = "learning"
    PERSONAL = "personal"
    IDLE = "idle"
    OTHER = "other"


# ---------------------------------------------------------------------------
# Session Summary Models
# ---------------------------------------------------------------------------


class ActivityTag(BaseModel):
    """A category label with the model's confidence and supporting keywords."""

    model_config = ConfigDict(frozen=True)

    category: ActivityCategory = Field(description="Activity class")
    confidence: float = Field(description="Confidence in the label (0-1)")
    keywords: list[str] = Field(
        default_factory=list, description="Distinct keywords supporting the label"
    )

    @field_validator("confidence")
    @classmethod
    def _clamp_confidence(cls, value: float) -> float:
        return max(0.0, min(1.0, value))

    @field_validator("keywords")
    @classmethod
    def _dedupe_keywords(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(value))


class KeyMoment(BaseModel):
    """A notable point in the session, located by a free-form time marker."""

    model_config = ConfigDict(frozen=True)

    time: str = Field(description="Relative time marker, e.g. 'MM:SS'")
    description: str = Field(description="What happened at this moment")
    importance: int = Field(description="Relative importance of the moment")


class SessionSummary(BaseModel):
    """Structured summary of a user session derived from its screenshots.

    Produced fresh on every analysis call. ``start_time`` never exceeds
    ``end_time`` once a summary leaves the parser.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(description="Short session title")
    summary: str = Field(description="Short paragraph describing the session")
    tags: list[ActivityTag] = Field(description="Activity tags, most relevant first")
    key_moments: list[KeyMoment] = Field(description="Notable moments in order")
    productivity_score: int = Field(description="Productivity rating")
    focus_score: int = Field(description="Focus rating")
    start_time: datetime = Field(description="Session start (UTC)")
    end_time: datetime = Field(description="Session end (UTC)")

    @field_validator("start_time", "end_time")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # Mixed naive/aware values cannot be compared.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


# ---------------------------------------------------------------------------
# Provider Metadata
# ---------------------------------------------------------------------------


class ProviderCapabilities(BaseModel):
    """Static description of what a vision provider supports.

    Queried by callers to decide whether a provider is suitable before
    invoking analysis.
    """

    model_config = ConfigDict(frozen=True)

    vision_support: bool = Field(description="Accepts image input")
    batch_analysis: bool = Field(description="Accepts several images in one request")
    streaming: bool = Field(description="Supports streamed responses")
    max_input_tokens: int = Field(gt=0, description="Input token budget")
    supported_image_formats: frozenset[str] = Field(
        description="Lower-case file extensions the provider accepts"
    )
