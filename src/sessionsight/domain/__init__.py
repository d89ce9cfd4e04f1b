"""Domain models for sessionsight.

Pure data structures with no I/O: the session summary produced by
providers and the capability record they advertise.
"""

from sessionsight.domain.models import (
    ActivityCategory,
    ActivityTag,
    KeyMoment,
    ProviderCapabilities,
    SessionSummary,
)

__all__ = [
    "ActivityCategory",
    "ActivityTag",
    "KeyMoment",
    "ProviderCapabilities",
    "SessionSummary",
]
