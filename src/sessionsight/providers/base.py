"""Abstract base class for vision providers.

All provider implementations must conform to this interface, enabling
the calling system to select a provider by name and configuration
without knowing which concrete implementation it gets.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from sessionsight.domain.models import ProviderCapabilities, SessionSummary
from sessionsight.utils.imaging import FrameRef

logger = logging.getLogger(__name__)


class VisionProvider(ABC):
    """Abstract interface for vision-capable summarization providers.

    Optional context handles (a persistence layer and the current
    session identifier) may be attached once during wiring. The analysis
    pipeline never reads or mutates them.
    """

    def __init__(self) -> None:
        self._database: Any | None = None
        self._session_id: int | None = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier used to select this provider."""
        ...

    @abstractmethod
    async def analyze_frames(self, frames: Sequence[FrameRef]) -> SessionSummary:
        """Summarize a session from its ordered screenshot files.

        Raises:
            NotConfiguredError: If the provider has no endpoint.
            NoUsableFramesError: If none of the frames could be encoded.
            TransportError: If the remote call fails.
            MalformedResponseError: If the reply is not JSON.
            SchemaMismatchError: If the reply does not fit SessionSummary.
        """
        ...

    @abstractmethod
    def configure(self, config: Mapping[str, Any]) -> None:
        """Apply runtime configuration. Unknown keys are ignored."""
        ...

    @abstractmethod
    def is_configured(self) -> bool:
        ...

    @abstractmethod
    def capabilities(self) -> ProviderCapabilities:
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the provider's service is reachable."""
        ...

    @property
    def database(self) -> Any | None:
        return self._database

    @property
    def session_id(self) -> int | None:
        return self._session_id

    def set_database(self, database: Any) -> None:
        self._database = database

    def set_session_id(self, session_id: int) -> None:
        self._session_id = session_id


class ProviderError(Exception):
    """Raised when a provider cannot produce a session summary."""

    def __init__(self, message: str, provider: str = "", raw_response: str = "") -> None:
        super().__init__(message)
        self.provider = provider
        self.raw_response = raw_response


class NotConfiguredError(ProviderError):
    """Analysis was requested before an endpoint was configured."""


class NoUsableFramesError(ProviderError):
    """No frame in the sampled batch could be encoded."""


class TransportError(ProviderError):
    """The remote service was unreachable or answered with a failure."""


class MalformedResponseError(ProviderError):
    """The model's reply is not valid JSON."""


class SchemaMismatchError(ProviderError):
    """The model's JSON does not fit the session summary schema."""
