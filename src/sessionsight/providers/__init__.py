"""Vision provider module for sessionsight.

Provides a provider-agnostic interface for sending session screenshots
to vision LLMs and receiving structured session summaries.

Public API:
    VisionProvider -- Abstract base class
    ProviderError -- Base class of provider failures
    OllamaProvider -- Ollama /api/chat implementation
"""

from sessionsight.providers.base import (
    MalformedResponseError,
    NoUsableFramesError,
    NotConfiguredError,
    ProviderError,
    SchemaMismatchError,
    TransportError,
    VisionProvider,
)

__all__ = [
    "VisionProvider",
    "ProviderError",
    "NotConfiguredError",
    "NoUsableFramesError",
    "TransportError",
    "MalformedResponseError",
    "SchemaMismatchError",
    "OllamaProvider",
]


def __getattr__(name: str) -> type:
    """Lazy import for concrete implementations that require external deps."""
    if name == "OllamaProvider":
        from sessionsight.providers.ollama import OllamaProvider
        return OllamaProvider
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
