"""Ollama vision provider implementation.

Sends sampled screenshots to an Ollama-compatible ``/api/chat``
endpoint in a single non-streaming request and parses the reply into a
SessionSummary.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

import httpx

from sessionsight.config.settings import (
    DEFAULT_OLLAMA_BASE_URL,
    DEFAULT_OLLAMA_MODEL,
    OllamaConfig,
)
from sessionsight.domain.models import ProviderCapabilities, SessionSummary
from sessionsight.providers.base import (
    NoUsableFramesError,
    NotConfiguredError,
    TransportError,
    VisionProvider,
)
from sessionsight.providers.parsing import parse_session_summary
from sessionsight.providers.prompts import build_prompt
from sessionsight.utils.imaging import FrameRef, encode_frames, sample_frames

logger = logging.getLogger(__name__)

OLLAMA_CAPABILITIES = ProviderCapabilities(
    vision_support=True,
    batch_analysis=True,
    streaming=False,
    max_input_tokens=128000,
    supported_image_formats=frozenset({"jpg", "jpeg", "png"}),
)


class OllamaProvider(VisionProvider):
    """Vision provider backed by an Ollama chat endpoint.

    The provider is configured as long as its base URL is non-empty.
    Ollama needs no API key.

    Example usage::

        provider = OllamaProvider(base_url="http://localhost:11434")
        summary = await provider.analyze_frames(["frames/0001.png", "frames/0002.png"])
    """

    def __init__(
        self,
        base_url: str = DEFAULT_OLLAMA_BASE_URL,
        model: str = DEFAULT_OLLAMA_MODEL,
        timeout: float = 120.0,
        max_frames: int = 30,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            base_url: Chat service endpoint, e.g. ``http://localhost:11434``.
            model: Vision model identifier, e.g. ``qwen3-vl:32b``.
            timeout: Request timeout in seconds for clients created here.
            max_frames: Upper bound on frames sent per analysis.
            client: Optional shared HTTP client. The caller keeps
                    ownership and must close it.

        Raises:
            ValueError: If max_frames is negative.
        """
        if max_frames < 0:
            raise ValueError(f"max_frames must be >= 0, got {max_frames}")
        super().__init__()
        self._base_url = base_url
        self._model = model
        self._timeout = timeout
        self._max_frames = max_frames
        self._client = client
        self._configured = bool(base_url.strip())

    @classmethod
    def from_config(
        cls, config: OllamaConfig, client: httpx.AsyncClient | None = None
    ) -> OllamaProvider:
        """Build a provider from the ``ollama`` settings section."""
        return cls(
            base_url=config.base_url,
            model=config.model,
            timeout=config.timeout,
            max_frames=config.max_frames,
            client=client,
        )

    @property
    def name(self) -> str:
        return "ollama"

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def model(self) -> str:
        return self._model

    async def analyze_frames(self, frames: Sequence[FrameRef]) -> SessionSummary:
        """Summarize a session from its ordered screenshot files."""
        if not self._configured:
            raise NotConfiguredError("Ollama provider is not configured", provider=self.name)

        # Snapshot so a concurrent configure() cannot split one request.
        base_url, model = self._base_url, self._model

        logger.info("Analyzing %d frames with %s", len(frames), model)
        sampled = sample_frames(frames, self._max_frames)
        logger.debug("Sampled %d of %d frames", len(sampled), len(frames))

        images = await encode_frames(sampled)
        if not images:
            raise NoUsableFramesError(
                "No usable frames to analyze", provider=self.name
            )

        raw = await self._call_chat(base_url, model, images)
        logger.debug("Ollama raw response: %s", raw[:200])
        return parse_session_summary(raw, provider=self.name)

    def configure(self, config: Mapping[str, Any]) -> None:
        """Update endpoint and model from a configuration mapping.

        Recognized keys are ``base_url`` and ``model``; only string values
        are applied. The provider counts as configured when the base URL
        is non-empty after trimming.
        """
        base_url = config.get("base_url")
        if isinstance(base_url, str):
            self._base_url = base_url
        model = config.get("model")
        if isinstance(model, str):
            self._model = model
        self._configured = bool(self._base_url.strip())

    def is_configured(self) -> bool:
        return self._configured

    def capabilities(self) -> ProviderCapabilities:
        return OLLAMA_CAPABILITIES

    async def health_check(self) -> bool:
        """Check if the Ollama server answers on ``/api/tags``."""
        if not self._configured:
            return False
        try:
            await self._request("GET", self._url(self._base_url, "/api/tags"))
            return True
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Health check failed: %s", e)
            return False

    async def _call_chat(self, base_url: str, model: str, images: list[str]) -> str:
        """Send one chat request and return the assistant's reply text."""
        payload = {
            "model": model,
            "stream": False,
            "messages": [
                {
                    "role": "user",
                    "content": build_prompt(),
                    "images": images,
                },
            ],
        }

        try:
            resp = await self._request("POST", self._url(base_url, "/api/chat"), json=payload)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(
                f"Ollama chat request failed: {e}", provider=self.name
            ) from e

        try:
            content = resp.json()["message"]["content"]
        except (ValueError, KeyError, TypeError) as e:
            raise TransportError(
                f"Unexpected Ollama response body: {e}",
                provider=self.name,
                raw_response=resp.text,
            ) from e
        if not isinstance(content, str):
            raise TransportError(
                "Unexpected Ollama response body: message.content is not a string",
                provider=self.name,
                raw_response=resp.text,
            )
        return content

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send a request and raise on non-success status."""
        if self._client is not None:
            resp = await self._client.request(method, url, **kwargs)
            resp.raise_for_status()
            return resp
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            resp = await client.request(method, url, **kwargs)
            resp.raise_for_status()
            return resp

    @staticmethod
    def _url(base_url: str, path: str) -> str:
        return f"{base_url.rstrip('/')}{path}"
