"""Shared test fixtures for the sessionsight test suite.

Provides frame files on disk, model replies and a mock chat service
built on httpx.MockTransport.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

# Smallest valid PNG signature + IHDR prefix; content only needs to be bytes.
PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"


# ---------------------------------------------------------------------------
# Frame Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def frame_files(tmp_path: Path) -> list[Path]:
    """Three readable screenshot files with distinct contents."""
    paths = []
    for i in range(3):
        path = tmp_path / f"frame_{i:04d}.png"
        path.write_bytes(PNG_BYTES + bytes([i]))
        paths.append(path)
    return paths


# ---------------------------------------------------------------------------
# Reply Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def summary_payload() -> dict:
    """A complete, schema-valid session summary as the model would send it."""
    return {
        "title": "Refactoring the parser",
        "summary": "The user edited Python code in an editor and ran tests in a terminal.",
        "tags": [
            {"category": "work", "confidence": 0.9, "keywords": ["python", "pytest"]},
        ],
        "key_moments": [
            {"time": "00:30", "description": "Opened the editor", "importance": 2},
            {"time": "05:10", "description": "Tests passed", "importance": 4},
        ],
        "productivity_score": 80,
        "focus_score": 75,
        "start_time": "2025-01-01T12:00:00Z",
        "end_time": "2025-01-01T12:30:00Z",
    }


@pytest.fixture
def summary_reply(summary_payload: dict) -> str:
    return json.dumps(summary_payload)


# ---------------------------------------------------------------------------
# Chat Service Fixtures
# ---------------------------------------------------------------------------


class ChatServiceStub:
    """Records requests and answers them with a fixed response."""

    def __init__(self, status_code: int = 200, body: object | None = None) -> None:
        self.status_code = status_code
        self.body = body
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.body, (str, bytes)):
            return httpx.Response(self.status_code, content=self.body)
        return httpx.Response(self.status_code, json=self.body)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture
def chat_service(summary_reply: str) -> Callable[..., ChatServiceStub]:
    """Factory for chat service stubs. Defaults to a successful reply."""

    def make(status_code: int = 200, body: object | None = None) -> ChatServiceStub:
        if body is None:
            body = {"model": "test-model", "message": {"role": "assistant", "content": summary_reply}}
        return ChatServiceStub(status_code=status_code, body=body)

    return make
