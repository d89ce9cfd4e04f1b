"""Prompt templates sent to vision providers.

The prompt is static: it never depends on frame content, so every reply
can be parsed against the same schema.
"""

from __future__ import annotations

SESSION_SUMMARY_PROMPT = """
You are given a chronological series of screenshots captured from one user's computer session.

Analyze the screenshots, identify what the user was doing, and describe the session.

Respond ONLY with valid JSON in the following format (no markdown, no code fences, no explanation):
{
    "title": "at most 10 words",
    "summary": "50 to 100 words",
    "tags": [
        {
            "category": "work" | "communication" | "learning" | "personal" | "idle" | "other",
            "confidence": 0.0 to 1.0,
            "keywords": ["..."]
        }
    ],
    "key_moments": [
        {"time": "MM:SS", "description": "...", "importance": 1 to 5}
    ],
    "productivity_score": 0 to 100,
    "focus_score": 0 to 100
}

Include one to three tags and up to five key moments. Scores and importance are integers.
Return only the JSON object.
"""


def build_prompt() -> str:
    """Return the session summary instruction text."""
    return SESSION_SUMMARY_PROMPT.strip()
