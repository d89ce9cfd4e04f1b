"""Configuration management for sessionsight.

Loads and validates YAML-based configuration with Pydantic models.
Supports environment variable overrides for the provider endpoint.
"""

from sessionsight.config.settings import Settings, load_settings

__all__ = ["Settings", "load_settings"]
