"""Configuration management for sessionsight.

Loads settings from a YAML configuration file with environment variable
overrides for the provider endpoint. Supports .env files.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/sessionsight.yaml")

DEFAULT_OLLAMA_BASE_URL = "http://localhost:11434"
DEFAULT_OLLAMA_MODEL = "qwen3-vl:32b"


class OllamaConfig(BaseModel):
    base_url: str = Field(default=DEFAULT_OLLAMA_BASE_URL, description="Chat service endpoint")
    model: str = Field(default=DEFAULT_OLLAMA_MODEL)
    timeout: float = Field(default=120.0, gt=0, description="Request timeout in seconds")
    max_frames: int = Field(default=30, ge=0, description="Frames sent per analysis")


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """Root configuration for the sessionsight system.

    Loads from YAML file and supports environment variable overrides.
    Reads .env files automatically.
    """

    model_config = {
        "env_prefix": "SESSIONSIGHT_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    ollama: OllamaConfig = Field(default_factory=OllamaConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML + .env + environment variables.

    Priority: YAML file > env vars (.env included) > defaults.
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    # Load .env file manually for non-prefixed vars
    _load_dotenv()

    yaml_data = {}
    if path.exists():
        with open(path) as f:
            yaml_data = yaml.safe_load(f) or {}
        logger.info("Loaded configuration from %s", path)
    else:
        logger.warning("Config file %s not found, using defaults + env vars", path)

    _apply_env_overrides(yaml_data)

    return Settings(**yaml_data)


def _load_dotenv() -> None:
    """Load .env file into os.environ if it exists."""
    env_path = Path(".env")
    if not env_path.exists():
        return
    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip()
                if not os.environ.get(key):
                    os.environ[key] = value


def _apply_env_overrides(yaml_data: dict) -> None:
    """Apply the conventional un-prefixed Ollama environment variables.

    Only fills fields the YAML file leaves unset.
    """
    host = os.environ.get("OLLAMA_HOST", "")
    model = os.environ.get("OLLAMA_MODEL", "")

    section = yaml_data.get("ollama") or {}

    if host and not section.get("base_url"):
        if "://" not in host:
            host = f"http://{host}"
        section["base_url"] = host

    if model and not section.get("model"):
        section["model"] = model

    if section:
        yaml_data["ollama"] = section
