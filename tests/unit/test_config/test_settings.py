"""Tests for configuration loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from sessionsight.config.settings import (
    LoggingConfig,
    OllamaConfig,
    Settings,
    load_settings,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate tests from the developer's environment and .env file."""
    for var in (
        "OLLAMA_HOST",
        "OLLAMA_MODEL",
        "SESSIONSIGHT_OLLAMA__BASE_URL",
        "SESSIONSIGHT_OLLAMA__MODEL",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


class TestSettings:
    def test_default_settings(self) -> None:
        settings = Settings()
        assert settings.ollama.base_url == "http://localhost:11434"
        assert settings.ollama.model == "qwen3-vl:32b"
        assert settings.ollama.max_frames == 30
        assert settings.logging.level == "INFO"

    def test_ollama_config_validation(self) -> None:
        with pytest.raises(ValidationError):
            OllamaConfig(timeout=0)
        with pytest.raises(ValidationError):
            OllamaConfig(max_frames=-1)

    def test_logging_config_defaults(self) -> None:
        config = LoggingConfig()
        assert config.file is None

    def test_prefixed_env_vars(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SESSIONSIGHT_OLLAMA__MODEL", "llava:13b")
        assert Settings().ollama.model == "llava:13b"


class TestLoadSettings:
    def test_missing_file(self, tmp_path: Path) -> None:
        settings = load_settings(tmp_path / "nonexistent.yaml")
        assert settings.ollama.base_url == "http://localhost:11434"

    def test_yaml_file(self, tmp_path: Path) -> None:
        path = tmp_path / "sessionsight.yaml"
        path.write_text(
            "ollama:\n"
            "  base_url: http://gpu-box:11434\n"
            "  model: qwen2.5vl:7b\n"
            "  max_frames: 12\n"
            "logging:\n"
            "  level: DEBUG\n"
        )
        settings = load_settings(path)
        assert settings.ollama.base_url == "http://gpu-box:11434"
        assert settings.ollama.model == "qwen2.5vl:7b"
        assert settings.ollama.max_frames == 12
        assert settings.logging.level == "DEBUG"

    def test_empty_yaml_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_settings(path).ollama.model == "qwen3-vl:32b"

    def test_ollama_host_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OLLAMA_HOST", "10.0.0.5:11434")
        monkeypatch.setenv("OLLAMA_MODEL", "llava")
        settings = load_settings(tmp_path / "nonexistent.yaml")
        assert settings.ollama.base_url == "http://10.0.0.5:11434"
        assert settings.ollama.model == "llava"

    def test_yaml_wins_over_ollama_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OLLAMA_HOST", "http://from-env:11434")
        path = tmp_path / "sessionsight.yaml"
        path.write_text("ollama:\n  base_url: http://from-yaml:11434\n")
        assert load_settings(path).ollama.base_url == "http://from-yaml:11434"

    def test_dotenv_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        # Registered so the value written by the loader is undone afterwards.
        monkeypatch.setenv("OLLAMA_HOST", "")
        (tmp_path / ".env").write_text("# local overrides\nOLLAMA_HOST=http://dotenv:11434\n")
        settings = load_settings(tmp_path / "nonexistent.yaml")
        assert settings.ollama.base_url == "http://dotenv:11434"
