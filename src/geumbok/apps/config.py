"""Application-level configuration.

Settings are read from ``~/.config/geumbok/config.json`` into nested
frozen dataclasses and passed explicitly to whatever needs them::

    {
      "api": {"base_url": "http://localhost:3000/api/v1", "timeout": 10},
      "speech": {"enabled": true, "rate": 0.8},
      "profile": {"name": "김복순", "age": 72, "gender": "F"},
      "chat": {"model": "ollama/llama3.2", "prompt_file": "chat_prompt.md"},
      "corrections": {"가게부": "가계부"}
    }
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from geumbok.chat import ChatConfig
from geumbok.core.constants import (
    DEFAULT_API_BASE_URL,
    DEFAULT_API_TIMEOUT,
    DEFAULT_API_TOKEN_ENV,
    DEFAULT_CHAT_MAX_TOKENS,
    DEFAULT_CONFIG_DIR,
    DEFAULT_CONFIG_DIR_ENV,
    DEFAULT_CONFIG_FILE,
    DEFAULT_LANGUAGE,
    DEFAULT_SPEECH_PITCH,
    DEFAULT_SPEECH_RATE,
)
from geumbok.speech import SpeechOptions

_log = logging.getLogger("geumbok")


# ---------------------------------------------------------------------------
# Nested config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ApiConfig:
    """Backend connection settings."""

    base_url: str = DEFAULT_API_BASE_URL
    timeout: float = DEFAULT_API_TIMEOUT
    token: str | None = None


@dataclass(frozen=True, slots=True)
class SpeechConfig:
    """Spoken-response settings."""

    enabled: bool = True
    language: str = DEFAULT_LANGUAGE
    pitch: float = DEFAULT_SPEECH_PITCH
    rate: float = DEFAULT_SPEECH_RATE

    def options(self) -> SpeechOptions:
        return SpeechOptions(language=self.language, pitch=self.pitch, rate=self.rate)


@dataclass(frozen=True, slots=True)
class ProfileConfig:
    """Who the assistant is talking to."""

    name: str | None = None
    age: int | None = None
    gender: str | None = None


@dataclass(frozen=True, slots=True)
class GeumbokConfig:
    """Top-level configuration loaded from ~/.config/geumbok/config.json."""

    api: ApiConfig = field(default_factory=ApiConfig)
    speech: SpeechConfig = field(default_factory=SpeechConfig)
    profile: ProfileConfig = field(default_factory=ProfileConfig)
    chat: ChatConfig = field(default_factory=ChatConfig)
    corrections: dict[str, str] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Config loading helpers
# ---------------------------------------------------------------------------


def _config_dir() -> Path:
    return Path(
        os.environ.get(DEFAULT_CONFIG_DIR_ENV, "") or DEFAULT_CONFIG_DIR,
    ).expanduser()


def _resolve_config_path(config_dir: Path, path_str: str) -> Path:
    """Resolve a path relative to *config_dir*. Absolute paths used as-is."""
    p = Path(path_str).expanduser()
    if p.is_absolute():
        return p
    return config_dir / p


def _resolve_prompt(
    config_dir: Path, section: dict[str, Any], section_name: str,
) -> str | None:
    """Resolve ``prompt`` / ``prompt_file`` from a config section."""
    prompt = section.get("prompt")
    prompt_file = section.get("prompt_file")
    if prompt and prompt_file:
        _log.debug(
            "Both 'prompt' and 'prompt_file' in %s; using 'prompt_file'",
            section_name,
        )
    if prompt_file:
        path = _resolve_config_path(config_dir, str(prompt_file))
        return path.read_text(encoding="utf-8").strip()
    if prompt:
        return str(prompt)
    return None


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    raw = data.get(name, {})
    return raw if isinstance(raw, dict) else {}


def _optional_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        _log.warning("Ignoring non-numeric profile age %r", value)
        return None


def _default_config() -> GeumbokConfig:
    token = os.environ.get(DEFAULT_API_TOKEN_ENV) or None
    return GeumbokConfig(api=ApiConfig(token=token))


# ---------------------------------------------------------------------------
# Public loader
# ---------------------------------------------------------------------------


def load_config(path: str | None = None) -> GeumbokConfig:
    """Load geumbok configuration from a JSON file.

    Reads ``~/.config/geumbok/config.json`` (or *path*). Supports the
    ``GEUMBOK_CONFIG_DIR`` environment variable to override the config
    directory, and ``GEUMBOK_API_TOKEN`` to supply the API token when the
    file has none. Relative ``prompt_file`` paths are resolved against the
    config directory.

    Returns a default config if the file does not exist.
    """
    config_dir = _config_dir()
    config_path = Path(path).expanduser() if path else config_dir / DEFAULT_CONFIG_FILE

    if not config_path.exists():
        return _default_config()

    with open(config_path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        _log.warning("Config %s is not a JSON object; using defaults", config_path)
        return _default_config()

    # -- api ---------------------------------------------------------------
    api_raw = _section(data, "api")
    api = ApiConfig(
        base_url=str(api_raw.get("base_url", DEFAULT_API_BASE_URL)),
        timeout=float(api_raw.get("timeout", DEFAULT_API_TIMEOUT)),
        token=api_raw.get("token") or os.environ.get(DEFAULT_API_TOKEN_ENV) or None,
    )

    # -- speech ------------------------------------------------------------
    speech_raw = _section(data, "speech")
    speech = SpeechConfig(
        enabled=bool(speech_raw.get("enabled", True)),
        language=str(speech_raw.get("language", DEFAULT_LANGUAGE)),
        pitch=float(speech_raw.get("pitch", DEFAULT_SPEECH_PITCH)),
        rate=float(speech_raw.get("rate", DEFAULT_SPEECH_RATE)),
    )

    # -- profile -----------------------------------------------------------
    profile_raw = _section(data, "profile")
    profile = ProfileConfig(
        name=profile_raw.get("name") or None,
        age=_optional_int(profile_raw.get("age")),
        gender=profile_raw.get("gender") or None,
    )

    # -- chat --------------------------------------------------------------
    chat_raw = _section(data, "chat")
    chat = ChatConfig(
        model=chat_raw.get("model") or None,
        prompt=_resolve_prompt(config_dir, chat_raw, "chat"),
        max_tokens=int(chat_raw.get("max_tokens", DEFAULT_CHAT_MAX_TOKENS)),
    )

    # -- corrections -------------------------------------------------------
    corrections = {str(k): str(v) for k, v in _section(data, "corrections").items()}

    return GeumbokConfig(
        api=api,
        speech=speech,
        profile=profile,
        chat=chat,
        corrections=corrections,
    )
