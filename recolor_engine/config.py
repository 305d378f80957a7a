"""Recolor settings and their defaults."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .errors import ConfigError
from .utils import coerce_flag

DEFAULT_ENDPOINT = "https://openrouter.ai/api/v1/chat/completions"
DEFAULT_MODEL = "google/gemini-2.5-flash-image-preview"
DEFAULT_PROMPT = (
    "Using the input image provided, regenerate the scene in an oil painting style, "
    "using a warm autumn palette (oranges and reds)."
)
DEFAULT_TIMEOUT_S = 60.0

# Chat-completion models known to return images through `message.images`.
KNOWN_MODELS = (
    "google/gemini-2.5-flash-image-preview",
    "google/gemini-2.5-flash-image",
    "openai/gpt-5-image-mini",
    "openai/gpt-5-image",
)


@dataclass(frozen=True)
class TransportTimeouts:
    connect_s: float = DEFAULT_TIMEOUT_S
    read_s: float = DEFAULT_TIMEOUT_S
    write_s: float = DEFAULT_TIMEOUT_S

    def socket_timeout(self) -> float:
        return max(self.connect_s, self.read_s, self.write_s)


@dataclass(frozen=True)
class RecolorSettings:
    """Everything a colorization needs besides the image itself.

    Values are expected to come from an external preference store; this record only
    checks them for presence and blankness.
    """

    api_key: str = ""
    model: str = DEFAULT_MODEL
    prompt: str = ""
    enabled: bool = False
    endpoint: str = DEFAULT_ENDPOINT
    timeouts: TransportTimeouts = TransportTimeouts()

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "RecolorSettings":
        timeout_value = values.get("timeout_s")
        timeouts = TransportTimeouts()
        if timeout_value is not None:
            try:
                seconds = float(timeout_value)
            except (TypeError, ValueError) as exc:
                raise ConfigError(f"Invalid timeout_s value: {timeout_value!r}") from exc
            if seconds <= 0:
                raise ConfigError(f"timeout_s must be positive, got {seconds}")
            timeouts = TransportTimeouts(connect_s=seconds, read_s=seconds, write_s=seconds)
        return cls(
            api_key=str(values.get("api_key") or ""),
            model=str(values.get("model") or DEFAULT_MODEL),
            prompt=str(values.get("prompt") or ""),
            enabled=coerce_flag(values.get("enabled"), False),
            endpoint=str(values.get("endpoint") or DEFAULT_ENDPOINT),
            timeouts=timeouts,
        )

    def validate(self) -> None:
        if not self.api_key.strip():
            raise ConfigError("API key is missing.")
        if not self.model.strip():
            raise ConfigError("Model identifier is missing.")

    def resolved_prompt(self) -> str:
        return self.prompt if self.prompt.strip() else DEFAULT_PROMPT
