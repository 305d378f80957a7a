"""Recolor engine package."""

from __future__ import annotations

from .config import DEFAULT_PROMPT, RecolorSettings, TransportTimeouts
from .engine import RecolorEngine, RecolorOutcome
from .errors import (
    ConfigError,
    InputError,
    NetworkError,
    OutputWriteError,
    ProtocolError,
    RecolorError,
)

__all__ = [
    "ConfigError",
    "DEFAULT_PROMPT",
    "InputError",
    "NetworkError",
    "OutputWriteError",
    "ProtocolError",
    "RecolorEngine",
    "RecolorError",
    "RecolorOutcome",
    "RecolorSettings",
    "TransportTimeouts",
]
