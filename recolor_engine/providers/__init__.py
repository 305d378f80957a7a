"""Chat-completion transports and invoker."""

from __future__ import annotations

from .base import HttpResponse, Transport
from .dryrun import DryRunTransport
from .openrouter import OpenRouterInvoker, UrllibTransport

__all__ = [
    "DryRunTransport",
    "HttpResponse",
    "OpenRouterInvoker",
    "Transport",
    "UrllibTransport",
]
