"""Transport abstractions shared by the chat-completion invoker."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Protocol


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class Transport(Protocol):
    """Blocking HTTP POST.

    Implementations return non-2xx responses as values and raise `NetworkError` only for
    transport-level failures (connect/read/write timeouts, refused connections).
    They must be safe to share across threads.
    """

    def post(self, url: str, body: bytes, headers: Mapping[str, str]) -> HttpResponse:
        ...
