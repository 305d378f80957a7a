"""OpenRouter chat-completions invoker."""

from __future__ import annotations

import logging
import socket
from dataclasses import dataclass, field
from typing import Mapping
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ..config import DEFAULT_ENDPOINT, TransportTimeouts
from ..errors import ConfigError, NetworkError, ProtocolError
from ..utils import truncate_text
from .base import HttpResponse, Transport

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


@dataclass(frozen=True)
class UrllibTransport:
    # urllib has one socket timeout covering connect and each blocking read/write.
    timeouts: TransportTimeouts = field(default_factory=TransportTimeouts)

    def post(self, url: str, body: bytes, headers: Mapping[str, str]) -> HttpResponse:
        req = Request(url, data=body, headers=dict(headers), method="POST")
        timeout_s = self.timeouts.socket_timeout()
        try:
            with urlopen(req, timeout=timeout_s) as response:
                status_code = int(getattr(response, "status", 200))
                raw = response.read().decode("utf-8", errors="replace")
        except HTTPError as exc:
            try:
                raw = exc.read().decode("utf-8", errors="replace") if exc.fp else ""
            except OSError as read_exc:
                raise NetworkError(
                    f"API request failed: {exc.code} - error body could not be read ({read_exc})",
                    status_code=int(exc.code),
                ) from read_exc
            return HttpResponse(status_code=int(exc.code), body=raw)
        except URLError as exc:
            raise NetworkError(f"API request failed: {exc.reason}") from exc
        except (socket.timeout, TimeoutError) as exc:
            raise NetworkError(f"API request timed out after {timeout_s:g}s") from exc
        except OSError as exc:
            raise NetworkError(f"API request failed: {exc}") from exc
        return HttpResponse(status_code=status_code, body=raw)


class OpenRouterInvoker:
    def __init__(self, transport: Transport, endpoint: str = DEFAULT_ENDPOINT) -> None:
        self.transport = transport
        self.endpoint = endpoint

    def invoke(self, body: str, api_key: str) -> str:
        if not api_key or not api_key.strip():
            raise ConfigError("API key is missing.")
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": JSON_CONTENT_TYPE,
        }
        logger.debug("POST %s (%d bytes)", self.endpoint, len(body))
        response = self.transport.post(self.endpoint, body.encode("utf-8"), headers)
        if not response.ok:
            logger.debug(
                "API returned %s: %s", response.status_code, truncate_text(response.body)
            )
            raise NetworkError(
                f"API request failed: {response.status_code} - {response.body}",
                status_code=response.status_code,
                body=response.body,
            )
        if not response.body or not response.body.strip():
            raise ProtocolError("no content", body=response.body)
        return response.body
