"""Dry-run transport (offline)."""

from __future__ import annotations

import base64
import hashlib
import io
import json
from typing import Any, Mapping

from PIL import Image, ImageDraw, ImageFont

from .base import HttpResponse


class DryRunTransport:
    """Answers chat-completion requests locally with a generated PNG.

    The image colour is derived from the request body, so identical requests get
    byte-identical responses.
    """

    def __init__(self, size: tuple[int, int] = (256, 256)) -> None:
        self.size = size
        self.requests: list[dict[str, Any]] = []

    def post(self, url: str, body: bytes, headers: Mapping[str, str]) -> HttpResponse:
        self.requests.append({"url": url, "body": body, "headers": dict(headers)})
        png = _render_png(self.size, _color_from_body(body))
        encoded = base64.b64encode(png).decode("ascii")
        payload = {
            "id": f"dryrun-{hashlib.sha256(body).hexdigest()[:12]}",
            "object": "chat.completion",
            "choices": [
                {
                    "index": 0,
                    "finish_reason": "stop",
                    "message": {
                        "role": "assistant",
                        "content": "dryrun",
                        "images": [
                            {
                                "type": "image_url",
                                "image_url": {"url": f"data:image/png;base64,{encoded}"},
                            }
                        ],
                    },
                }
            ],
        }
        return HttpResponse(status_code=200, body=json.dumps(payload))


def _render_png(size: tuple[int, int], color: tuple[int, int, int]) -> bytes:
    image = Image.new("RGB", size, color)
    draw = ImageDraw.Draw(image)
    draw.text((8, 8), "dryrun", fill=(255, 255, 255), font=ImageFont.load_default())
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def _color_from_body(body: bytes) -> tuple[int, int, int]:
    digest = hashlib.sha256(body).digest()
    return digest[0], digest[1], digest[2]
