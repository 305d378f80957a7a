from __future__ import annotations

import base64
import json
from pathlib import Path

from recolor_engine.config import DEFAULT_PROMPT
from recolor_engine.payload import build_data_url, build_request
from recolor_engine.source import SourceImage


def _source(data: bytes = b"\x89PNG-bytes", mime_type: str = "image/png") -> SourceImage:
    return SourceImage(path=Path("page.png"), data=data, mime_type=mime_type)


def test_build_data_url() -> None:
    url = build_data_url(b"hello", "image/gif")
    assert url == "data:image/gif;base64," + base64.b64encode(b"hello").decode("ascii")


def test_build_data_url_does_not_wrap_long_payloads() -> None:
    url = build_data_url(b"x" * 4096, "image/png")
    assert "\n" not in url


def test_request_body_shape() -> None:
    request = build_request(_source(), "google/gemini-2.5-flash-image-preview", "Colorize this page")
    payload = json.loads(request.to_json())

    assert payload["model"] == "google/gemini-2.5-flash-image-preview"
    assert payload["modalities"] == ["image", "text"]
    assert len(payload["messages"]) == 1
    message = payload["messages"][0]
    assert message["role"] == "user"
    assert message["content"] == [
        {"type": "text", "text": "Colorize this page"},
        {"type": "image_url", "image_url": {"url": build_data_url(b"\x89PNG-bytes", "image/png")}},
    ]


def test_blank_prompt_falls_back_to_default() -> None:
    for prompt in ("", "   ", None):
        request = build_request(_source(), "model-x", prompt)
        assert request.prompt == DEFAULT_PROMPT


def test_model_passed_verbatim() -> None:
    request = build_request(_source(), "  Vendor/Model:Free ", "p")
    assert request.to_payload()["model"] == "  Vendor/Model:Free "


def test_prompt_keeps_non_ascii_text() -> None:
    request = build_request(_source(), "model-x", "Färbe das Bild ein")
    assert "Färbe das Bild ein" in request.to_json()
