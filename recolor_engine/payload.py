"""Multimodal chat-completion payload construction."""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass
from typing import Any

from .config import DEFAULT_PROMPT
from .source import SourceImage

OUTPUT_MODALITIES = ("image", "text")


@dataclass(frozen=True)
class ColorizationRequest:
    model: str
    prompt: str
    image_url: str

    def to_payload(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": self.prompt},
                        {"type": "image_url", "image_url": {"url": self.image_url}},
                    ],
                }
            ],
            "modalities": list(OUTPUT_MODALITIES),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_payload(), ensure_ascii=False)


def build_data_url(data: bytes, mime_type: str) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def build_request(source: SourceImage, model: str, prompt: str | None = None) -> ColorizationRequest:
    resolved_prompt = prompt if prompt and prompt.strip() else DEFAULT_PROMPT
    return ColorizationRequest(
        model=model,
        prompt=resolved_prompt,
        image_url=build_data_url(source.data, source.mime_type),
    )
