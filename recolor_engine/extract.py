"""Output image extraction from chat-completion responses.

Image output is not part of the standard chat-completion schema. Backends that support
it (OpenRouter, for image-capable models) place it at
`choices[0].message.images[0].image_url.url` as a data URL. Backends that did not
produce an image still answer 2xx, just without the `images` field, so every lookup
here reports absence explicitly instead of defaulting.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Union

from .errors import ProtocolError
from .utils import truncate_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Found:
    data: bytes
    mime_type: str | None
    url: str


@dataclass(frozen=True)
class MissingField:
    name: str


@dataclass(frozen=True)
class MalformedValue:
    field: str
    detail: str


ExtractionResult = Union[Found, MissingField, MalformedValue]


@dataclass(frozen=True)
class ColorizationResponse:
    document: Mapping[str, Any]
    result: ExtractionResult


def parse_response(body: str) -> ColorizationResponse:
    try:
        document = json.loads(body)
    except ValueError as exc:
        raise ProtocolError(
            f"response is not valid JSON: {truncate_text(body)}", body=body
        ) from exc
    if not isinstance(document, Mapping):
        raise ProtocolError(
            f"response is not a JSON object: {truncate_text(body)}", body=body
        )
    return ColorizationResponse(document=document, result=extract_image(document))


def extract_image(document: Mapping[str, Any]) -> ExtractionResult:
    choices = document.get("choices")
    if not isinstance(choices, list) or not choices:
        return MissingField("choices")
    first = choices[0]
    if not isinstance(first, Mapping):
        return MalformedValue("choices[0]", "expected an object")
    message = first.get("message")
    if not isinstance(message, Mapping):
        return MissingField("choices[0].message")
    images = message.get("images")
    if not isinstance(images, list) or not images:
        return MissingField("choices[0].message.images")
    image = images[0]
    image_url = image.get("image_url") if isinstance(image, Mapping) else None
    if not isinstance(image_url, Mapping):
        return MissingField("choices[0].message.images[0].image_url")
    url = image_url.get("url")
    if not isinstance(url, str):
        return MissingField("choices[0].message.images[0].image_url.url")
    return _decode_data_url(url)


def decode_image(body: str) -> bytes:
    result = parse_response(body).result
    if isinstance(result, Found):
        logger.debug("Extracted %d image bytes (%s)", len(result.data), result.mime_type)
        return result.data
    raise ProtocolError(_describe_failure(result, body), body=body)


def _decode_data_url(url: str) -> ExtractionResult:
    field = "choices[0].message.images[0].image_url.url"
    header, sep, payload = url.partition(",")
    if not sep:
        return MalformedValue(field, "not a data URL")
    mime_type = None
    if header.startswith("data:"):
        mime_type = header[len("data:"):].split(";", 1)[0] or None
    try:
        data = base64.b64decode(payload, validate=False)
    except (binascii.Error, ValueError) as exc:
        return MalformedValue(field, f"invalid base64 payload ({exc})")
    if not data:
        return MalformedValue(field, "empty image payload")
    return Found(data=data, mime_type=mime_type, url=url)


def _describe_failure(result: ExtractionResult, body: str) -> str:
    if isinstance(result, MissingField):
        if result.name == "choices":
            return "no choices in response"
        if result.name == "choices[0].message":
            return f"no message in response: {truncate_text(body)}"
        return f"no image URL in response ({result.name} missing): {truncate_text(body)}"
    if isinstance(result, MalformedValue):
        return f"malformed {result.field} in response ({result.detail}): {truncate_text(body)}"
    return "unexpected extraction result"
