"""Source image loading."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .errors import InputError

logger = logging.getLogger(__name__)

_MIME_TYPES = {
    "png": "image/png",
    "webp": "image/webp",
    "gif": "image/gif",
}
_FALLBACK_MIME_TYPE = "image/jpeg"


@dataclass(frozen=True)
class SourceImage:
    path: Path
    data: bytes
    mime_type: str


def mime_type_for_path(path: str | Path) -> str:
    suffix = Path(path).suffix.lstrip(".").lower()
    return _MIME_TYPES.get(suffix, _FALLBACK_MIME_TYPE)


def load_source(path: str | Path) -> SourceImage:
    source_path = Path(path).expanduser()
    if not source_path.is_file():
        raise InputError(f"Input image not found: {source_path}")
    try:
        data = source_path.read_bytes()
    except OSError as exc:
        raise InputError(f"Input image could not be read: {source_path}") from exc
    mime_type = mime_type_for_path(source_path)
    logger.debug("Loaded %s (%d bytes, %s)", source_path, len(data), mime_type)
    return SourceImage(path=source_path, data=data, mime_type=mime_type)
