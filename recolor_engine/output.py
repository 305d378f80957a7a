"""Output image writing."""

from __future__ import annotations

import io
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from .errors import OutputWriteError

logger = logging.getLogger(__name__)

OUTPUT_PREFIX = "colored_"


@dataclass(frozen=True)
class OutputImage:
    path: Path
    data: bytes
    width: int | None = None
    height: int | None = None


def output_path_for(source_path: str | Path) -> Path:
    source = Path(source_path)
    return source.with_name(f"{OUTPUT_PREFIX}{source.name}")


def write_output(data: bytes, source_path: str | Path) -> OutputImage:
    destination = output_path_for(source_path)
    width, height = _probe_size(data)
    _atomic_write_bytes(destination, data)
    logger.debug("Wrote %d bytes to %s", len(data), destination)
    return OutputImage(path=destination, data=data, width=width, height=height)


def _atomic_write_bytes(destination: Path, data: bytes) -> None:
    # The destination only ever appears fully written; the temp file is dropped otherwise.
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{destination.name}.", suffix=".tmp", dir=destination.parent
        )
    except OSError as exc:
        raise OutputWriteError(f"Could not write output image {destination}: {exc}") from exc
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
        os.chmod(tmp_path, 0o644)
        os.replace(tmp_path, destination)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise OutputWriteError(f"Could not write output image {destination}: {exc}") from exc
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def _probe_size(data: bytes) -> tuple[int | None, int | None]:
    try:
        with Image.open(io.BytesIO(data)) as image:
            return image.width, image.height
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError):
        return None, None
