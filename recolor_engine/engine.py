"""Core recolor engine orchestration."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .config import RecolorSettings
from .errors import RecolorError
from .extract import decode_image
from .output import OutputImage, output_path_for, write_output
from .payload import build_request
from .providers.base import Transport
from .providers.openrouter import OpenRouterInvoker, UrllibTransport
from .source import load_source
from .utils import sanitize_payload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecolorOutcome:
    output: OutputImage | None = None
    error: RecolorError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.output is not None


class RecolorEngine:
    """Runs source -> payload -> POST -> extraction -> output for one image at a time.

    The transport is built once and shared by every call; pass one in to share a
    connection setup across engines or to run without network access.
    """

    def __init__(self, settings: RecolorSettings, transport: Transport | None = None) -> None:
        self.settings = settings
        self.transport = transport or UrllibTransport(settings.timeouts)
        self.invoker = OpenRouterInvoker(self.transport, endpoint=settings.endpoint)

    def is_enabled(self) -> bool:
        return self.settings.enabled

    def colorize(self, image_path: str | Path) -> OutputImage:
        self.settings.validate()
        source = load_source(image_path)
        request = build_request(source, self.settings.model, self.settings.resolved_prompt())
        logger.debug("Request payload: %s", sanitize_payload(request.to_payload()))
        body = self.invoker.invoke(request.to_json(), self.settings.api_key)
        image_bytes = decode_image(body)
        output = write_output(image_bytes, source.path)
        logger.info("Colorized %s -> %s", source.path, output.path)
        return output

    def try_colorize(self, image_path: str | Path) -> RecolorOutcome:
        try:
            return RecolorOutcome(output=self.colorize(image_path))
        except RecolorError as exc:
            logger.warning("Colorization of %s failed: %s", image_path, exc)
            return RecolorOutcome(error=exc)

    def output_path_for(self, image_path: str | Path) -> Path:
        return output_path_for(Path(image_path).expanduser())
