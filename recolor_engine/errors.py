"""Error categories raised by the recolor pipeline."""

from __future__ import annotations


class RecolorError(Exception):
    """Base class for every failure a colorization can end with."""


class ConfigError(RecolorError):
    pass


class InputError(RecolorError):
    pass


class NetworkError(RecolorError):
    def __init__(self, message: str, *, status_code: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ProtocolError(RecolorError):
    def __init__(self, message: str, *, body: str | None = None) -> None:
        super().__init__(message)
        self.body = body


class OutputWriteError(RecolorError, OSError):
    """Writing the output image failed; also an `OSError` (`IOError`) for callers catching those."""
