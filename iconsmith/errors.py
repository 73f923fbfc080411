from __future__ import annotations

from typing import Optional


class IconError(Exception):
    """Base class for every fatal icon generation error.

    `stage` names the pipeline step that failed ("generate appx icons",
    "generate .ico file", ...) and is filled in by the orchestrator.
    """

    def __init__(self, message: str, stage: Optional[str] = None) -> None:
        super().__init__(message)
        self.stage = stage


class SourceDecodeError(IconError):
    pass


class PreconditionError(IconError):
    pass


class DirectoryCreationError(IconError):
    pass


class ResampleError(IconError):
    pass


class EncodeError(IconError):
    pass


class ConfigLookupError(IconError):
    pass


class WriteError(IconError):
    pass
