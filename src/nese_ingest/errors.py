"""Error kinds raised by the ingestion pipeline.

Every error names the offending file in ``user_message``; the underlying cause
stays on ``__cause__`` for logging and is never part of the message.
"""

from __future__ import annotations


class IngestionError(RuntimeError):
    """Base class for all pipeline failures."""

    retryable: bool = False

    def __init__(self, filename: str, detail: str = "") -> None:
        self.filename = filename
        self.detail = detail
        super().__init__(self.user_message)

    @property
    def user_message(self) -> str:
        return f"{self.filename}: {self.detail}" if self.detail else self.filename


class UnsupportedFormat(IngestionError):
    """The file extension is not one the pipeline can read."""

    def __init__(self, filename: str, extension: str) -> None:
        self.extension = extension
        shown = extension or "(no extension)"
        super().__init__(filename, f"unsupported file format '{shown}'")


class ExtractionFailed(IngestionError):
    """A parser could not read the file (corrupt, encrypted, engine missing...)."""

    def __init__(self, filename: str, detail: str = "could not extract text") -> None:
        super().__init__(filename, detail)

    @classmethod
    def wrap(cls, filename: str, exc: BaseException, detail: str = "could not extract text") -> "ExtractionFailed":
        message = str(exc).strip() or type(exc).__name__
        return cls(filename, f"{detail} ({message})")


class DependencyUnavailable(ExtractionFailed):
    """A parsing engine could not be loaded within the bounded wait."""

    def __init__(self, filename: str, engine: str) -> None:
        self.engine = engine
        super().__init__(filename, f"document engine '{engine}' is not available")


class VisionTranscriptionFailed(IngestionError):
    """The vision model call failed or returned no usable text."""

    retryable = True

    def __init__(self, filename: str, detail: str = "vision transcription failed") -> None:
        super().__init__(filename, detail)
