"""Schemas for ingestion requests and results."""

from __future__ import annotations

import base64
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FileFormat(StrEnum):
    TEXT = "text"
    WORD = "word"                # .docx
    SPREADSHEET = "spreadsheet"  # .xlsx / .xls
    PDF = "pdf"


class ExtractionRequest(BaseModel):
    """An uploaded file plus its format tag. Never mutated by the pipeline."""

    model_config = ConfigDict(frozen=True)

    filename: str
    content: bytes = Field(repr=False)
    file_format: FileFormat

    @property
    def extension(self) -> str:
        return Path(self.filename).suffix.lower()

    @classmethod
    def from_bytes(
        cls, filename: str, content: bytes, file_format: FileFormat | None = None
    ) -> "ExtractionRequest":
        if file_format is None:
            from nese_ingest.pipeline.dispatcher import detect_format
            file_format = detect_format(filename)
        return cls(filename=filename, content=content, file_format=file_format)

    @classmethod
    def from_path(cls, path: Path, file_format: FileFormat | None = None) -> "ExtractionRequest":
        return cls.from_bytes(path.name, path.read_bytes(), file_format)


class PageTextSample(BaseModel):
    page_number: int
    text: str
    char_count: int


class ScanVerdict(BaseModel):
    is_scan: bool
    total_pages: int
    low_text_pages: int
    total_chars: int
    reason: str  # no_pages | low_text_pages | low_total_chars | text_native


class PageImage(BaseModel):
    page_number: int
    mime_type: str = "image/jpeg"
    data: bytes = Field(repr=False)
    width: int
    height: int

    @property
    def b64(self) -> str:
        return base64.standard_b64encode(self.data).decode()


class ExtractionResult(BaseModel):
    filename: str
    file_format: FileFormat
    text: str = ""
    is_scan: bool = False
    images: list[PageImage] = Field(default_factory=list)
    page_count: int | None = None      # PDFs only
    transcript: str | None = None      # set once the vision step has run

    @model_validator(mode="after")
    def _images_iff_scan(self) -> "ExtractionResult":
        if self.is_scan != bool(self.images):
            raise ValueError("images must be present if and only if is_scan is true")
        return self

    @property
    def transcribed(self) -> bool:
        return self.transcript is not None
