"""
Format dispatch: file extension → extractor → ExtractionResult.

Strategy:
  - .txt:          decode bytes, verbatim.
  - .docx:         python-docx paragraph/table text.
  - .xlsx / .xls:  one CSV block per sheet, in workbook order.
  - .pdf:          per-page native text, scan heuristic, and for scan-like
                   documents the leading pages rasterized to JPEG.

Every parser failure becomes ExtractionFailed; no partial result escapes.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from nese_ingest.config import IngestionLimits, settings
from nese_ingest.errors import ExtractionFailed, IngestionError, UnsupportedFormat
from nese_ingest.logging import log, upload_context
from nese_ingest.pipeline.classifier import classify_pages
from nese_ingest.pipeline.office import extract_plain_text, extract_sheets, extract_word_text, render_sheets
from nese_ingest.pipeline.pdf import build_page_text, extract_pages, open_pdf
from nese_ingest.pipeline.rasterizer import rasterize_pages
from nese_ingest.schemas.document import ExtractionRequest, ExtractionResult, FileFormat

EXTENSIONS: dict[str, FileFormat] = {
    ".txt": FileFormat.TEXT,
    ".docx": FileFormat.WORD,
    ".xlsx": FileFormat.SPREADSHEET,
    ".xls": FileFormat.SPREADSHEET,
    ".pdf": FileFormat.PDF,
}


def detect_format(filename: str) -> FileFormat:
    """Map *filename*'s extension to a FileFormat, or raise UnsupportedFormat."""
    extension = Path(filename).suffix.lower()
    try:
        return EXTENSIONS[extension]
    except KeyError:
        log.warning("dispatcher.unsupported", filename=filename, extension=extension)
        raise UnsupportedFormat(filename, extension) from None


def extract_document(request: ExtractionRequest, limits: IngestionLimits | None = None) -> ExtractionResult:
    """Extract text from *request*, rasterizing pages of scan-like PDFs."""
    # The extension is authoritative, even when the caller tagged a format.
    if request.extension not in EXTENSIONS:
        detect_format(request.filename)

    with upload_context(request.filename, file_format=request.file_format.value):
        log.info("dispatcher.start", size_bytes=len(request.content))
        try:
            result = _dispatch(request, limits or settings.ingestion)
        except IngestionError:
            raise
        except Exception as exc:
            log.error("dispatcher.failed", error_type=type(exc).__name__, error=str(exc), exc_info=True)
            raise ExtractionFailed.wrap(request.filename, exc) from exc

        log.info("dispatcher.done", chars=len(result.text), is_scan=result.is_scan, images=len(result.images))
        return result


async def aextract_document(
    request: ExtractionRequest, limits: IngestionLimits | None = None
) -> ExtractionResult:
    """Async variant: runs the blocking parsers on a worker thread."""
    return await asyncio.to_thread(extract_document, request, limits)


def _dispatch(request: ExtractionRequest, limits: IngestionLimits) -> ExtractionResult:
    fmt = request.file_format
    base = {"filename": request.filename, "file_format": fmt}

    if fmt == FileFormat.TEXT:
        return ExtractionResult(**base, text=extract_plain_text(request.content))

    if fmt == FileFormat.WORD:
        return ExtractionResult(**base, text=extract_word_text(request.content, request.filename))

    if fmt == FileFormat.SPREADSHEET:
        sheets = extract_sheets(request.content, request.extension, request.filename)
        return ExtractionResult(**base, text=render_sheets(sheets))

    return _extract_pdf(request, limits)


def _extract_pdf(request: ExtractionRequest, limits: IngestionLimits) -> ExtractionResult:
    with open_pdf(request.content, request.filename) as doc:
        samples = extract_pages(doc)
        text = build_page_text(samples)
        verdict = classify_pages(samples, limits)

        images = rasterize_pages(doc, request.filename, limits) if verdict.is_scan else []

    return ExtractionResult(
        filename=request.filename,
        file_format=FileFormat.PDF,
        text=text,
        is_scan=verdict.is_scan,
        images=images,
        page_count=verdict.total_pages,
    )
