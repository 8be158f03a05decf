"""
PDF text extraction.

Each page's positioned words are joined with single spaces; the aggregate text
carries a ``--- Page <i> ---`` delimiter for every page that produced text.
Pages with nothing extractable add no delimiter.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from nese_ingest.config import settings
from nese_ingest.errors import ExtractionFailed
from nese_ingest.logging import log
from nese_ingest.pipeline.engines import require_engine
from nese_ingest.schemas.document import PageTextSample

# Index of the word string in a page.get_text("words") tuple
_WORD = 4


@contextmanager
def open_pdf(data: bytes, filename: str) -> Iterator:
    """Open *data* with PyMuPDF and close it on exit."""
    fitz = require_engine("pdf", filename)
    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except (fitz.FileDataError, RuntimeError, ValueError) as exc:
        raise ExtractionFailed.wrap(filename, exc, "the PDF is damaged or not a PDF") from exc

    try:
        if doc.needs_pass:
            log.info("pdf.encrypted", filename=filename)
            raise ExtractionFailed(filename, "the PDF is password protected")
        yield doc
    finally:
        doc.close()


def extract_pages(doc) -> list[PageTextSample]:
    samples = []
    for index in range(doc.page_count):
        words = doc[index].get_text("words", sort=True)
        text = " ".join(w[_WORD] for w in words)
        samples.append(PageTextSample(page_number=index + 1, text=text, char_count=len(text)))
    return samples


def build_page_text(samples: list[PageTextSample], label: str | None = None) -> str:
    label = label or settings.page_label
    parts = []
    for sample in samples:
        if sample.text.strip():
            parts.append(f"--- {label} {sample.page_number} ---\n{sample.text}\n\n")
    return "".join(parts)
