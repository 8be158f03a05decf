"""Render the leading pages of a scan-like PDF to JPEG for vision transcription."""

from __future__ import annotations

import io

from nese_ingest.config import IngestionLimits, settings
from nese_ingest.errors import ExtractionFailed
from nese_ingest.logging import log
from nese_ingest.pipeline.engines import require_engine
from nese_ingest.schemas.document import PageImage


def rasterize_pages(doc, filename: str, limits: IngestionLimits | None = None) -> list[PageImage]:
    """
    Render pages 1..min(N, max_scan_pages) in order.

    Pages are rendered one at a time. A failure on any page aborts the call
    with ExtractionFailed; already-rendered pages are discarded.
    """
    limits = limits or settings.ingestion
    fitz = require_engine("pdf", filename)
    image_mod = require_engine("image", filename)

    count = min(doc.page_count, limits.max_scan_pages)
    matrix = fitz.Matrix(limits.render_scale, limits.render_scale)
    quality = round(limits.image_quality * 100)

    images: list[PageImage] = []
    for index in range(count):
        page_number = index + 1
        try:
            pix = doc[index].get_pixmap(matrix=matrix, colorspace=fitz.csRGB, alpha=False)
            image = image_mod.frombytes("RGB", (pix.width, pix.height), pix.samples)
            buf = io.BytesIO()
            image.save(buf, format="JPEG", quality=quality, optimize=True)
        except Exception as exc:
            log.error("rasterizer.page_failed", page=page_number, error=str(exc))
            raise ExtractionFailed.wrap(filename, exc, f"could not render page {page_number}") from exc

        images.append(PageImage(
            page_number=page_number,
            data=buf.getvalue(),
            width=pix.width,
            height=pix.height,
        ))
        log.debug("rasterizer.page", page=page_number, width=pix.width, height=pix.height, bytes=buf.tell())

    log.info("rasterizer.done", pages=len(images), total_pages=doc.page_count, scale=limits.render_scale)
    return images
