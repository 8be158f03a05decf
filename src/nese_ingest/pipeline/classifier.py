"""
Scan-likelihood heuristic for PDFs.

Decision logic:
  - No pages                                             → text-native
  - Low-text pages (< min_page_chars) exceed half of N   → scan-like
  - Total chars < N × min_avg_chars_per_page             → scan-like
  - Otherwise                                            → text-native

"Exceed half" is strict: a document with exactly half its pages blank is
text-native. The thresholds come from settings; the OR of the two checks
does not change.
"""

from __future__ import annotations

from nese_ingest.config import IngestionLimits, settings
from nese_ingest.logging import log
from nese_ingest.schemas.document import PageTextSample, ScanVerdict


def classify_pages(
    samples: list[PageTextSample],
    limits: IngestionLimits | None = None,
) -> ScanVerdict:
    """Return the ScanVerdict for a document's per-page text samples."""
    limits = limits or settings.ingestion
    total_pages = len(samples)
    total_chars = sum(s.char_count for s in samples)
    low = sum(1 for s in samples if s.char_count < limits.min_page_chars)

    if total_pages == 0:
        reason = "no_pages"
    elif low * 2 > total_pages:
        reason = "low_text_pages"
    elif total_chars < total_pages * limits.min_avg_chars_per_page:
        reason = "low_total_chars"
    else:
        reason = "text_native"

    verdict = ScanVerdict(
        is_scan=reason in ("low_text_pages", "low_total_chars"),
        total_pages=total_pages,
        low_text_pages=low,
        total_chars=total_chars,
        reason=reason,
    )
    log.info(
        "classifier.result",
        is_scan=verdict.is_scan,
        reason=reason,
        total_pages=total_pages,
        low_text_pages=low,
        total_chars=total_chars,
    )
    return verdict
