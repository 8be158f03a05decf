"""
Top-level orchestrator, the caller-side flow for one uploaded file.

ingest:  ExtractionRequest → ExtractionResult (native text, plus the merged
         vision transcript when the PDF is scan-like)

Retrying the vision call and deciding what to do when it keeps failing are
caller policy, so they live here rather than in the transcriber.
"""

from __future__ import annotations

from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from nese_ingest.config import IngestionLimits
from nese_ingest.errors import VisionTranscriptionFailed
from nese_ingest.logging import log
from nese_ingest.pipeline.dispatcher import aextract_document
from nese_ingest.pipeline.transcriber import VisionTranscriber, get_transcriber, transcribe_scan
from nese_ingest.schemas.document import ExtractionRequest, ExtractionResult

_VISION_WAIT = wait_exponential(multiplier=1, min=2, max=10)


async def ingest(
    request: ExtractionRequest,
    transcriber: VisionTranscriber | None = None,
    *,
    vision: bool = True,
    vision_attempts: int = 1,
    native_fallback: bool = False,
    limits: IngestionLimits | None = None,
) -> ExtractionResult:
    """
    Extract *request* and, for scan-like PDFs, transcribe and merge.

    Raises:
        UnsupportedFormat, ExtractionFailed: extraction could not run.
        VisionTranscriptionFailed: every vision attempt failed and
            *native_fallback* is off.

    *limits* overrides the configured thresholds for this call only, e.g. a
    smaller page cap for a latency-sensitive caller.
    """
    log.info("ingest.start", filename=request.filename, vision=vision)
    result = await aextract_document(request, limits)

    if not (result.is_scan and vision):
        return result

    transcriber = transcriber or get_transcriber()
    try:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(max(vision_attempts, 1)),
            wait=_VISION_WAIT,
            retry=retry_if_exception_type(VisionTranscriptionFailed),
            reraise=True,
        ):
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    log.info("ingest.vision_retry", attempt=attempt.retry_state.attempt_number)
                merged = await transcribe_scan(result, transcriber)
    except VisionTranscriptionFailed as exc:
        if not native_fallback:
            raise
        log.warning("ingest.native_fallback", filename=request.filename, error=exc.user_message)
        return result

    log.info("ingest.complete", filename=request.filename, chars=len(merged.text))
    return merged
