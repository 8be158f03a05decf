from nese_ingest.pipeline.classifier import classify_pages
from nese_ingest.pipeline.dispatcher import aextract_document, detect_format, extract_document
from nese_ingest.pipeline.orchestrator import ingest
from nese_ingest.pipeline.rasterizer import rasterize_pages
from nese_ingest.pipeline.transcriber import (
    ClaudeTranscriber,
    GeminiTranscriber,
    VisionTranscriber,
    get_transcriber,
    merge_transcript,
    transcribe_scan,
)

__all__ = [
    "classify_pages",
    "detect_format",
    "extract_document",
    "aextract_document",
    "rasterize_pages",
    "VisionTranscriber",
    "GeminiTranscriber",
    "ClaudeTranscriber",
    "get_transcriber",
    "merge_transcript",
    "transcribe_scan",
    "ingest",
]
