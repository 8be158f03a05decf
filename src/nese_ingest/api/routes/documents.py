"""
/documents endpoints

POST /documents/extract
  Upload one document (.txt, .docx, .xlsx, .xls, .pdf) and get its text back.
  Scan-like PDFs are transcribed by the vision model unless ?vision=false.
  Extraction is synchronous: one upload, one response.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from pydantic import BaseModel

from nese_ingest.config import settings
from nese_ingest.logging import log
from nese_ingest.pipeline.orchestrator import ingest
from nese_ingest.pipeline.transcriber import VisionTranscriber, get_transcriber
from nese_ingest.schemas.document import ExtractionRequest, FileFormat
from nese_ingest.utils.files import safe_filename

router = APIRouter()


class ExtractionResponse(BaseModel):
    filename: str
    file_format: FileFormat
    text: str
    is_scan: bool
    page_count: int | None = None
    rendered_pages: int = 0
    transcribed: bool = False


def vision_transcriber() -> VisionTranscriber:
    return get_transcriber()


@router.post("/extract", response_model=ExtractionResponse)
async def extract_upload(
    file: UploadFile = File(..., description="Document to extract"),
    vision: bool = Query(True, description="Transcribe scan-like PDFs with the vision model"),
    native_fallback: bool = Query(False, description="Return native text if vision transcription fails"),
    transcriber: VisionTranscriber = Depends(vision_transcriber),
) -> ExtractionResponse:
    filename = safe_filename(file.filename or "") or "upload"
    content = await file.read()

    max_bytes = settings.max_upload_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"{filename}: file exceeds {settings.max_upload_mb} MB.",
        )

    log.info("documents.uploaded", filename=filename, size=len(content))
    request = ExtractionRequest.from_bytes(filename, content)
    result = await ingest(request, transcriber, vision=vision, native_fallback=native_fallback)

    return ExtractionResponse(
        filename=result.filename,
        file_format=result.file_format,
        text=result.text,
        is_scan=result.is_scan,
        page_count=result.page_count,
        rendered_pages=len(result.images),
        transcribed=result.transcribed,
    )
