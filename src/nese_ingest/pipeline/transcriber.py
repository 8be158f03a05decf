"""
Vision transcription of scanned pages and merge into the native text.

The transcript is appended after whatever native text the PDF produced, under
its own labelled section, so nothing already recovered is lost. This module
never retries; see orchestrator.ingest for the caller-level retry.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from nese_ingest.config import settings
from nese_ingest.errors import VisionTranscriptionFailed
from nese_ingest.logging import log
from nese_ingest.prompts.transcription import build_instruction
from nese_ingest.schemas.document import ExtractionResult, PageImage


class VisionTranscriber(ABC):
    name: str = "base"

    @abstractmethod
    async def transcribe(self, images: list[PageImage], instruction: str) -> str:
        """Return the text read from *images* (in the order given)."""
        ...


class GeminiTranscriber(VisionTranscriber):
    name = "gemini"

    def __init__(self, model: str | None = None) -> None:
        self.model = model or settings.gemini_model

    async def transcribe(self, images: list[PageImage], instruction: str) -> str:
        from nese_ingest.utils.gemini_client import get_gemini_model

        model = get_gemini_model(self.model)
        parts: list = [{"mime_type": img.mime_type, "data": img.data} for img in images]
        parts.append(instruction)
        response = await model.generate_content_async(parts)
        return response.text


class ClaudeTranscriber(VisionTranscriber):
    name = "anthropic"

    def __init__(self, model: str | None = None) -> None:
        self.model = model or settings.claude_model

    async def transcribe(self, images: list[PageImage], instruction: str) -> str:
        from nese_ingest.utils.llm_client import get_client

        content: list[dict] = [
            {
                "type": "image",
                "source": {"type": "base64", "media_type": img.mime_type, "data": img.b64},
            }
            for img in images
        ]
        content.append({"type": "text", "text": instruction})

        response = await get_client().messages.create(
            model=self.model,
            max_tokens=settings.vision_max_tokens,
            messages=[{"role": "user", "content": content}],
        )
        return "".join(block.text for block in response.content if block.type == "text")


def get_transcriber(provider: str | None = None) -> VisionTranscriber:
    provider = provider or settings.vision_provider
    if provider == "gemini":
        return GeminiTranscriber()
    if provider == "anthropic":
        return ClaudeTranscriber()
    raise ValueError(f"Unknown vision provider: {provider!r}")


def merge_transcript(native_text: str, transcript: str, label: str | None = None) -> str:
    label = label or settings.transcript_label
    section = f"=== {label} ===\n{transcript.strip()}\n"
    if not native_text.strip():
        return section
    return f"{native_text.rstrip()}\n\n{section}"


async def transcribe_scan(result: ExtractionResult, transcriber: VisionTranscriber) -> ExtractionResult:
    """Transcribe a scan-like result's page images and merge the transcript."""
    if not result.is_scan:
        raise ValueError(f"{result.filename} is not scan-like; nothing to transcribe")

    instruction = build_instruction([img.page_number for img in result.images], result.filename)
    log.info("transcriber.start", provider=transcriber.name, pages=len(result.images))

    try:
        transcript = await transcriber.transcribe(result.images, instruction)
    except Exception as exc:
        log.error("transcriber.failed", provider=transcriber.name, error=str(exc))
        raise VisionTranscriptionFailed(result.filename) from exc

    if not transcript or not transcript.strip():
        log.warning("transcriber.empty", provider=transcriber.name)
        raise VisionTranscriptionFailed(result.filename, "the vision model returned no text")

    log.info("transcriber.done", provider=transcriber.name, chars=len(transcript))
    return result.model_copy(update={
        "text": merge_transcript(result.text, transcript),
        "transcript": transcript,
    })
