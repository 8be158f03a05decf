"""Google Gemini client factory.

Used for vision transcription of scanned PDF pages (the default provider).
Requires GOOGLE_API_KEY (or GEMINI_API_KEY) in environment / .env file.
"""

from __future__ import annotations

import google.generativeai as genai

from nese_ingest.config import settings
from nese_ingest.logging import log

_configured = False


def get_gemini_model(model: str | None = None) -> genai.GenerativeModel:
    """Return a configured Gemini GenerativeModel instance."""
    global _configured  # noqa: PLW0603

    if not settings.google_api_key:
        raise RuntimeError(
            "GOOGLE_API_KEY is not set. "
            "Add it to .env or export it before transcribing scanned documents."
        )

    if not _configured:
        genai.configure(api_key=settings.google_api_key)
        _configured = True
        log.info("gemini_client.configured", model=model or settings.gemini_model)

    return genai.GenerativeModel(
        model or settings.gemini_model,
        generation_config={"temperature": 0.0},
    )
