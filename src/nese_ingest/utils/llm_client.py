"""Singleton async Anthropic client factory (alternative vision provider)."""

from __future__ import annotations

import anthropic

from nese_ingest.config import settings

_client: anthropic.AsyncAnthropic | None = None


def get_client() -> anthropic.AsyncAnthropic:
    global _client  # noqa: PLW0603
    if not settings.anthropic_api_key:
        raise RuntimeError("ANTHROPIC_API_KEY is not set. Add it to .env to use the anthropic provider.")
    if _client is None:
        _client = anthropic.AsyncAnthropic(api_key=settings.anthropic_api_key)
    return _client
