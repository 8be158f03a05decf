"""
Integration test configuration.

═══════════════════════════════════════════════════════════════════════════════
REQUIRED API KEYS
═══════════════════════════════════════════════════════════════════════════════

The HTTP tests run offline (the vision transcriber is overridden). Tests that
call a live vision model are **skipped automatically** without a key.

  GOOGLE_API_KEY (or GEMINI_API_KEY)
    • Source:  https://aistudio.google.com/app/apikey
    • Used by: Gemini transcription of rendered scan pages.
    • All tests tagged @pytest.mark.google require this key.

  ANTHROPIC_API_KEY
    • Source:  https://console.anthropic.com/settings/keys
    • Used by: the alternative Claude vision provider.
    • All tests tagged @pytest.mark.anthropic require this key.

Set keys in .env or export them, then:

    pytest tests/integration -m integration
═══════════════════════════════════════════════════════════════════════════════
"""

from __future__ import annotations

import os

import pytest


def _has_key(*names: str) -> bool:
    # Prefer env vars; fall back to loading .env if not already set
    if any(os.environ.get(n) for n in names):
        return True
    try:
        from dotenv import load_dotenv
        load_dotenv()
        return any(os.environ.get(n) for n in names)
    except ImportError:
        return False


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Auto-skip marked tests if the required API key is missing."""
    no_google = not _has_key("GOOGLE_API_KEY", "GEMINI_API_KEY")
    no_anthropic = not _has_key("ANTHROPIC_API_KEY")

    for item in items:
        if no_google and item.get_closest_marker("google"):
            item.add_marker(pytest.mark.skip(reason="GOOGLE_API_KEY not set"), append=False)
        if no_anthropic and item.get_closest_marker("anthropic"):
            item.add_marker(pytest.mark.skip(reason="ANTHROPIC_API_KEY not set"), append=False)
